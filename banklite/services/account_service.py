"""
Account service — business logic for bank account operations.

This module handles:
  - Account creation (with account number generation)
  - Account retrieval (single or list)
  - Account update (holder name, balance and currency only)
  - Account deletion (unconditional, any balance)
  - Mapping entities to the public AccountResponse

Every function takes the AccountRepository for the current request as its
first argument. The router builds that repository from the request's
session, so all calls made by one operation share one transaction.

Errors are raised, never caught here: AccountNotFoundError for a missing id,
and whatever the repository raises for database failures.

Account numbers:
  "ACC" followed by the current time in epoch milliseconds. Within one
  process the millisecond value is bumped past the last one issued, so
  back-to-back creates never share a number. Separate processes can still
  collide; the second save then fails with DuplicateAccountNumberError and
  is not retried.
"""

import logging
import threading
import time

from banklite.exceptions import AccountNotFoundError
from banklite.models.account import Account, Currency
from banklite.repositories.account_repository import AccountRepository
from banklite.schemas.account import AccountRequest, AccountResponse

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_PREFIX = "ACC"

_last_issued_ms = 0
_issue_lock = threading.Lock()


def generate_account_number() -> str:
    """
    Return "ACC" + the current wall-clock time in whole epoch milliseconds.

    If the clock has not moved past the last number this process issued,
    the last value plus one is used instead.
    """
    global _last_issued_ms
    with _issue_lock:
        now_ms = time.time_ns() // 1_000_000
        _last_issued_ms = max(now_ms, _last_issued_ms + 1)
        return f"{ACCOUNT_NUMBER_PREFIX}{_last_issued_ms}"


def to_response(account: Account) -> AccountResponse:
    """Map an Account entity to its public representation (no updated_at)."""
    return AccountResponse(
        id=account.id,
        account_holder_name=account.account_holder_name,
        account_number=account.account_number,
        balance=account.balance,
        currency=account.currency,
        created_at=account.created_at,
    )


async def create_account(
    repository: AccountRepository,
    request: AccountRequest,
) -> AccountResponse:
    """
    Create a new account from a validated request.

    Args:
        repository: Account repository bound to the request's session.
        request: Holder name, balance and currency.

    Returns:
        The stored account as an AccountResponse.

    Raises:
        DuplicateAccountNumberError: The generated number already exists.
        PersistenceError: Any other database failure.
    """
    account = Account(
        account_holder_name=request.account_holder_name,
        account_number=generate_account_number(),
        balance=request.balance,
        currency=request.currency,
    )
    saved = await repository.save(account)
    logger.info("Created account id=%s number=%s", saved.id, saved.account_number)
    return to_response(saved)


async def get_account(repository: AccountRepository, account_id: int) -> AccountResponse:
    """
    Get a single account.

    Raises:
        AccountNotFoundError: If no account has this id.
    """
    account = await _load(repository, account_id)
    return to_response(account)


async def get_all_accounts(repository: AccountRepository) -> list[AccountResponse]:
    """List every account, in whatever order the repository returns them."""
    accounts = await repository.find_all()
    logger.debug("Listing %d accounts", len(accounts))
    return [to_response(account) for account in accounts]


async def update_account(
    repository: AccountRepository,
    account_id: int,
    request: AccountRequest,
) -> AccountResponse:
    """
    Overwrite an account's holder name, balance and currency.

    id, account_number and created_at are left untouched.

    Raises:
        AccountNotFoundError: If no account has this id.
    """
    account = await _load(repository, account_id)

    account.account_holder_name = request.account_holder_name
    account.balance = request.balance
    account.currency = request.currency

    updated = await repository.save(account)
    logger.info("Updated account id=%s", updated.id)
    return to_response(updated)


async def delete_account(repository: AccountRepository, account_id: int) -> None:
    """
    Delete an account regardless of its balance.

    Raises:
        AccountNotFoundError: If no account has this id. delete_by_id is
            not called in that case.
    """
    if not await repository.exists_by_id(account_id):
        logger.warning("Delete requested for missing account id=%s", account_id)
        raise AccountNotFoundError(account_id)
    await repository.delete_by_id(account_id)
    logger.info("Deleted account id=%s", account_id)


# ---------------------------------------------------------------------------
# Lookup helpers (not exposed over HTTP)
# ---------------------------------------------------------------------------

async def find_by_account_number(
    repository: AccountRepository,
    account_number: str,
) -> AccountResponse | None:
    account = await repository.find_by_account_number(account_number)
    return to_response(account) if account is not None else None


async def search_by_holder_name(
    repository: AccountRepository,
    fragment: str,
) -> list[AccountResponse]:
    accounts = await repository.find_by_account_holder_name_containing(fragment)
    return [to_response(account) for account in accounts]


async def get_accounts_by_currency(
    repository: AccountRepository,
    currency: Currency,
) -> list[AccountResponse]:
    accounts = await repository.find_by_currency(currency)
    return [to_response(account) for account in accounts]


async def _load(repository: AccountRepository, account_id: int) -> Account:
    account = await repository.find_by_id(account_id)
    if account is None:
        logger.warning("Account id=%s not found", account_id)
        raise AccountNotFoundError(account_id)
    return account
