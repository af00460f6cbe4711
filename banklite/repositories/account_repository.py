"""
Account repository — persistence operations over the accounts table.

The repository wraps the request's AsyncSession. It never commits: the
session's owner (get_db) commits once the whole request has succeeded, so
every call made while handling one request lands in one transaction.

Database failures are translated here so the layers above never see
SQLAlchemy exceptions:
  - a collision on the unique account_number column -> DuplicateAccountNumberError
  - anything else SQLAlchemy raises                  -> PersistenceError
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from banklite.exceptions import DuplicateAccountNumberError, PersistenceError
from banklite.models.account import Account, Currency

logger = logging.getLogger(__name__)


class AccountRepository:
    """CRUD plus lookup helpers for Account rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, account: Account) -> Account:
        """
        Insert or update an account and flush it to the database.

        A new account (no id yet) gets created_at stamped and its id
        assigned by the flush. updated_at is rewritten on every call.

        Raises:
            DuplicateAccountNumberError: account_number already exists.
            PersistenceError: any other database failure.
        """
        now = datetime.now(timezone.utc)
        if account.id is None:
            account.created_at = now
        account.updated_at = now
        self.db.add(account)

        try:
            await self.db.flush()
        except IntegrityError as exc:
            if "account_number" in str(exc.orig):
                raise DuplicateAccountNumberError(account.account_number) from exc
            raise PersistenceError(f"Failed to save account: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to save account: {exc}") from exc

        logger.debug("Saved account id=%s", account.id)
        return account

    async def find_by_id(self, account_id: int) -> Account | None:
        result = await self._execute(select(Account).where(Account.id == account_id))
        return result.scalar_one_or_none()

    async def find_all(self) -> list[Account]:
        result = await self._execute(select(Account).order_by(Account.id))
        return list(result.scalars().all())

    async def exists_by_id(self, account_id: int) -> bool:
        result = await self._execute(select(Account.id).where(Account.id == account_id))
        return result.scalar_one_or_none() is not None

    async def delete_by_id(self, account_id: int) -> None:
        """Delete the row with this id. A missing id deletes nothing."""
        await self._execute(delete(Account).where(Account.id == account_id))

    async def find_by_account_number(self, account_number: str) -> Account | None:
        result = await self._execute(
            select(Account).where(Account.account_number == account_number)
        )
        return result.scalar_one_or_none()

    async def find_by_account_holder_name_containing(self, fragment: str) -> list[Account]:
        """
        Accounts whose holder name contains the fragment, case-sensitively.

        Matches with instr(), so % and _ in the fragment are literal.
        """
        result = await self._execute(
            select(Account)
            .where(func.instr(Account.account_holder_name, fragment) > 0)
            .order_by(Account.id)
        )
        return list(result.scalars().all())

    async def find_by_currency(self, currency: Currency) -> list[Account]:
        result = await self._execute(
            select(Account).where(Account.currency == currency).order_by(Account.id)
        )
        return list(result.scalars().all())

    async def _execute(self, statement):
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Database query failed: {exc}") from exc
