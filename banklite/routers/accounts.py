"""
Accounts router — bank account management endpoints.

    POST   /api/v1/accounts        — Create a new account (201)
    GET    /api/v1/accounts        — List all accounts
    GET    /api/v1/accounts/{id}   — Get one account
    PUT    /api/v1/accounts/{id}   — Replace holder name, balance, currency
    DELETE /api/v1/accounts/{id}   — Delete an account (204)

Request bodies are validated by AccountRequest before the handler runs;
failures return 400 without touching the database.

A missing id raises AccountNotFoundError out of the service. Unless the
error mapper is enabled it is not caught anywhere, and the client gets 500.
"""

from fastapi import APIRouter, Depends, Response, status

from banklite.dependencies import get_account_repository
from banklite.repositories.account_repository import AccountRepository
from banklite.schemas.account import AccountRequest, AccountResponse
from banklite.services import account_service

router = APIRouter(prefix="/api/v1/accounts", tags=["Account Management"])


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new account",
)
async def create_account(
    request: AccountRequest,
    repository: AccountRepository = Depends(get_account_repository),
):
    """
    Create a new account.

    The account number is generated by the server; any id, accountNumber or
    createdAt in the body is ignored.
    """
    return await account_service.create_account(repository, request)


@router.get(
    "/{account_id}",
    response_model=AccountResponse,
    summary="Get account by ID",
)
async def get_account(
    account_id: int,
    repository: AccountRepository = Depends(get_account_repository),
):
    return await account_service.get_account(repository, account_id)


@router.get(
    "",
    response_model=list[AccountResponse],
    summary="Get all accounts",
)
async def get_all_accounts(
    repository: AccountRepository = Depends(get_account_repository),
):
    return await account_service.get_all_accounts(repository)


@router.put(
    "/{account_id}",
    response_model=AccountResponse,
    summary="Update account",
)
async def update_account(
    account_id: int,
    request: AccountRequest,
    repository: AccountRepository = Depends(get_account_repository),
):
    """
    Overwrite the holder name, balance and currency of an account.

    The account number, id and creation time never change.
    """
    return await account_service.update_account(repository, account_id, request)


@router.delete(
    "/{account_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete account",
)
async def delete_account(
    account_id: int,
    repository: AccountRepository = Depends(get_account_repository),
):
    """Delete an account. There is no balance check and no soft-delete."""
    await account_service.delete_account(repository, account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
