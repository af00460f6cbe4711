"""
Custom exception classes and FastAPI exception handlers.

The service and repository layers raise domain-specific errors without
importing HTTP concepts. This module is the only place that turns them
into HTTP responses.

Exception hierarchy:
    BankLiteError (base)
    ├── AccountNotFoundError          — requested account doesn't exist
    └── PersistenceError              — the store returned an error
        └── DuplicateAccountNumberError — account_number unique constraint hit

Only AccountNotFoundError has a mapping, and it is installed only when
ERROR_MAPPER_ENABLED is set. With the mapper off, a missing account escapes
as an unhandled exception and the client sees the server's plain 500.
Persistence errors are never mapped.
"""

import logging
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from banklite.config import Settings
from banklite.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class BankLiteError(Exception):
    """Base exception for all BankLite domain errors."""

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class AccountNotFoundError(BankLiteError):
    """Raised when no account row matches the requested id."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account not found with id: {account_id}")


class PersistenceError(BankLiteError):
    """Raised when the database rejects or fails an operation."""


class DuplicateAccountNumberError(PersistenceError):
    """
    Raised when a save collides on the unique account_number column.

    Account numbers are derived from the current millisecond, so two creates
    landing in the same millisecond produce this. Nothing retries it.
    """

    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(f"Account number {account_number} already exists")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """
    Register exception handlers with the FastAPI application.

    Request validation failures always become 400 with FastAPI's usual
    {"detail": [...]} body. The AccountNotFoundError -> 404 mapping is
    installed only when settings.ERROR_MAPPER_ENABLED is true.

    This is called once from create_app() in main.py.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    if not settings.ERROR_MAPPER_ENABLED:
        return

    @app.exception_handler(AccountNotFoundError)
    async def account_not_found_handler(
        request: Request, exc: AccountNotFoundError
    ) -> JSONResponse:
        logger.info("Mapping missing account %s to 404", exc.account_id)
        body = ErrorResponse(
            timestamp=datetime.now(),
            status=status.HTTP_404_NOT_FOUND,
            error="Not Found",
            message=exc.detail,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=body.model_dump(mode="json"),
        )
