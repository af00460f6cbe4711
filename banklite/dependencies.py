"""
FastAPI dependencies shared by the routers.

    get_db (request session)
        └── get_account_repository (AccountRepository bound to that session)

A handler that declares get_account_repository gets a repository over the
same session every other dependency in the request sees, so the session's
commit/rollback in get_db covers the whole operation.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from banklite.config import Settings
from banklite.database import get_db
from banklite.repositories.account_repository import AccountRepository


async def get_account_repository(
    db: AsyncSession = Depends(get_db),
) -> AccountRepository:
    return AccountRepository(db)


def get_settings(request: Request) -> Settings:
    """The Settings instance the running app was built with."""
    return request.app.state.settings
