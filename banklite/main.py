"""
FastAPI application factory and entry point.

create_app() builds and configures the FastAPI application:
  1. Logging — stdlib logging at settings.LOG_LEVEL
  2. Lifespan manager — handles startup/shutdown (DB table creation, cleanup)
  3. CORS middleware — separate policies for /api and /actuator
  4. Exception handlers — validation errors, and optionally domain errors
  5. Router registration — accounts, status/welcome, actuator

Running locally:
    uvicorn banklite.main:app --reload
or:
    python -m banklite.main

Interactive docs are served at /swagger-ui.html, the OpenAPI document at
/v3/api-docs.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

import banklite.models  # noqa: F401  (registers tables on Base.metadata)
from banklite.config import Settings, settings as default_settings
from banklite.cors import PathScopedCORSMiddleware, cors_policies
from banklite.database import engine, Base, ensure_sqlite_directory
from banklite.exceptions import register_exception_handlers
from banklite.routers import accounts, health
from banklite.routers.health import DOCS_URL, OPENAPI_URL

logger = logging.getLogger(__name__)

API_DESCRIPTION = """
## BankLite - Account Management API

REST API for managing bank account records:

- **Create** an account with a holder name, opening balance and currency
- **View** a single account or list every account
- **Update** the holder name, balance and currency of an account
- **Delete** an account

Account numbers are generated by the server. Balances are decimals with
two fractional digits.

### Quick links
- Status: `/api/v1/status`
- Health check: `/actuator/health`
- Application info: `/actuator/info`
"""

OPENAPI_TAGS = [
    {
        "name": "Account Management",
        "description": "Bank account creation, viewing, and management operations",
    },
    {
        "name": "Health & Monitoring",
        "description": "Application health checks and system status endpoints",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
      Creates all database tables if they don't exist.

    Shutdown:
      Disposes of the database engine, closing all connections cleanly.
    """
    # --- Startup ---
    logger.info("Starting %s %s", app.title, app.version)
    ensure_sqlite_directory(default_settings.DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    # --- Shutdown ---
    logger.info("Shutting down")
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to build with. Defaults to the module-level
            settings singleton. The database engine always comes from the
            singleton; everything else (CORS, error mapper, metadata) follows
            the settings passed here.
    """
    settings = settings or default_settings

    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title="BankLite API",
        version=settings.APP_VERSION,
        description=API_DESCRIPTION,
        contact={
            "name": "BankLite Development Team",
            "email": "api-support@banklite.com",
            "url": "https://banklite.com/support",
        },
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
        servers=[
            {"url": f"http://localhost:{settings.PORT}", "description": "Development Server"},
            {"url": "https://staging-api.banklite.com", "description": "Staging Server"},
            {"url": "https://api.banklite.com", "description": "Production Server"},
        ],
        openapi_tags=OPENAPI_TAGS,
        docs_url=DOCS_URL,
        openapi_url=OPENAPI_URL,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ---------------------------------------------------------------------------
    # Middleware
    # ---------------------------------------------------------------------------

    app.add_middleware(PathScopedCORSMiddleware, policies=cors_policies(settings))

    # ---------------------------------------------------------------------------
    # Exception handlers
    # ---------------------------------------------------------------------------

    register_exception_handlers(app, settings)
    if not settings.ERROR_MAPPER_ENABLED:
        logger.info("Error mapper disabled: missing accounts will return 500")

    # ---------------------------------------------------------------------------
    # Routers
    # ---------------------------------------------------------------------------

    app.include_router(accounts.router)
    app.include_router(health.router)
    app.include_router(health.actuator_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
