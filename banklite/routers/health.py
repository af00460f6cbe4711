"""
Health and status endpoints.

Two groups:

  Developer-facing, under /api/v1:
    GET /api/v1/status   — Application status plus runtime information
    GET /api/v1/welcome  — Welcome message, feature list, doc links

  Probe-facing, under /actuator (CORS open to any origin, GET only):
    GET /actuator/health — Database connectivity check (503 when down)
    GET /actuator/info   — Application name, version and environment

The /api/v1 payloads are meant for humans poking at the API. Their field
names are stable, their layout is not a contract.
"""

import logging
import os
import platform
from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from banklite.config import Settings
from banklite.database import get_db
from banklite.dependencies import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Health & Monitoring"])
actuator_router = APIRouter(prefix="/actuator", tags=["Health & Monitoring"])

DOCS_URL = "/swagger-ui.html"
OPENAPI_URL = "/v3/api-docs"


def _timestamp() -> str:
    return datetime.now().isoformat()


def format_bytes(size: int) -> str:
    """Format a byte count as e.g. "512 B", "1.50 KB", "256.00 MB", "1.50 GB"."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    if size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MB"
    return f"{size / (1024 * 1024 * 1024):.2f} GB"


def _system_info() -> dict:
    """
    Runtime details for the status payload.

    Memory figures come from sysconf and are host totals. Platforms without
    SC_PHYS_PAGES / SC_AVPHYS_PAGES raise here, which the status endpoint
    reports as DOWN.
    """
    page_size = os.sysconf("SC_PAGE_SIZE")
    return {
        "runtimeVersion": platform.python_version(),
        "totalMemory": format_bytes(page_size * os.sysconf("SC_PHYS_PAGES")),
        "freeMemory": format_bytes(page_size * os.sysconf("SC_AVPHYS_PAGES")),
        "processors": os.cpu_count(),
    }


@router.get(
    "/status",
    summary="Get application status",
    responses={500: {"description": "Application encountered an error"}},
)
async def get_application_status(settings: Settings = Depends(get_settings)):
    """
    Basic health check with version, timestamp and runtime information.

    Returns 200 with status "UP", or 500 with status "DOWN" and the error
    message if gathering the information fails.
    """
    try:
        return {
            "application": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "UP",
            "timestamp": _timestamp(),
            "system": _system_info(),
            "endpoints": {
                "swagger": DOCS_URL,
                "openApiJson": OPENAPI_URL,
                "health": "/actuator/health",
                "info": "/actuator/info",
            },
        }
    except Exception as exc:
        logger.exception("Status check failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "application": settings.APP_NAME,
                "status": "DOWN",
                "error": str(exc),
                "timestamp": _timestamp(),
            },
        )


@router.get("/welcome", summary="Welcome message and API overview")
async def get_welcome_message(settings: Settings = Depends(get_settings)):
    return {
        "message": "Welcome to BankLite Banking API",
        "description": "Account management REST API",
        "version": settings.APP_VERSION,
        "timestamp": _timestamp(),
        "features": {
            "accountManagement": "Create, view, update and delete bank accounts",
            "multiCurrency": "Hold balances in USD, EUR, GBP and other supported currencies",
            "validation": "Requests are validated before anything is stored",
        },
        "documentation": {
            "swaggerUI": DOCS_URL,
            "openApiJson": OPENAPI_URL,
            "actuatorHealth": "/actuator/health",
            "actuatorInfo": "/actuator/info",
        },
        "quickStart": {
            "step1": f"Visit {DOCS_URL} for interactive API documentation",
            "step2": "Check /actuator/health for application health status",
            "step3": "POST /api/v1/accounts to open your first account",
            "step4": "Explore the remaining endpoints using Swagger UI",
        },
    }


@actuator_router.get("/health", summary="Database-backed health probe")
async def actuator_health(db: AsyncSession = Depends(get_db)):
    """
    Run SELECT 1 against the database.

    200 with status "UP" when it succeeds, 503 with status "DOWN" when it
    doesn't, so load balancers stop routing to this instance.
    """
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health probe failed")
        await db.rollback()
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "DOWN", "components": {"db": {"status": "DOWN"}}},
        )
    return {"status": "UP", "components": {"db": {"status": "UP"}}}


@actuator_router.get("/info", summary="Application information")
async def actuator_info(settings: Settings = Depends(get_settings)):
    return {
        "app": {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }
    }
