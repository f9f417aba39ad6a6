"""
Health Check Endpoints.

- /health: Liveness check (process running)
- /health/ready: Readiness check (database answers within the configured timeout)
- /health/detailed: Application info plus database and schema status
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import inspect, text

from meeting_notes.backend.core.config import get_app_config
from meeting_notes.backend.core.database import get_session_factory
from meeting_notes.backend.core.logging import get_logger
from meeting_notes.backend.core.utils import utc_now
from meeting_notes.backend.models.note import Note

router = APIRouter()
logger = get_logger(__name__)


def _unhealthy(error: str) -> dict[str, Any]:
    return {"status": "unhealthy", "error": error}


async def check_database() -> dict[str, Any]:
    """Run SELECT 1 and report the round-trip latency."""
    try:
        start = time.perf_counter()
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        latency_ms = int((time.perf_counter() - start) * 1000)
    except Exception as e:
        logger.warning("Database health check failed", error=str(e))
        return _unhealthy(str(e))

    return {"status": "healthy", "latency_ms": latency_ms}


async def check_notes_table() -> dict[str, Any]:
    """Report whether the notes table exists, i.e. migrations have been applied."""
    table = Note.__tablename__
    try:
        async with get_session_factory()() as session:
            connection = await session.connection()
            exists = await connection.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table(table)
            )
    except Exception as e:
        logger.warning("Schema health check failed", error=str(e))
        return _unhealthy(str(e))

    if not exists:
        return _unhealthy(f"table '{table}' is missing; run migrations")
    return {"status": "healthy", "table": table}


async def _with_timeout(check, timeout: float) -> dict[str, Any]:
    try:
        async with asyncio.timeout(timeout):
            return await check()
    except TimeoutError:
        return _unhealthy(f"timed out after {timeout}s")


def _overall(checks: dict[str, dict[str, Any]]) -> str:
    if any(check.get("status") == "unhealthy" for check in checks.values()):
        return "unhealthy"
    return "healthy"


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 while the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 when the database is unreachable or does not answer within
    application.timeouts.database seconds.
    """
    timeout = get_app_config().application.timeouts.database
    checks = {"database": await _with_timeout(check_database, timeout)}
    status = _overall(checks)
    body = {"status": status, "checks": checks, "timestamp": utc_now().isoformat()}

    if status == "unhealthy":
        logger.warning("Readiness check failed", checks=checks)
        raise HTTPException(status_code=503, detail=body)

    return body


@router.get("/health/detailed")
async def detailed_health_check() -> dict[str, Any]:
    """Always 200; the overall status reflects the individual checks."""
    app_settings = get_app_config().application
    timeout = app_settings.timeouts.database

    checks = {
        "database": await _with_timeout(check_database, timeout),
        "schema": await _with_timeout(check_notes_table, timeout),
    }

    return {
        "status": _overall(checks),
        "application": {
            "name": app_settings.name,
            "env": app_settings.environment,
            "debug": app_settings.debug,
            "version": app_settings.version,
        },
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
