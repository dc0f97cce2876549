"""Liveness and readiness probes.

GET /api/v1/health/ answers 200 whenever the process serves requests.
GET /api/v1/health/ready counts rows in the cafes table, so it reports 503
both when the database is unreachable and when migrations have not run.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from cafe_api.infrastructure.database import current_database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": "cafe-api"}


@router.get("/ready")
async def readiness():
    database = current_database()
    if database is None:
        return _not_ready("database_not_configured")
    try:
        cafes = await database.count_cafes()
    except Exception as e:
        logger.error("Readiness check failed", extra={"error_code": type(e).__name__})
        return _not_ready("database_unavailable")
    return {"status": "ready", "cafes": cafes}


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
