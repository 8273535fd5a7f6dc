"""
Health check endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging

from roomescape.core.database import get_session
from roomescape.schemas.response import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/live")
async def liveness() -> Any:
    """
    Kubernetes liveness probe
    """
    return {"status": "alive", "service": "roomescape-api"}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_session)) -> Any:
    """
    Kubernetes readiness probe - checks the database
    """
    database_ok = False
    try:
        result = await db.execute(text("SELECT 1"))
        database_ok = result.scalar() == 1
    except SQLAlchemyError as e:
        logger.error(f"Database readiness check failed: {e}")

    health = HealthResponse(
        status="ready" if database_ok else "not_ready",
        services={"database": "up" if database_ok else "down"}
    )
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content=health.model_dump(mode="json")
    )
