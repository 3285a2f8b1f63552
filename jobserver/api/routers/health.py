"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: sqlalchemy, jobserver.api.deps
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from jobserver.api.deps.dependencies import ServiceCache, get_service_cache

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    workers: int | None = None


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(services: ServiceCache = Depends(get_service_cache)) -> HealthResponse:
    """Basic health check, with the number of live in-process workers."""
    pool = services.worker_pool
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        workers=pool.running if pool is not None else None,
    )


@router.get("/db", response_model=HealthResponse)
async def health_check_db(services: ServiceCache = Depends(get_service_cache)):
    """Database health check."""
    try:
        async with services.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "message": "Database unreachable"},
        )
    return HealthResponse(status="healthy", message="Database connection OK")
