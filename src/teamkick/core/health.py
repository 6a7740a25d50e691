"""Health and metrics endpoints.

``/health`` answers 200 only when every dependency is up. The database is
required; without Redis nobody can sign in, which is reported as degraded.
"""

from typing import Literal

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.teamkick.core.config import get_settings
from src.teamkick.core.db import get_session
from src.teamkick.core.logging import get_logger
from src.teamkick.core.redis import get_redis

logger = get_logger(__name__)

type DependencyState = Literal["healthy", "unhealthy", "not_configured"]


async def database_state() -> DependencyState:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Health check: database unreachable", error=str(e))
        return "unhealthy"
    return "healthy"


async def redis_state() -> DependencyState:
    redis = await get_redis()
    if redis is None:
        return "unhealthy" if get_settings().redis_url else "not_configured"
    try:
        await redis.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Health check: redis unreachable", error=str(e))
        return "unhealthy"
    return "healthy"


def overall_status(database: DependencyState, redis: DependencyState) -> str:
    if database != "healthy":
        return "unhealthy"
    if redis == "unhealthy":
        return "degraded"
    return "healthy"


def setup_health_endpoint(app: FastAPI) -> None:
    """Register ``/health`` and expose Prometheus metrics on ``/metrics``."""

    @app.get("/health", include_in_schema=False)
    async def health() -> JSONResponse:
        database = await database_state()
        redis = await redis_state()
        status = overall_status(database, redis)
        return JSONResponse(
            content={"status": status, "database": database, "redis": redis},
            status_code=200 if status == "healthy" else 503,
        )

    Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app).expose(
        app, endpoint="/metrics", include_in_schema=False
    )
