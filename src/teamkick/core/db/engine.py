"""Process-wide async engine."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.teamkick.core.config import get_settings

_engine: AsyncEngine | None = None


def _engine_options(database_url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True}
    # SQLite (tests, local runs) has no connection pool to size
    if not database_url.startswith("sqlite"):
        settings = get_settings()
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return options


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        url = get_settings().database_url
        _engine = create_async_engine(url, **_engine_options(url))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections; the next get_engine() builds a new engine."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
