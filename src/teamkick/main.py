from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.teamkick.api.middlewares import setup_middlewares
from src.teamkick.api.v1.router import api_router
from src.teamkick.core.config import get_settings
from src.teamkick.core.db import dispose_engine
from src.teamkick.core.exceptions import setup_exception_handlers
from src.teamkick.core.health import setup_health_endpoint
from src.teamkick.core.logging import get_logger, setup_logging
from src.teamkick.core.notifications import get_email_sender
from src.teamkick.core.rate_limit import limiter
from src.teamkick.core.redis import close_redis, get_redis

logger = get_logger(__name__)

API_TAGS = [
    {"name": "auth", "description": "Registration, sessions, email verification, passwords"},
    {"name": "teams", "description": "Teams and join codes"},
    {"name": "claims", "description": "Roster entry claims and their review"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("TeamKick API starting", env=settings.app_env)

    # A missing Redis should show up in the startup logs, not on first login
    await get_redis()

    yield

    await close_redis()
    await dispose_engine()
    get_email_sender().shutdown()
    logger.info("TeamKick API stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    docs = settings.enable_openapi

    app = FastAPI(
        title=settings.app_name,
        description="Team membership, onboarding and roster claims",
        version="0.1.0",
        openapi_tags=API_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.limiter = limiter

    setup_exception_handlers(app)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
    setup_middlewares(app, settings)
    setup_health_endpoint(app)
    app.include_router(api_router)
    return app


app = create_app()
