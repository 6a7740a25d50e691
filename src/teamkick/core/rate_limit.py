"""Rate limiting for credential endpoints.

Limits are keyed on the client IP and stored in Redis when REDIS_URL is set,
in process memory otherwise. The limiter is disabled in the testing
environment.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.teamkick.core.config import get_settings
from src.teamkick.core.logging import get_logger

logger = get_logger(__name__)

LOGIN_LIMIT = "5/minute"
REGISTER_LIMIT = "3/minute"
TOKEN_REQUEST_LIMIT = "3/minute"
TOKEN_CONFIRM_LIMIT = "10/minute"
JOIN_CODE_LIMIT = "10/minute"


def get_rate_limit_key(request: Request) -> str:
    """Key on the client IP only.

    Never mix user-controlled values (usernames, join codes) into the key:
    rotating them would create unlimited fresh buckets.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the limiter with Redis storage when configured."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        # slowapi talks to Redis synchronously, so the plain redis:// URL is used
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()
