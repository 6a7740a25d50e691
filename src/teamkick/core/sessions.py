"""Server-side sessions backed by Redis.

A session is an opaque random id handed to the browser in a cookie. Redis maps
an HMAC-SHA256 of that id, keyed with the session secret, to the account id
and nothing else; everything else about
the account is re-read from the database on each request. Each account also
keeps a set of its session keys so all of them can be revoked at once.
"""

import hashlib
import hmac

from redis.asyncio import Redis

from src.teamkick.core.config import get_settings
from src.teamkick.core.exceptions import SessionStoreUnavailableError
from src.teamkick.core.logging import get_logger
from src.teamkick.core.redis import get_redis
from src.teamkick.core.security.tokens import issue_token

logger = get_logger(__name__)

PREFIX_SESSION = "session"
PREFIX_ACCOUNT_SESSIONS = "account_sessions"


def _account_key(account_id: int) -> str:
    return f"{PREFIX_ACCOUNT_SESSIONS}:{account_id}"


class SessionStore:
    """Create, read and revoke sessions.

    ``redis`` may be None when Redis is unavailable: reads then behave as
    "not logged in" and creating a session raises SessionStoreUnavailableError.
    """

    def __init__(self, redis: Redis | None, ttl_seconds: int, secret_key: str):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self._secret = secret_key.encode()

    def _session_key(self, session_id: str) -> str:
        digest = hmac.new(self._secret, session_id.encode(), hashlib.sha256).hexdigest()
        return f"{PREFIX_SESSION}:{digest}"

    async def create(self, account_id: int) -> str:
        """Start a session for the account and return its id."""
        if self.redis is None:
            logger.error("Cannot create session, Redis unavailable", account_id=account_id)
            raise SessionStoreUnavailableError()

        session_id = issue_token()
        key = self._session_key(session_id)
        account_key = _account_key(account_id)

        pipe = self.redis.pipeline()
        pipe.setex(key, self.ttl_seconds, str(account_id))
        pipe.sadd(account_key, key)
        pipe.expire(account_key, self.ttl_seconds)
        await pipe.execute()

        logger.info("Session created", account_id=account_id)
        return session_id

    async def get_account_id(self, session_id: str) -> int | None:
        """Return the account id stored for the session, or None."""
        if self.redis is None or not session_id:
            return None
        value = await self.redis.get(self._session_key(session_id))
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            logger.warning("Discarding malformed session payload")
            await self.redis.delete(self._session_key(session_id))
            return None

    async def delete(self, session_id: str) -> bool:
        """End one session. Returns True if it existed."""
        if self.redis is None or not session_id:
            return False
        key = self._session_key(session_id)
        account_id = await self.redis.get(key)
        pipe = self.redis.pipeline()
        pipe.delete(key)
        if account_id is not None:
            pipe.srem(f"{PREFIX_ACCOUNT_SESSIONS}:{account_id}", key)
        deleted, *_ = await pipe.execute()
        return bool(deleted)

    async def revoke_all(self, account_id: int) -> int:
        """End every session of the account. Returns the number removed."""
        if self.redis is None:
            logger.warning("Cannot revoke sessions, Redis unavailable", account_id=account_id)
            return 0
        account_key = _account_key(account_id)
        keys = await self.redis.smembers(account_key)  # type: ignore[misc]
        if not keys:
            return 0
        removed = await self.redis.delete(*keys, account_key)
        # account_key itself is included in the delete count
        count = max(int(removed) - 1, 0)
        logger.info("Sessions revoked", account_id=account_id, count=count)
        return count


async def get_session_store() -> SessionStore:
    """Build the store on the shared Redis client."""
    settings = get_settings()
    return SessionStore(
        await get_redis(),
        ttl_seconds=settings.session_ttl_hours * 3600,
        secret_key=settings.session_secret_key,
    )
