"""Random tokens, expiry helpers and team join codes."""

import secrets
from datetime import datetime, timedelta
from hashlib import sha256

from src.teamkick.core.config import get_settings
from src.teamkick.models.base import utc_now

# No 0/O, 1/I/L: codes are read aloud and typed by hand
JOIN_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"


def issue_token(nbytes: int | None = None) -> str:
    """Return a URL-safe token with ``nbytes`` of entropy from the OS CSPRNG."""
    if nbytes is None:
        nbytes = get_settings().token_entropy_bytes
    return secrets.token_urlsafe(nbytes)


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for storage and lookups."""
    return sha256(token.encode()).hexdigest()


def expiry_from_now(hours: float, now: datetime | None = None) -> datetime:
    """Naive UTC timestamp ``hours`` from now."""
    return (now or utc_now()) + timedelta(hours=hours)


def is_expired(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """A missing expiry counts as expired."""
    if expires_at is None:
        return True
    if expires_at.tzinfo is not None:
        expires_at = expires_at.replace(tzinfo=None) - (expires_at.utcoffset() or timedelta())
    return expires_at <= (now or utc_now())


def generate_join_code(length: int | None = None) -> str:
    """Random join code over JOIN_CODE_ALPHABET. Uniqueness is the caller's job."""
    if length is None:
        length = get_settings().join_code_length
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))


def normalize_join_code(code: str) -> str:
    return code.strip().upper()
