"""Password hashing and verification.

New hashes are Argon2id strings produced by argon2-cffi. Accounts created by
earlier releases may still carry scrypt hashes in one of two layouts:

* ``<hex derived key>.<salt>``
* ``<salt>:<hex derived key>``

Both are parsed into an explicit variant and verified with a constant-time
comparison. A successful login with a legacy hash is the caller's cue to
rehash (see ``needs_rehash``).
"""

import hashlib
import hmac
from dataclasses import dataclass

import argon2

from src.teamkick.core.config import get_settings

# Parameters used when the legacy hashes were produced
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_KEY_LENGTH = 64


@dataclass(frozen=True)
class Argon2Hash:
    encoded: str


@dataclass(frozen=True)
class ScryptHash:
    derived_key: bytes
    salt: str


type PasswordHash = Argon2Hash | ScryptHash


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
        type=argon2.Type.ID,
    )


_password_hasher = _create_password_hasher()


def _split_pair(value: str, separator: str) -> tuple[str, str] | None:
    parts = value.split(separator)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


def parse_password_hash(encoded: str | None) -> PasswordHash | None:
    """Parse a stored hash into its variant. Returns None if malformed."""
    if not encoded:
        return None

    if encoded.startswith("$argon2"):
        return Argon2Hash(encoded)

    if "." in encoded:
        pair = _split_pair(encoded, ".")
        if pair is None:
            return None
        hex_key, salt = pair
    elif ":" in encoded:
        pair = _split_pair(encoded, ":")
        if pair is None:
            return None
        salt, hex_key = pair
    else:
        return None

    try:
        derived_key = bytes.fromhex(hex_key)
    except ValueError:
        return None
    if not derived_key:
        return None
    return ScryptHash(derived_key=derived_key, salt=salt)


def _scrypt(password: str, salt: str, key_length: int) -> bytes:
    return hashlib.scrypt(
        password.encode(),
        salt=salt.encode(),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=key_length,
    )


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, encoded: str | None) -> bool:
    """Verify a password against any supported hash. Never raises."""
    parsed = parse_password_hash(encoded)
    if parsed is None:
        return False

    if isinstance(parsed, Argon2Hash):
        try:
            return _password_hasher.verify(parsed.encoded, password)
        except (argon2.exceptions.VerificationError, argon2.exceptions.InvalidHashError):
            return False

    candidate = _scrypt(password, parsed.salt, len(parsed.derived_key))
    return hmac.compare_digest(candidate, parsed.derived_key)


def needs_rehash(encoded: str | None) -> bool:
    """True for legacy hashes and Argon2 hashes with outdated parameters."""
    parsed = parse_password_hash(encoded)
    if parsed is None:
        return False
    if isinstance(parsed, ScryptHash):
        return True
    try:
        return _password_hasher.check_needs_rehash(parsed.encoded)
    except argon2.exceptions.InvalidHashError:
        return False


# Verified against when the username is unknown so both paths cost the same
DUMMY_PASSWORD_HASH = hash_password("teamkick-timing-equalizer")
