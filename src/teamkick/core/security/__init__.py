"""Security primitives - password hashing and single-use tokens.

Re-exports the functions services need.
"""

from src.teamkick.core.security.passwords import (
    DUMMY_PASSWORD_HASH,
    Argon2Hash,
    PasswordHash,
    ScryptHash,
    hash_password,
    needs_rehash,
    parse_password_hash,
    verify_password,
)
from src.teamkick.core.security.tokens import (
    JOIN_CODE_ALPHABET,
    expiry_from_now,
    generate_join_code,
    hash_token,
    is_expired,
    issue_token,
    normalize_join_code,
)

__all__ = [
    # Passwords
    "DUMMY_PASSWORD_HASH",
    "Argon2Hash",
    "PasswordHash",
    "ScryptHash",
    "hash_password",
    "needs_rehash",
    "parse_password_hash",
    "verify_password",
    # Tokens
    "JOIN_CODE_ALPHABET",
    "expiry_from_now",
    "generate_join_code",
    "hash_token",
    "is_expired",
    "issue_token",
    "normalize_join_code",
]
