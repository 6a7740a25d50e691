"""Account model - identity, credentials and single-use token slots."""

from datetime import datetime

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.teamkick.models.base import utc_now
from src.teamkick.models.enums import UserRole


class Account(SQLModel, table=True):
    """A user account.

    Token columns hold the SHA256 of the emailed token, never the token itself.
    Each token column is set together with its expiry and cleared together.
    """

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            "(verification_token_hash IS NULL) = (verification_token_expires_at IS NULL)",
            name="ck_accounts_verification_token_pair",
        ),
        CheckConstraint(
            "(reset_password_token_hash IS NULL) = (reset_password_token_expires_at IS NULL)",
            name="ck_accounts_reset_token_pair",
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(max_length=100, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    full_name: str = Field(max_length=200)
    email: str | None = Field(default=None, max_length=255, unique=True, index=True)
    role: str = Field(default=UserRole.PLAYER.value, max_length=20)
    is_email_verified: bool = Field(default=False)
    verification_token_hash: str | None = Field(default=None, max_length=64, index=True)
    verification_token_expires_at: datetime | None = Field(default=None)
    reset_password_token_hash: str | None = Field(default=None, max_length=64, index=True)
    reset_password_token_expires_at: datetime | None = Field(default=None)
    onboarding_completed: bool = Field(default=False)
    terms_accepted_at: datetime | None = Field(default=None)
    last_login_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
