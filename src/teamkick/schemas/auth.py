from pydantic import BaseModel, EmailStr, Field, field_validator
from zxcvbn import zxcvbn

from src.teamkick.core.config import get_settings
from src.teamkick.models.enums import UserRole
from src.teamkick.schemas.account import AccountRead


def validate_password_strength(v: str) -> str:
    """Minimum length plus a zxcvbn entropy estimate."""
    settings = get_settings()
    if len(v) < settings.min_password_length:
        raise ValueError(
            f"Password must be at least {settings.min_password_length} characters"
        )

    result = zxcvbn(v)
    if result["score"] < settings.min_password_score:
        feedback = result.get("feedback", {})
        warning = feedback.get("warning", "")
        suggestions = feedback.get("suggestions", [])

        if warning:
            raise ValueError(f"Weak password: {warning}")
        elif suggestions:
            raise ValueError(f"Weak password: {suggestions[0]}")
        else:
            raise ValueError(
                "Password is too weak. Use a longer password with a mix of characters."
            )
    return v


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)


class LoginResponse(BaseModel):
    account: AccountRead


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(max_length=128)
    full_name: str = Field(min_length=1, max_length=200)
    email: EmailStr | None = None
    role: UserRole = UserRole.PLAYER
    join_code: str | None = Field(default=None, max_length=12)
    agreed_to_terms: bool = False

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator("role")
    @classmethod
    def check_role(cls, v: UserRole) -> UserRole:
        if v == UserRole.SUPERUSER:
            raise ValueError("Role cannot be chosen at registration")
        return v

    @field_validator("username", "full_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v


class RegisterResponse(BaseModel):
    account: AccountRead
    team_id: int | None = None
    email_sent: bool
    email_queued: bool = False
    warnings: list[str] = []
    message: str = "Please check your email to verify your account"


class MessageResponse(BaseModel):
    message: str


class VerifyEmailRequest(BaseModel):
    token: str = Field(min_length=16, max_length=128)


class VerifyEmailResponse(BaseModel):
    message: str
    account: AccountRead


class EmailRequest(BaseModel):
    """Body for enumeration-safe requests (resend verification, password reset)."""

    email: EmailStr


class PasswordResetConfirm(BaseModel):
    token: str = Field(min_length=16, max_length=128)
    password: str = Field(max_length=128)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_strength(v)
