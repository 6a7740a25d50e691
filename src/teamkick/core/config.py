from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_EMAIL_LANGUAGES = ("en", "es")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "TeamKick"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False  # GDPR: keep False in production
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Sessions
    session_secret_key: str
    session_cookie_name: str = "teamkick_session"
    session_cookie_secure: bool = True
    session_ttl_hours: int = 24 * 7

    # Passwords (Argon2id)
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 4
    min_password_length: int = 6
    min_password_score: int = 2  # zxcvbn 0-4

    # Single-use tokens
    token_entropy_bytes: int = 32
    verification_token_expire_hours: int = 24
    password_reset_token_expire_hours: int = 1

    # Join codes
    join_code_length: int = 6
    join_code_max_attempts: int = 10

    @field_validator("session_secret_key")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "SESSION_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("SESSION_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("join_code_length")
    @classmethod
    def validate_join_code_length(cls, v: int) -> int:
        if not 4 <= v <= 12:
            raise ValueError("JOIN_CODE_LENGTH must be between 4 and 12")
        return v

    @field_validator("default_email_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        if v not in SUPPORTED_EMAIL_LANGUAGES:
            raise ValueError(f"DEFAULT_EMAIL_LANGUAGE must be one of {SUPPORTED_EMAIL_LANGUAGES}")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, the session cookie is sent with credentials."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """APP_URL ends up in email links, so it must be on an allowed domain."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        hostname = urlparse(v).hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v.rstrip("/")

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    default_email_language: str = "es"
    app_url: str = "http://localhost:3000"  # Frontend URL for email links

    # Redis (sessions live here)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"
    redis_pool_size: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
