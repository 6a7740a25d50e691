"""Structured logging (structlog over the stdlib root logger).

Request and account context live in contextvars and are merged into every
event. Credentials never reach the output: ``redact_secrets`` masks them
before rendering.
"""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Event keys whose values are replaced before rendering
SECRET_KEYS = frozenset(
    {"password", "new_password", "password_hash", "token", "session_id", "join_code"}
)
REDACTED = "[redacted]"

_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "resend")


def redact_secrets(
    logger: object, method_name: str, event_dict: structlog.typing.EventDict
) -> structlog.typing.EventDict:
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _renderer(debug: bool) -> structlog.typing.Processor:
    if debug:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def setup_logging(debug: bool = False) -> None:
    """Console output in debug mode, one JSON object per line otherwise."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(debug),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_account_context(account_id: int, email: str | None = None) -> None:
    """Attach the signed-in account to every later event of this request.

    The email is only attached when ``log_user_emails`` is enabled.
    """
    bind_contextvars(account_id=account_id)
    shown = loggable_email(email)
    if shown:
        bind_contextvars(account_email=shown)


def loggable_email(email: str | None) -> str | None:
    """Return the email if the deployment allows logging it, otherwise None."""
    from src.teamkick.core.config import get_settings

    if email and get_settings().log_user_emails:
        return email
    return None


def clear_request_context() -> None:
    clear_contextvars()
