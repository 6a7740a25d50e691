"""Notification utilities - email."""

from src.teamkick.core.notifications.email import EmailSender, EmailSendResult, get_email_sender
from src.teamkick.core.notifications.templates import (
    RenderedEmail,
    render_password_reset_email,
    render_verification_email,
    resolve_language,
)

__all__ = [
    "EmailSendResult",
    "EmailSender",
    "RenderedEmail",
    "get_email_sender",
    "render_password_reset_email",
    "render_verification_email",
    "resolve_language",
]
