"""Localized bodies for account emails (English and Spanish)."""

import html
from dataclasses import dataclass

from src.teamkick.core.config import SUPPORTED_EMAIL_LANGUAGES

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #15803d; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)
_LINK_STYLE = "color: #15803d; word-break: break-all;"
_MUTED_STYLE = "color: #666; font-size: 14px;"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str


_COPY: dict[str, dict[str, dict[str, str]]] = {
    "verification": {
        "en": {
            "subject": "Verify your email address",
            "heading": "Verify your email",
            "greeting": "Hello {name},",
            "intro": "Thanks for joining {app}! Please confirm your email address:",
            "button": "Verify email",
            "fallback": "Or copy and paste this link into your browser:",
            "expiry": "This link expires in {hours} hours.",
            "ignore": "If you didn't create an account, you can safely ignore this email.",
        },
        "es": {
            "subject": "Verifica tu dirección de correo",
            "heading": "Verifica tu correo",
            "greeting": "Hola {name},",
            "intro": "¡Gracias por unirte a {app}! Confirma tu dirección de correo:",
            "button": "Verificar correo",
            "fallback": "O copia y pega este enlace en tu navegador:",
            "expiry": "Este enlace caduca en {hours} horas.",
            "ignore": "Si no has creado una cuenta, puedes ignorar este correo.",
        },
    },
    "password_reset": {
        "en": {
            "subject": "Reset your password",
            "heading": "Reset your password",
            "greeting": "Hello {name},",
            "intro": "We received a request to reset the password of your {app} account:",
            "button": "Choose a new password",
            "fallback": "Or copy and paste this link into your browser:",
            "expiry": "This link expires in {hours} hour(s).",
            "ignore": "If you didn't ask for this, you can safely ignore this email.",
        },
        "es": {
            "subject": "Restablece tu contraseña",
            "heading": "Restablece tu contraseña",
            "greeting": "Hola {name},",
            "intro": "Hemos recibido una solicitud para restablecer la contraseña de tu cuenta de {app}:",
            "button": "Elegir una nueva contraseña",
            "fallback": "O copia y pega este enlace en tu navegador:",
            "expiry": "Este enlace caduca en {hours} hora(s).",
            "ignore": "Si no lo has solicitado, puedes ignorar este correo.",
        },
    },
}


def resolve_language(language: str | None, default: str = "es") -> str:
    """Pick a supported language from a code or an Accept-Language value."""
    if language:
        primary = language.split(",")[0].split(";")[0].strip().lower()[:2]
        if primary in SUPPORTED_EMAIL_LANGUAGES:
            return primary
    return default


def _render(
    template: str, language: str, name: str, link: str, hours: int, app_name: str
) -> RenderedEmail:
    copy = _COPY[template][language]
    safe_name = html.escape(name)
    safe_app = html.escape(app_name)
    safe_link = html.escape(link, quote=True)
    greeting = copy["greeting"].format(name=safe_name)
    intro = copy["intro"].format(app=safe_app)
    expiry = copy["expiry"].format(hours=hours)

    body = f"""<!DOCTYPE html>
<html lang="{language}">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h1 style="color: #15803d; margin-bottom: 24px;">{copy["heading"]}</h1>
    <p>{greeting}</p>
    <p>{intro}</p>
    <p style="margin: 32px 0;">
        <a href="{safe_link}" style="{_BUTTON_STYLE}">{copy["button"]}</a>
    </p>
    <p style="{_MUTED_STYLE}">
        {copy["fallback"]}<br>
        <a href="{safe_link}" style="{_LINK_STYLE}">{safe_link}</a>
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">{expiry} {copy["ignore"]}</p>
</body>
</html>"""

    text = "\n\n".join(
        [
            copy["greeting"].format(name=name),
            copy["intro"].format(app=app_name),
            link,
            f"{expiry} {copy['ignore']}",
        ]
    )
    return RenderedEmail(subject=copy["subject"], html=body, text=text)


def render_verification_email(
    language: str, name: str, link: str, hours: int, app_name: str
) -> RenderedEmail:
    return _render("verification", language, name, link, hours, app_name)


def render_password_reset_email(
    language: str, name: str, link: str, hours: int, app_name: str
) -> RenderedEmail:
    return _render("password_reset", language, name, link, hours, app_name)
