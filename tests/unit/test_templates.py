"""Tests for localized email templates."""

import pytest

from src.teamkick.core.notifications import (
    render_password_reset_email,
    render_verification_email,
    resolve_language,
)

pytestmark = pytest.mark.unit

LINK = "http://localhost:3000/verify-email?token=abc123"


class TestResolveLanguage:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("en", "en"),
            ("es", "es"),
            ("en-US,en;q=0.9", "en"),
            ("ES-es", "es"),
            ("fr-FR,fr;q=0.9", "es"),
            ("", "es"),
            (None, "es"),
        ],
    )
    def test_resolve(self, value, expected):
        assert resolve_language(value) == expected

    def test_custom_default(self):
        assert resolve_language("de", default="en") == "en"


class TestVerificationEmail:
    def test_english_copy(self):
        email = render_verification_email("en", "Alice", LINK, 24, "TeamKick")

        assert email.subject == "Verify your email address"
        assert "Hello Alice," in email.text
        assert "24 hours" in email.text
        assert LINK in email.text

    def test_spanish_copy(self):
        email = render_verification_email("es", "Alicia", LINK, 24, "TeamKick")

        assert email.subject == "Verifica tu dirección de correo"
        assert "Hola Alicia," in email.text

    def test_html_escapes_user_values(self):
        email = render_verification_email("en", "<script>x</script>", LINK, 24, "TeamKick")

        assert "<script>" not in email.html
        assert "&lt;script&gt;" in email.html
        # Plain text is not HTML, it keeps the name as typed
        assert "<script>x</script>" in email.text

    def test_link_is_attribute_escaped(self):
        email = render_verification_email(
            "en", "Alice", 'http://localhost:3000/x?token=a"b', 24, "TeamKick"
        )
        assert 'href="http://localhost:3000/x?token=a&quot;b"' in email.html


class TestPasswordResetEmail:
    def test_english_copy(self):
        email = render_password_reset_email("en", "Alice", LINK, 1, "TeamKick")

        assert email.subject == "Reset your password"
        assert "1 hour(s)" in email.text

    def test_spanish_copy(self):
        email = render_password_reset_email("es", "Alicia", LINK, 1, "TeamKick")
        assert email.subject == "Restablece tu contraseña"
