"""Tests for the Resend email sender."""

import time
from unittest.mock import patch

import pytest
import resend

from src.teamkick.core.notifications import EmailSender

pytestmark = pytest.mark.unit


@pytest.fixture
def sender():
    sender = EmailSender(api_key="re_test_key", from_address="noreply@example.com", timeout_seconds=1)
    yield sender
    sender.shutdown()


class TestSendEmail:
    """Tests for EmailSender.send_email."""

    async def test_disabled_without_api_key(self):
        sender = EmailSender(api_key=None, from_address="noreply@example.com", timeout_seconds=1)
        with patch("src.teamkick.core.notifications.email.resend.Emails.send") as mock_send:
            result = await sender.send_email("a@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert result.success is True
        assert result.message == "Email delivery disabled"
        mock_send.assert_not_called()
        sender.shutdown()

    async def test_sends_through_resend(self, sender):
        with patch(
            "src.teamkick.core.notifications.email.resend.Emails.send",
            return_value={"id": "email_123"},
        ) as mock_send:
            result = await sender.send_email("a@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert result.success is True
        params = mock_send.call_args[0][0]
        assert params["to"] == ["a@example.com"]
        assert params["from"] == "noreply@example.com"
        assert params["subject"] == "Hi"
        assert params["text"] == "Hi"

    async def test_api_key_is_set_at_send_time(self, monkeypatch):
        monkeypatch.setattr(resend, "api_key", None)
        sender = EmailSender(api_key="re_key_one", from_address="noreply@example.com", timeout_seconds=1)

        assert resend.api_key is None

        seen = []
        with patch(
            "src.teamkick.core.notifications.email.resend.Emails.send",
            side_effect=lambda params: seen.append(resend.api_key),
        ):
            await sender.send_email("a@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert seen == ["re_key_one"]
        sender.shutdown()

    async def test_provider_error_is_reported_not_raised(self, sender):
        with patch(
            "src.teamkick.core.notifications.email.resend.Emails.send",
            side_effect=RuntimeError("provider down"),
        ):
            result = await sender.send_email("a@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert result.success is False
        assert "provider down" in (result.message or "")

    async def test_slow_provider_times_out(self):
        sender = EmailSender(
            api_key="re_test_key", from_address="noreply@example.com", timeout_seconds=0.05
        )

        def slow_send(params):
            time.sleep(0.5)

        with patch.object(sender, "_send", side_effect=slow_send):
            result = await sender.send_email("a@example.com", "Hi", "<p>Hi</p>", "Hi")

        assert result.success is False
        assert result.message == "Email send timed out"
        sender.shutdown()
