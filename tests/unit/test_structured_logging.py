"""Tests for structured logging context."""

from unittest.mock import MagicMock

import pytest
import structlog
from structlog.testing import CapturingLogger

from src.teamkick.core.logging import (
    REDACTED,
    bind_account_context,
    bind_request_context,
    clear_request_context,
    loggable_email,
    redact_secrets,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Create a capturing logger for tests."""
    cap_logger = CapturingLogger()

    # Save original configuration to restore later
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


@pytest.fixture
def log_emails(monkeypatch):
    """Enable log_user_emails for one test."""
    settings = MagicMock()
    settings.log_user_emails = True
    monkeypatch.setattr("src.teamkick.core.config.get_settings", lambda: settings)


def test_bind_request_context(capturing_logger):
    bind_request_context("test-request-123")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"


def test_bind_request_context_with_none(capturing_logger):
    """A missing request id is not bound."""
    bind_request_context(None)
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_bind_account_context_omits_email_by_default(capturing_logger):
    bind_account_context(7, "alice@example.com")
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["account_id"] == 7
    assert "account_email" not in kwargs


def test_bind_account_context_with_email_logging(capturing_logger, log_emails):
    bind_account_context(7, "alice@example.com")
    structlog.get_logger().info("test message")

    assert capturing_logger.calls[0].kwargs["account_email"] == "alice@example.com"


def test_clear_request_context(capturing_logger):
    bind_request_context("req-1")
    bind_account_context(7)
    clear_request_context()
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert "request_id" not in kwargs
    assert "account_id" not in kwargs


def test_loggable_email_hidden_by_default():
    assert loggable_email("alice@example.com") is None


def test_loggable_email_when_enabled(log_emails):
    assert loggable_email("alice@example.com") == "alice@example.com"
    assert loggable_email(None) is None


class TestRedactSecrets:
    """Credential values are masked before rendering."""

    def test_masks_known_keys(self):
        event = {"event": "Login", "password": "hunter2", "token": "abc", "account_id": 3}

        result = redact_secrets(None, "info", event)

        assert result["password"] == REDACTED
        assert result["token"] == REDACTED
        assert result["account_id"] == 3

    def test_leaves_other_events_alone(self):
        event = {"event": "Team created", "team_id": 9}
        assert redact_secrets(None, "info", dict(event)) == event
