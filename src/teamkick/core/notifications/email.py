"""Email delivery through the Resend API.

``EmailSender`` is built once from settings and handed to the services that
send mail. Sending never raises: transport failures are logged and reported
through ``EmailSendResult``.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import resend

from src.teamkick.core.config import Settings, get_settings
from src.teamkick.core.logging import get_logger, loggable_email

logger = get_logger(__name__)


@dataclass(frozen=True)
class EmailSendResult:
    success: bool
    message: str | None = None


class EmailSender:
    """Send transactional email with a bounded wait on the Resend API."""

    def __init__(
        self,
        api_key: str | None,
        from_address: str,
        timeout_seconds: float,
        executor: ThreadPoolExecutor | None = None,
    ):
        self.from_address = from_address
        self.timeout_seconds = timeout_seconds
        self.enabled = bool(api_key)
        self._api_key = api_key
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="email_sender"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailSender":
        return cls(
            api_key=settings.resend_api_key,
            from_address=settings.email_from,
            timeout_seconds=settings.email_send_timeout_seconds,
        )

    def _send(self, params: dict[str, Any]) -> Any:
        # The resend SDK only reads its key from module state
        resend.api_key = self._api_key
        return resend.Emails.send(params)  # type: ignore[arg-type]

    async def send_email(self, to: str, subject: str, html: str, text: str) -> EmailSendResult:
        """Send one email. Returns the outcome instead of raising."""
        if not self.enabled:
            # Dev mode: nothing leaves the process
            logger.warning(
                "RESEND_API_KEY not set - email not sent",
                to=loggable_email(to),
                subject=subject,
            )
            return EmailSendResult(success=True, message="Email delivery disabled")

        params = {
            "from": self.from_address,
            "to": [to],
            "subject": subject,
            "html": html,
            "text": text,
        }

        try:
            future = self._executor.submit(self._send, params)
            await asyncio.wait_for(asyncio.wrap_future(future), timeout=self.timeout_seconds)
        except TimeoutError:
            logger.error(
                "Email send timed out", to=loggable_email(to), timeout=self.timeout_seconds
            )
            return EmailSendResult(success=False, message="Email send timed out")
        except Exception as e:
            logger.error("Failed to send email", to=loggable_email(to), error=str(e))
            return EmailSendResult(success=False, message=str(e))

        logger.info("Email sent", to=loggable_email(to), subject=subject)
        return EmailSendResult(success=True, message="Email sent")

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


@lru_cache
def get_email_sender() -> EmailSender:
    """Process-wide sender built from settings."""
    return EmailSender.from_settings(get_settings())
