"""Email verification service."""

from src.teamkick.core.exceptions import AccountNotFoundError
from src.teamkick.core.logging import get_logger, loggable_email
from src.teamkick.core.notifications import EmailSendResult, RenderedEmail
from src.teamkick.core.notifications import render_verification_email
from src.teamkick.models import Account, TokenPurpose
from src.teamkick.services.token_flow import SingleUseTokenService

logger = get_logger(__name__)


class EmailVerificationService(SingleUseTokenService):
    """Verification tokens (24h by default) and the emails that carry them."""

    purpose = TokenPurpose.VERIFY_EMAIL
    link_path = "/verify-email"

    @property
    def lifetime_hours(self) -> int:
        return self.settings.verification_token_expire_hours

    def render(self, language: str, account: Account, link: str) -> RenderedEmail:
        return render_verification_email(
            language, account.full_name, link, self.lifetime_hours, self.settings.app_name
        )

    async def request_for_account(
        self, account_id: int, language: str | None = None
    ) -> EmailSendResult | None:
        """Send a new verification email to a signed-in account.

        Returns:
            The send outcome, or None if the account is already verified.
        """
        account = await self.account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError()
        if account.is_email_verified:
            logger.info("Verification requested for verified account", account_id=account_id)
            return None
        return await self.issue_and_send(account, language)

    async def resend(self, email: str, language: str | None = None) -> None:
        """Resend by email address.

        Unknown and already-verified addresses are silently ignored so the
        response never reveals whether an account exists.
        """
        account = await self.account_repo.get_by_email(email)
        if account is None:
            logger.info("Resend requested for unknown email", email=loggable_email(email))
            return
        if account.is_email_verified:
            logger.info("Resend requested for verified account", account_id=account.id)
            return
        await self.issue_and_send(account, language)

    async def confirm(self, token: str) -> Account:
        """Mark the token's account as verified."""
        return await self.consume(token, {"is_email_verified": True})
