"""Password reset and authenticated password change."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamkick.core.config import Settings
from src.teamkick.core.exceptions import AccountNotFoundError
from src.teamkick.core.logging import get_logger, loggable_email
from src.teamkick.core.notifications import (
    EmailSender,
    EmailSendResult,
    RenderedEmail,
    render_password_reset_email,
)
from src.teamkick.core.security import hash_password
from src.teamkick.core.sessions import SessionStore
from src.teamkick.models import Account, TokenPurpose
from src.teamkick.repositories import AccountRepository
from src.teamkick.services.token_flow import SingleUseTokenService

logger = get_logger(__name__)


class PasswordResetService(SingleUseTokenService):
    """Reset tokens live one hour by default. Setting a password ends all sessions."""

    purpose = TokenPurpose.RESET_PASSWORD
    link_path = "/reset-password"
    change_link_path = "/change-password"

    def __init__(
        self,
        account_repo: AccountRepository,
        session: AsyncSession,
        email_sender: EmailSender,
        session_store: SessionStore,
        settings: Settings | None = None,
    ):
        super().__init__(account_repo, session, email_sender, settings)
        self.session_store = session_store

    @property
    def lifetime_hours(self) -> int:
        return self.settings.password_reset_token_expire_hours

    def render(self, language: str, account: Account, link: str) -> RenderedEmail:
        return render_password_reset_email(
            language, account.full_name, link, self.lifetime_hours, self.settings.app_name
        )

    async def request(self, email: str, language: str | None = None) -> None:
        """Start a reset for the address.

        Unknown addresses get the same (silent) outcome as known ones; no
        token is written and no email is sent for them.
        """
        account = await self.account_repo.get_by_email(email)
        if account is None:
            logger.info("Password reset requested for unknown email", email=loggable_email(email))
            return
        await self.issue_and_send(account, language)

    async def request_change(
        self, account_id: int, language: str | None = None
    ) -> EmailSendResult:
        """Email a change-password link to a signed-in account."""
        account = await self.account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError()
        return await self.issue_and_send(account, language, self.change_link_path)

    async def reset(self, token: str, new_password: str) -> Account:
        """Set a new password with a reset token."""
        account = await self.consume(token, {"password_hash": hash_password(new_password)})
        await self._end_sessions(account)
        return account

    async def change_password(self, account_id: int, token: str, new_password: str) -> Account:
        """Like reset, but the token must belong to the signed-in account."""
        account = await self.consume(
            token, {"password_hash": hash_password(new_password)}, account_id=account_id
        )
        await self._end_sessions(account)
        return account

    async def _end_sessions(self, account: Account) -> None:
        # Password is already committed; a Redis failure must not undo it
        try:
            await self.session_store.revoke_all(account.id)  # type: ignore[arg-type]
        except Exception as e:
            logger.warning("Failed to revoke sessions", account_id=account.id, error=str(e))
