"""Shared lifecycle of single-use account tokens.

Email verification and password reset follow the same shape:

    no token --issue--> issued --consume--> consumed
                          |
                          +-- (time passes) --> expired, detected on consume

Only the SHA256 of a token is stored. Consumption clears the token and applies
the flow's update in one conditional UPDATE, so a token authorizes exactly one
state change. An expired token is cleared when it is presented.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamkick.core.config import Settings, get_settings
from src.teamkick.core.exceptions import ExpiredTokenError, InvalidTokenError, TeamKickError
from src.teamkick.core.logging import get_logger
from src.teamkick.core.notifications import EmailSender, EmailSendResult, RenderedEmail
from src.teamkick.core.notifications import resolve_language as _resolve_language
from src.teamkick.core.security import expiry_from_now, hash_token, is_expired, issue_token
from src.teamkick.models import Account, TokenPurpose
from src.teamkick.repositories import AccountRepository

logger = get_logger(__name__)


class SingleUseTokenService:
    """Base class; subclasses set ``purpose`` and implement ``lifetime_hours``/``render``."""

    purpose: TokenPurpose
    link_path: str

    def __init__(
        self,
        account_repo: AccountRepository,
        session: AsyncSession,
        email_sender: EmailSender,
        settings: Settings | None = None,
    ):
        self.account_repo = account_repo
        self.session = session
        self.email_sender = email_sender
        self.settings = settings or get_settings()

    @property
    def lifetime_hours(self) -> int:
        raise NotImplementedError

    def render(self, language: str, account: Account, link: str) -> RenderedEmail:
        raise NotImplementedError

    def resolve_language(self, language: str | None) -> str:
        return _resolve_language(language, self.settings.default_email_language)

    def issue(self, account: Account) -> str:
        """Attach a fresh token to the account and return the plaintext.

        Replaces any token of the same purpose. Does not commit.
        """
        token = issue_token(self.settings.token_entropy_bytes)
        self.account_repo.set_token(
            account,
            self.purpose,
            hash_token(token),
            expiry_from_now(self.lifetime_hours),
        )
        return token

    async def send(
        self,
        account: Account,
        token: str,
        language: str | None = None,
        link_path: str | None = None,
    ) -> EmailSendResult:
        """Email the token link. Call only after the token is committed."""
        if not account.email:
            logger.info(
                "Account has no email, token email skipped",
                account_id=account.id,
                purpose=self.purpose.value,
            )
            return EmailSendResult(success=False, message="Account has no email address")

        link = f"{self.settings.app_url}{link_path or self.link_path}?token={token}"
        email = self.render(self.resolve_language(language), account, link)
        result = await self.email_sender.send_email(
            account.email, email.subject, email.html, email.text
        )
        if not result.success:
            logger.warning(
                "Token email not delivered",
                account_id=account.id,
                purpose=self.purpose.value,
                reason=result.message,
            )
        return result

    async def issue_and_send(
        self,
        account: Account,
        language: str | None = None,
        link_path: str | None = None,
    ) -> EmailSendResult:
        """Issue, commit, then send."""
        account_id = account.id
        try:
            token = self.issue(account)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to store token",
                account_id=account_id,
                purpose=self.purpose.value,
                error=str(e),
            )
            raise

        logger.info("Token issued", account_id=account_id, purpose=self.purpose.value)
        return await self.send(account, token, language, link_path)

    async def consume(
        self,
        token: str,
        values: dict[str, Any] | None = None,
        account_id: int | None = None,
    ) -> Account:
        """Spend a token.

        Args:
            token: Plaintext token from the email link.
            values: Column updates applied together with clearing the token.
            account_id: When given, the token must belong to this account.

        Raises:
            InvalidTokenError: Unknown, already used, or someone else's token.
            ExpiredTokenError: The token matched but its expiry has passed.
        """
        token_hash = hash_token(token)
        try:
            account = await self.account_repo.get_by_token_hash(self.purpose, token_hash)
            if account is None or (account_id is not None and account.id != account_id):
                raise InvalidTokenError()

            found_id: int = account.id  # type: ignore[assignment]
            if is_expired(self.account_repo.get_token_expiry(account, self.purpose)):
                await self.account_repo.clear_token(self.purpose, found_id, token_hash)
                await self.session.commit()
                logger.info(
                    "Expired token cleared", account_id=found_id, purpose=self.purpose.value
                )
                raise ExpiredTokenError()

            consumed = await self.account_repo.consume_token(
                self.purpose, found_id, token_hash, values
            )
            if not consumed:
                # Another request spent it between our read and our write
                raise InvalidTokenError()

            await self.session.commit()
        except TeamKickError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to consume token", purpose=self.purpose.value, error=str(e))
            raise

        refreshed = await self.account_repo.get_fresh(found_id)
        if refreshed is None:
            raise InvalidTokenError()
        logger.info("Token consumed", account_id=found_id, purpose=self.purpose.value)
        return refreshed
