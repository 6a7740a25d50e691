"""Registration service - account creation with optional team bootstrap."""

from dataclasses import dataclass, field

from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.teamkick.core.exceptions import (
    EMAIL_DISPATCH_FAILED,
    JOIN_CODE_IGNORED,
    SESSION_NOT_STARTED,
    DuplicateEmailError,
    DuplicateUsernameError,
    SessionStoreUnavailableError,
)
from src.teamkick.core.logging import get_logger
from src.teamkick.core.security import hash_password
from src.teamkick.models import Account, TeamMembership, TeamRole, UserRole
from src.teamkick.models.base import utc_now
from src.teamkick.repositories import AccountRepository, MembershipRepository, TeamRepository
from src.teamkick.services.auth_service import AuthService
from src.teamkick.services.email_verification_service import EmailVerificationService

logger = get_logger(__name__)


@dataclass
class RegistrationResult:
    account: Account
    verification_token: str
    membership: TeamMembership | None = None
    email_sent: bool = False
    email_queued: bool = False
    session_id: str | None = None
    warnings: list[str] = field(default_factory=list)


class RegistrationService:
    """Create accounts.

    The account, its verification token and an optional team membership are
    written in one transaction. Email and session creation happen after the
    commit and can only add warnings, never undo the registration. When the
    caller passes ``background_tasks`` the verification email is queued there
    instead of being awaited.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        team_repo: TeamRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
        verification_service: EmailVerificationService,
        auth_service: AuthService | None = None,
    ):
        self.account_repo = account_repo
        self.team_repo = team_repo
        self.membership_repo = membership_repo
        self.session = session
        self.verification_service = verification_service
        self.auth_service = auth_service

    async def register(
        self,
        username: str,
        password: str,
        full_name: str,
        role: UserRole = UserRole.PLAYER,
        email: str | None = None,
        join_code: str | None = None,
        agreed_to_terms: bool = False,
        language: str | None = None,
        background_tasks: BackgroundTasks | None = None,
    ) -> RegistrationResult:
        """Register a new account.

        A join code that matches no team is skipped (reported in ``warnings``);
        a matching one enrolls the account as a player and completes onboarding.

        Raises:
            DuplicateUsernameError: Username taken.
            DuplicateEmailError: Email taken.
        """
        normalized_email = email.strip().lower() if email else None

        if await self.account_repo.exists_by_username(username):
            raise DuplicateUsernameError()
        if normalized_email and await self.account_repo.exists_by_email(normalized_email):
            raise DuplicateEmailError()

        warnings: list[str] = []
        team_id: int | None = None
        if join_code:
            team = await self.team_repo.get_by_join_code(join_code)
            if team is None:
                logger.info("Registration join code ignored, no matching team")
                warnings.append(JOIN_CODE_IGNORED)
            else:
                team_id = team.id

        account = Account(
            username=username,
            password_hash=hash_password(password),
            full_name=full_name,
            email=normalized_email,
            role=role.value,
            is_email_verified=False,
            onboarding_completed=team_id is not None,
            terms_accepted_at=utc_now() if agreed_to_terms else None,
        )
        self.account_repo.add(account)
        token = self.verification_service.issue(account)

        membership: TeamMembership | None = None
        try:
            await self.session.flush()
            if team_id is not None:
                membership = self.membership_repo.create_membership(
                    team_id, account.id, TeamRole.PLAYER.value  # type: ignore[arg-type]
                )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # A concurrent registration won the race; ask the table which key it took
            if await self.account_repo.exists_by_username(username):
                raise DuplicateUsernameError() from e
            if normalized_email and await self.account_repo.exists_by_email(normalized_email):
                raise DuplicateEmailError() from e
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Registration failed", error=str(e))
            raise

        logger.info("Account registered", account_id=account.id, team_id=team_id)
        result = RegistrationResult(
            account=account,
            verification_token=token,
            membership=membership,
            warnings=warnings,
        )

        if account.email:
            if background_tasks is not None:
                background_tasks.add_task(self._send_verification, account, token, language)
                result.email_queued = True
            else:
                result.email_sent = await self._send_verification(account, token, language)
                if not result.email_sent:
                    result.warnings.append(EMAIL_DISPATCH_FAILED)

        if self.auth_service is not None:
            try:
                result.session_id = await self.auth_service.start_session(account)
            except SessionStoreUnavailableError:
                result.warnings.append(SESSION_NOT_STARTED)

        return result

    async def _send_verification(
        self, account: Account, token: str, language: str | None
    ) -> bool:
        try:
            sent = await self.verification_service.send(account, token, language)
        except Exception as e:
            # User can ask for a new verification email later
            logger.error(
                "Failed to send verification email during registration",
                account_id=account.id,
                error=str(e),
            )
            return False
        return sent.success
