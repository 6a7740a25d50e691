"""Team service - creation and join-code enrolment."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.teamkick.core.config import Settings, get_settings
from src.teamkick.core.exceptions import (
    AccountNotFoundError,
    AlreadyMemberError,
    JoinCodeInvalidError,
    JoinCodeUnavailableError,
    TeamKickError,
    TeamNotFoundError,
)
from src.teamkick.core.logging import get_logger
from src.teamkick.core.security import generate_join_code
from src.teamkick.models import RosterEntry, Team, TeamMembership, TeamRole
from src.teamkick.repositories import (
    AccountRepository,
    MembershipRepository,
    RosterRepository,
    TeamRepository,
)

logger = get_logger(__name__)


class TeamService:
    """Teams and their join codes.

    Join codes are random; uniqueness among active teams is enforced by a
    unique index and a collision simply triggers another draw, up to
    ``join_code_max_attempts`` times.
    """

    def __init__(
        self,
        team_repo: TeamRepository,
        membership_repo: MembershipRepository,
        roster_repo: RosterRepository,
        account_repo: AccountRepository,
        session: AsyncSession,
        settings: Settings | None = None,
    ):
        self.team_repo = team_repo
        self.membership_repo = membership_repo
        self.roster_repo = roster_repo
        self.account_repo = account_repo
        self.session = session
        self.settings = settings or get_settings()

    async def _draw_free_code(self) -> str | None:
        code = generate_join_code(self.settings.join_code_length)
        if await self.team_repo.join_code_exists(code):
            return None
        return code

    async def create_team(self, name: str, creator_id: int) -> Team:
        """Create a team; the creator becomes its admin and first roster entry."""
        creator = await self.account_repo.get_by_id(creator_id)
        if creator is None:
            raise AccountNotFoundError()
        creator_name = creator.full_name

        for attempt in range(1, self.settings.join_code_max_attempts + 1):
            code = await self._draw_free_code()
            if code is None:
                continue

            team = Team(name=name, join_code=code, created_by_id=creator_id)
            try:
                self.team_repo.add(team)
                await self.session.flush()
                self.membership_repo.create_membership(
                    team.id, creator_id, TeamRole.ADMIN.value  # type: ignore[arg-type]
                )
                self.roster_repo.add(
                    RosterEntry(
                        team_id=team.id,  # type: ignore[arg-type]
                        full_name=creator_name,
                        role=TeamRole.ADMIN.value,
                        account_id=creator_id,
                        is_verified=True,
                    )
                )
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                logger.info("Join code collision, retrying", attempt=attempt)
                continue
            except Exception as e:
                await self.session.rollback()
                logger.error("Failed to create team", creator_id=creator_id, error=str(e))
                raise

            logger.info("Team created", team_id=team.id, creator_id=creator_id)
            return team

        logger.error("Join code space exhausted", attempts=self.settings.join_code_max_attempts)
        raise JoinCodeUnavailableError()

    async def regenerate_join_code(self, team_id: int) -> Team:
        """Give the team a new code. The old one stops working immediately."""
        for attempt in range(1, self.settings.join_code_max_attempts + 1):
            team = await self.team_repo.get_active(team_id)
            if team is None:
                raise TeamNotFoundError()

            code = await self._draw_free_code()
            if code is None or code == team.join_code:
                continue

            team.join_code = code
            try:
                self.team_repo.add(team)
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                logger.info("Join code collision, retrying", team_id=team_id, attempt=attempt)
                continue
            except Exception as e:
                await self.session.rollback()
                logger.error("Failed to regenerate join code", team_id=team_id, error=str(e))
                raise

            logger.info("Join code regenerated", team_id=team_id)
            return team

        raise JoinCodeUnavailableError()

    async def validate_join_code(self, join_code: str) -> Team:
        """Resolve a code to its team or raise JoinCodeInvalidError."""
        team = await self.team_repo.get_by_join_code(join_code)
        if team is None:
            raise JoinCodeInvalidError()
        return team

    async def join_team(self, account_id: int, join_code: str) -> TeamMembership:
        """Enroll an existing account as a player and complete its onboarding."""
        try:
            team = await self.validate_join_code(join_code)
            team_id: int = team.id  # type: ignore[assignment]

            if await self.membership_repo.is_member(team_id, account_id):
                raise AlreadyMemberError()

            account = await self.account_repo.get_by_id(account_id)
            if account is None:
                raise AccountNotFoundError()

            membership = self.membership_repo.create_membership(
                team_id, account_id, TeamRole.PLAYER.value
            )
            account.onboarding_completed = True
            self.account_repo.add(account)
            await self.session.commit()
        except TeamKickError:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            raise AlreadyMemberError() from e
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to join team", account_id=account_id, error=str(e))
            raise

        logger.info("Account joined team", account_id=account_id, team_id=team_id)
        return membership

    async def list_memberships(self, account_id: int) -> list[TeamMembership]:
        return await self.membership_repo.list_for_account(account_id)
