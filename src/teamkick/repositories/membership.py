"""Repository for TeamMembership entity."""

from sqlmodel import select

from src.teamkick.models import TEAM_ADMIN_ROLES, TeamMembership, TeamRole
from src.teamkick.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[TeamMembership]):
    """Repository for account-team memberships."""

    model = TeamMembership

    async def get_membership(self, team_id: int, account_id: int) -> TeamMembership | None:
        """Get membership for an account in a team."""
        result = await self.session.execute(
            select(TeamMembership).where(
                TeamMembership.team_id == team_id,
                TeamMembership.account_id == account_id,
            )
        )
        return result.scalar_one_or_none()

    async def is_member(self, team_id: int, account_id: int) -> bool:
        return await self.get_membership(team_id, account_id) is not None

    async def list_for_account(self, account_id: int) -> list[TeamMembership]:
        result = await self.session.execute(
            select(TeamMembership)
            .where(TeamMembership.account_id == account_id)
            .order_by(TeamMembership.team_id)
        )
        return list(result.scalars().all())

    async def list_admin_team_ids(self, account_id: int) -> list[int]:
        """Teams the account may administer (admin or coach membership)."""
        result = await self.session.execute(
            select(TeamMembership.team_id)
            .where(
                TeamMembership.account_id == account_id,
                TeamMembership.role.in_(sorted(TEAM_ADMIN_ROLES)),  # type: ignore[attr-defined]
            )
            .order_by(TeamMembership.team_id)
        )
        return list(result.scalars().all())

    def create_membership(
        self,
        team_id: int,
        account_id: int,
        role: str = TeamRole.PLAYER.value,
    ) -> TeamMembership:
        """Create a new membership (add to session, no commit)."""
        membership = TeamMembership(team_id=team_id, account_id=account_id, role=role)
        self.session.add(membership)
        return membership
