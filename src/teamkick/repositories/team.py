"""Repository for Team entity."""

from sqlmodel import select

from src.teamkick.core.security import normalize_join_code
from src.teamkick.models import Team
from src.teamkick.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Teams. Soft-deleted teams are invisible to join-code lookups."""

    model = Team

    async def get_active(self, team_id: int) -> Team | None:
        result = await self.session.execute(
            select(Team).where(
                Team.id == team_id,
                Team.deleted_at == None,  # noqa: E711
            )
        )
        return result.scalar_one_or_none()

    async def get_by_join_code(self, join_code: str) -> Team | None:
        """Look up an active team by code. Codes are matched case-insensitively."""
        code = normalize_join_code(join_code)
        if not code:
            return None
        result = await self.session.execute(
            select(Team).where(
                Team.join_code == code,
                Team.deleted_at == None,  # noqa: E711
            )
        )
        return result.scalar_one_or_none()

    async def join_code_exists(self, join_code: str) -> bool:
        return await self.get_by_join_code(join_code) is not None

    async def list_by_ids(self, team_ids: list[int]) -> list[Team]:
        if not team_ids:
            return []
        result = await self.session.execute(
            select(Team)
            .where(
                Team.id.in_(team_ids),  # type: ignore[union-attr]
                Team.deleted_at == None,  # noqa: E711
            )
            .order_by(Team.id)
        )
        return list(result.scalars().all())
