"""Repository for MemberClaim entity."""

from sqlalchemy import func
from sqlmodel import select, update

from src.teamkick.models import ClaimStatus, MemberClaim
from src.teamkick.models.base import utc_now
from src.teamkick.repositories.base import BaseRepository


class MemberClaimRepository(BaseRepository[MemberClaim]):
    """Member claims and their pending -> approved/rejected transitions."""

    model = MemberClaim

    async def get_for_team(self, team_id: int, claim_id: int) -> MemberClaim | None:
        result = await self.session.execute(
            select(MemberClaim).where(
                MemberClaim.id == claim_id,
                MemberClaim.team_id == team_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_fresh(self, claim_id: int) -> MemberClaim | None:
        result = await self.session.execute(
            select(MemberClaim)
            .where(MemberClaim.id == claim_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_pending(self, roster_entry_id: int, account_id: int) -> MemberClaim | None:
        result = await self.session.execute(
            select(MemberClaim).where(
                MemberClaim.roster_entry_id == roster_entry_id,
                MemberClaim.account_id == account_id,
                MemberClaim.status == ClaimStatus.PENDING.value,
            )
        )
        return result.scalar_one_or_none()

    async def transition(
        self,
        claim_id: int,
        to_status: ClaimStatus,
        reviewer_id: int,
        rejection_reason: str | None = None,
    ) -> bool:
        """Move a pending claim to a terminal status.

        Conditioned on the claim still being pending, so a claim is reviewed
        at most once even when two reviewers act at the same time.
        """
        stmt = (
            update(MemberClaim)
            .where(MemberClaim.id == claim_id)  # type: ignore[arg-type]
            .where(MemberClaim.status == ClaimStatus.PENDING.value)  # type: ignore[arg-type]
            .values(
                status=to_status.value,
                reviewed_at=utc_now(),
                reviewed_by_id=reviewer_id,
                rejection_reason=rejection_reason,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def list_for_team(
        self,
        team_id: int,
        status: ClaimStatus | None,
        cursor: str | None,
        limit: int,
    ) -> tuple[list[MemberClaim], str | None, bool]:
        query = select(MemberClaim).where(MemberClaim.team_id == team_id)
        if status is not None:
            query = query.where(MemberClaim.status == status.value)
        return await self.paginate(query, cursor, limit)

    async def list_for_account(
        self, account_id: int, team_id: int | None = None
    ) -> list[MemberClaim]:
        query = select(MemberClaim).where(MemberClaim.account_id == account_id)
        if team_id is not None:
            query = query.where(MemberClaim.team_id == team_id)
        result = await self.session.execute(
            query.order_by(MemberClaim.id.desc())  # type: ignore[union-attr]
        )
        return list(result.scalars().all())

    async def pending_summary(self, team_ids: list[int]) -> dict[int, tuple[int, int]]:
        """Per team: (pending claim count, id of the newest pending claim)."""
        if not team_ids:
            return {}
        result = await self.session.execute(
            select(
                MemberClaim.team_id,
                func.count(MemberClaim.id),
                func.max(MemberClaim.id),
            )
            .where(
                MemberClaim.team_id.in_(team_ids),  # type: ignore[attr-defined]
                MemberClaim.status == ClaimStatus.PENDING.value,
            )
            .group_by(MemberClaim.team_id)
        )
        return {team_id: (count, latest_id) for team_id, count, latest_id in result.all()}
