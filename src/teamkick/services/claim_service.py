"""Member claim workflow.

    pending --approve--> approved   (roster entry bound to the claimant)
    pending --reject---> rejected

Both target states are terminal. Transitions are conditional updates on
``status = 'pending'``, so a claim can only ever be reviewed once.
"""

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.teamkick.core.exceptions import (
    AlreadyClaimedError,
    AlreadyReviewedError,
    ClaimNotFoundError,
    RosterEntryNotFoundError,
    TeamKickError,
)
from src.teamkick.core.logging import get_logger
from src.teamkick.models import ClaimStatus, MemberClaim
from src.teamkick.repositories import (
    MemberClaimRepository,
    MembershipRepository,
    RosterRepository,
    TeamRepository,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class PendingClaimsNotice:
    team_id: int
    team_name: str
    count: int
    latest_claim_id: int

    @property
    def message(self) -> str:
        plural = "s" if self.count > 1 else ""
        return f"{self.count} pending member claim{plural} for {self.team_name}"


class MemberClaimService:
    def __init__(
        self,
        claim_repo: MemberClaimRepository,
        roster_repo: RosterRepository,
        team_repo: TeamRepository,
        membership_repo: MembershipRepository,
        session: AsyncSession,
    ):
        self.claim_repo = claim_repo
        self.roster_repo = roster_repo
        self.team_repo = team_repo
        self.membership_repo = membership_repo
        self.session = session

    async def create_claim(
        self, team_id: int, roster_entry_id: int, account_id: int
    ) -> tuple[MemberClaim, bool]:
        """File a claim on a roster entry.

        Submitting the same claim twice is idempotent: the existing pending
        claim is returned with ``created=False``.

        Returns:
            (claim, created)

        Raises:
            RosterEntryNotFoundError: No such entry on this team.
            AlreadyClaimedError: The entry already belongs to a verified account.
        """
        entry = await self.roster_repo.get_for_team(team_id, roster_entry_id)
        if entry is None:
            raise RosterEntryNotFoundError()
        if entry.is_verified and entry.account_id is not None:
            raise AlreadyClaimedError()

        existing = await self.claim_repo.get_pending(roster_entry_id, account_id)
        if existing is not None:
            return existing, False

        claim = MemberClaim(
            team_id=team_id,
            roster_entry_id=roster_entry_id,
            account_id=account_id,
        )
        try:
            self.claim_repo.add(claim)
            await self.session.commit()
        except IntegrityError:
            # Lost the race against an identical submission
            await self.session.rollback()
            existing = await self.claim_repo.get_pending(roster_entry_id, account_id)
            if existing is None:
                raise
            return existing, False
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create claim", account_id=account_id, error=str(e))
            raise

        logger.info(
            "Member claim created",
            claim_id=claim.id,
            team_id=team_id,
            roster_entry_id=roster_entry_id,
            account_id=account_id,
        )
        return claim, True

    async def approve(self, team_id: int, claim_id: int, reviewer_id: int) -> MemberClaim:
        """Approve a pending claim and bind the roster entry to the claimant."""
        try:
            claim = await self.claim_repo.get_for_team(team_id, claim_id)
            if claim is None:
                raise ClaimNotFoundError()
            roster_entry_id = claim.roster_entry_id
            claimant_id = claim.account_id

            if not await self.claim_repo.transition(claim_id, ClaimStatus.APPROVED, reviewer_id):
                raise AlreadyReviewedError()

            if not await self.roster_repo.bind_account(roster_entry_id, claimant_id):
                # Entry went to someone else since the claim was filed
                raise AlreadyClaimedError()

            await self.session.commit()
        except TeamKickError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to approve claim", claim_id=claim_id, error=str(e))
            raise

        logger.info("Member claim approved", claim_id=claim_id, reviewer_id=reviewer_id)
        return await self._reload(claim_id)

    async def reject(
        self, team_id: int, claim_id: int, reviewer_id: int, reason: str | None = None
    ) -> MemberClaim:
        """Reject a pending claim, recording the reason."""
        try:
            claim = await self.claim_repo.get_for_team(team_id, claim_id)
            if claim is None:
                raise ClaimNotFoundError()

            if not await self.claim_repo.transition(
                claim_id, ClaimStatus.REJECTED, reviewer_id, rejection_reason=reason
            ):
                raise AlreadyReviewedError()

            await self.session.commit()
        except TeamKickError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to reject claim", claim_id=claim_id, error=str(e))
            raise

        logger.info("Member claim rejected", claim_id=claim_id, reviewer_id=reviewer_id)
        return await self._reload(claim_id)

    async def _reload(self, claim_id: int) -> MemberClaim:
        claim = await self.claim_repo.get_fresh(claim_id)
        if claim is None:
            raise ClaimNotFoundError()
        return claim

    async def list_team_claims(
        self,
        team_id: int,
        status: ClaimStatus | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[MemberClaim], str | None, bool]:
        return await self.claim_repo.list_for_team(team_id, status, cursor, limit)

    async def list_my_claims(self, account_id: int, team_id: int | None = None) -> list[MemberClaim]:
        return await self.claim_repo.list_for_account(account_id, team_id)

    async def pending_notifications(self, account_id: int) -> list[PendingClaimsNotice]:
        """Pending-claim counts for every team the account administers."""
        team_ids = await self.membership_repo.list_admin_team_ids(account_id)
        summary = await self.claim_repo.pending_summary(team_ids)
        if not summary:
            return []

        teams = await self.team_repo.list_by_ids(list(summary))
        return [
            PendingClaimsNotice(
                team_id=team.id,  # type: ignore[arg-type]
                team_name=team.name,
                count=summary[team.id][0],  # type: ignore[index]
                latest_claim_id=summary[team.id][1],  # type: ignore[index]
            )
            for team in teams
        ]
