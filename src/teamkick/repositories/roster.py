"""Repository for RosterEntry entity."""

from sqlalchemy import or_
from sqlmodel import select, update

from src.teamkick.models import RosterEntry
from src.teamkick.repositories.base import BaseRepository


class RosterRepository(BaseRepository[RosterEntry]):
    model = RosterEntry

    async def get_for_team(self, team_id: int, entry_id: int) -> RosterEntry | None:
        result = await self.session.execute(
            select(RosterEntry).where(
                RosterEntry.id == entry_id,
                RosterEntry.team_id == team_id,
            )
        )
        return result.scalar_one_or_none()

    async def bind_account(self, entry_id: int, account_id: int) -> bool:
        """Link the entry to the account and mark it verified.

        Refuses (returns False) when the entry is already verified for a
        different account.
        """
        stmt = (
            update(RosterEntry)
            .where(RosterEntry.id == entry_id)  # type: ignore[arg-type]
            .where(
                or_(
                    RosterEntry.is_verified == False,  # noqa: E712
                    RosterEntry.account_id == account_id,
                )
            )
            .values(account_id=account_id, is_verified=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]
