"""Member claim model."""

from datetime import datetime

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from src.teamkick.models.base import utc_now
from src.teamkick.models.enums import ClaimStatus


class MemberClaim(SQLModel, table=True):
    """An account asserting it is a given roster entry, pending admin review.

    At most one pending claim may exist per (roster entry, account); the
    partial unique index enforces it even under concurrent submissions.
    """

    __tablename__ = "member_claims"
    __table_args__ = (
        Index(
            "uq_member_claims_pending",
            "roster_entry_id",
            "account_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    roster_entry_id: int = Field(foreign_key="roster_entries.id", index=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    status: str = Field(default=ClaimStatus.PENDING.value, max_length=20)
    requested_at: datetime = Field(default_factory=utc_now)
    reviewed_at: datetime | None = Field(default=None)
    reviewed_by_id: int | None = Field(default=None, foreign_key="accounts.id")
    rejection_reason: str | None = Field(default=None, max_length=500)
