"""Team, team membership and roster models."""

from datetime import datetime

from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import Field, SQLModel

from src.teamkick.models.base import utc_now
from src.teamkick.models.enums import TeamRole


class Team(SQLModel, table=True):
    """A team. Its join code is unique among teams that are not deleted."""

    __tablename__ = "teams"
    __table_args__ = (
        Index(
            "uq_teams_join_code_active",
            "join_code",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    join_code: str = Field(max_length=12)
    created_by_id: int | None = Field(default=None, foreign_key="accounts.id")
    created_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)


class TeamMembership(SQLModel, table=True):
    """Access link between an account and a team."""

    __tablename__ = "team_memberships"
    __table_args__ = (
        UniqueConstraint("team_id", "account_id", name="uq_team_memberships_team_account"),
    )

    id: int | None = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    role: str = Field(default=TeamRole.PLAYER.value, max_length=20)
    joined_at: datetime = Field(default_factory=utc_now)


class RosterEntry(SQLModel, table=True):
    """A person on the team sheet, optionally linked to the account it belongs to."""

    __tablename__ = "roster_entries"

    id: int | None = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="teams.id", index=True)
    full_name: str = Field(max_length=200)
    role: str = Field(default=TeamRole.PLAYER.value, max_length=20)
    position: str | None = Field(default=None, max_length=50)
    jersey_number: int | None = Field(default=None)
    account_id: int | None = Field(default=None, foreign_key="accounts.id", index=True)
    is_verified: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
