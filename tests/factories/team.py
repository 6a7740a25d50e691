"""Team, membership, roster and claim factories."""

from polyfactory import Use

from src.teamkick.core.security import generate_join_code
from src.teamkick.models import (
    ClaimStatus,
    MemberClaim,
    RosterEntry,
    Team,
    TeamMembership,
    TeamRole,
)
from tests.factories.base import BaseFactory, next_sequence, utc_now


class TeamFactory(BaseFactory):
    """Factory for generating Team test data."""

    __model__ = Team

    name = Use(lambda: f"Team {next_sequence()}")
    join_code = Use(generate_join_code)
    created_by_id = None
    created_at = Use(utc_now)
    deleted_at = None

    @classmethod
    def deleted(cls, **kwargs):
        return cls.build(deleted_at=utc_now(), **kwargs)


class TeamMembershipFactory(BaseFactory):
    """Factory for generating TeamMembership test data."""

    __model__ = TeamMembership

    # FK fields - must be set explicitly
    team_id = None
    account_id = None
    role = TeamRole.PLAYER.value
    joined_at = Use(utc_now)

    @classmethod
    def admin(cls, **kwargs):
        return cls.build(role=TeamRole.ADMIN.value, **kwargs)

    @classmethod
    def coach(cls, **kwargs):
        return cls.build(role=TeamRole.COACH.value, **kwargs)


class RosterEntryFactory(BaseFactory):
    """Factory for unlinked roster entries."""

    __model__ = RosterEntry

    team_id = None
    full_name = Use(lambda: f"Roster Player {next_sequence()}")
    role = TeamRole.PLAYER.value
    position = None
    jersey_number = None
    account_id = None
    is_verified = False
    created_at = Use(utc_now)


class MemberClaimFactory(BaseFactory):
    """Factory for pending member claims."""

    __model__ = MemberClaim

    team_id = None
    roster_entry_id = None
    account_id = None
    status = ClaimStatus.PENDING.value
    requested_at = Use(utc_now)
    reviewed_at = None
    reviewed_by_id = None
    rejection_reason = None
