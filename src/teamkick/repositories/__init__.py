"""Repository layer - data access abstraction."""

from src.teamkick.repositories.account import AccountRepository
from src.teamkick.repositories.base import BaseRepository
from src.teamkick.repositories.claim import MemberClaimRepository
from src.teamkick.repositories.membership import MembershipRepository
from src.teamkick.repositories.roster import RosterRepository
from src.teamkick.repositories.team import TeamRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "MemberClaimRepository",
    "MembershipRepository",
    "RosterRepository",
    "TeamRepository",
]
