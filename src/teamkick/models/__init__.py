"""Model exports.

Import from here: `from src.teamkick.models import Account, Team`
"""

from src.teamkick.models.account import Account
from src.teamkick.models.claim import MemberClaim
from src.teamkick.models.enums import (
    TEAM_ADMIN_ROLES,
    ClaimStatus,
    TeamRole,
    TokenPurpose,
    UserRole,
)
from src.teamkick.models.team import RosterEntry, Team, TeamMembership

__all__ = [
    # Enums
    "TEAM_ADMIN_ROLES",
    "ClaimStatus",
    "TeamRole",
    "TokenPurpose",
    "UserRole",
    # Models
    "Account",
    "MemberClaim",
    "RosterEntry",
    "Team",
    "TeamMembership",
]
