"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Account-wide role."""

    SUPERUSER = "superuser"
    ADMIN = "admin"
    COACH = "coach"
    PLAYER = "player"
    COLABORADOR = "colaborador"


class TeamRole(str, Enum):
    """Role within one team, independent of the account role."""

    ADMIN = "admin"
    COACH = "coach"
    PLAYER = "player"
    COLABORADOR = "colaborador"


# Roles allowed to manage a team (join code, claims)
TEAM_ADMIN_ROLES = frozenset({TeamRole.ADMIN.value, TeamRole.COACH.value})


class ClaimStatus(str, Enum):
    """Member claim status. Approved and rejected are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TokenPurpose(str, Enum):
    """What a single-use account token authorizes."""

    VERIFY_EMAIL = "verify_email"
    RESET_PASSWORD = "reset_password"
