"""FastAPI dependency injection definitions."""

from src.teamkick.api.dependencies.auth import (
    CurrentAccount,
    OptionalAccount,
    SessionId,
    TeamAdmin,
    TeamMember,
    get_current_account,
    get_optional_account,
    get_session_id,
    require_team_admin,
    require_team_member,
)
from src.teamkick.api.dependencies.db import DBSession, get_db_session
from src.teamkick.api.dependencies.repositories import (
    AccountRepo,
    ClaimRepo,
    MembershipRepo,
    RosterRepo,
    TeamRepo,
)
from src.teamkick.api.dependencies.services import (
    AuthServiceDep,
    ClaimServiceDep,
    EmailSenderDep,
    EmailVerificationServiceDep,
    PasswordResetServiceDep,
    RegistrationServiceDep,
    SessionStoreDep,
    TeamServiceDep,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentAccount",
    "OptionalAccount",
    "SessionId",
    "TeamAdmin",
    "TeamMember",
    "get_current_account",
    "get_optional_account",
    "get_session_id",
    "require_team_admin",
    "require_team_member",
    # Repositories
    "AccountRepo",
    "ClaimRepo",
    "MembershipRepo",
    "RosterRepo",
    "TeamRepo",
    # Services
    "AuthServiceDep",
    "ClaimServiceDep",
    "EmailSenderDep",
    "EmailVerificationServiceDep",
    "PasswordResetServiceDep",
    "RegistrationServiceDep",
    "SessionStoreDep",
    "TeamServiceDep",
]
