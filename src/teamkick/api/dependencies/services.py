"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.teamkick.api.dependencies.db import DBSession
from src.teamkick.api.dependencies.repositories import (
    AccountRepo,
    ClaimRepo,
    MembershipRepo,
    RosterRepo,
    TeamRepo,
)
from src.teamkick.core.notifications import EmailSender, get_email_sender
from src.teamkick.core.sessions import SessionStore, get_session_store
from src.teamkick.services import (
    AuthService,
    EmailVerificationService,
    MemberClaimService,
    PasswordResetService,
    RegistrationService,
    TeamService,
)

EmailSenderDep = Annotated[EmailSender, Depends(get_email_sender)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_auth_service(
    account_repo: AccountRepo, session: DBSession, session_store: SessionStoreDep
) -> AuthService:
    return AuthService(account_repo, session, session_store)


def get_email_verification_service(
    account_repo: AccountRepo, session: DBSession, email_sender: EmailSenderDep
) -> EmailVerificationService:
    return EmailVerificationService(account_repo, session, email_sender)


def get_password_reset_service(
    account_repo: AccountRepo,
    session: DBSession,
    email_sender: EmailSenderDep,
    session_store: SessionStoreDep,
) -> PasswordResetService:
    return PasswordResetService(account_repo, session, email_sender, session_store)


def get_registration_service(
    account_repo: AccountRepo,
    team_repo: TeamRepo,
    membership_repo: MembershipRepo,
    session: DBSession,
    verification_service: Annotated[
        EmailVerificationService, Depends(get_email_verification_service)
    ],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> RegistrationService:
    """Registration also opens the first session, hence the auth service."""
    return RegistrationService(
        account_repo, team_repo, membership_repo, session, verification_service, auth_service
    )


def get_team_service(
    team_repo: TeamRepo,
    membership_repo: MembershipRepo,
    roster_repo: RosterRepo,
    account_repo: AccountRepo,
    session: DBSession,
) -> TeamService:
    return TeamService(team_repo, membership_repo, roster_repo, account_repo, session)


def get_claim_service(
    claim_repo: ClaimRepo,
    roster_repo: RosterRepo,
    team_repo: TeamRepo,
    membership_repo: MembershipRepo,
    session: DBSession,
) -> MemberClaimService:
    return MemberClaimService(claim_repo, roster_repo, team_repo, membership_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
EmailVerificationServiceDep = Annotated[
    EmailVerificationService, Depends(get_email_verification_service)
]
PasswordResetServiceDep = Annotated[PasswordResetService, Depends(get_password_reset_service)]
RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]
ClaimServiceDep = Annotated[MemberClaimService, Depends(get_claim_service)]
