"""Integration fixtures: real repositories and services over the SQLite test database.

Uses polyfactory for test data, fakeredis for sessions and a recording
email sender in place of Resend.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.teamkick.api.dependencies.db import get_db_session
from src.teamkick.core.config import get_settings
from src.teamkick.core.notifications import get_email_sender
from src.teamkick.core.sessions import SessionStore, get_session_store
from src.teamkick.main import app
from src.teamkick.repositories import (
    AccountRepository,
    MemberClaimRepository,
    MembershipRepository,
    RosterRepository,
    TeamRepository,
)
from src.teamkick.services import (
    AuthService,
    EmailVerificationService,
    MemberClaimService,
    PasswordResetService,
    RegistrationService,
    TeamService,
)
from tests.helpers import RecordingEmailSender


@pytest.fixture
def account_repo(db_session: AsyncSession) -> AccountRepository:
    return AccountRepository(db_session)


@pytest.fixture
def team_repo(db_session: AsyncSession) -> TeamRepository:
    return TeamRepository(db_session)


@pytest.fixture
def membership_repo(db_session: AsyncSession) -> MembershipRepository:
    return MembershipRepository(db_session)


@pytest.fixture
def roster_repo(db_session: AsyncSession) -> RosterRepository:
    return RosterRepository(db_session)


@pytest.fixture
def claim_repo(db_session: AsyncSession) -> MemberClaimRepository:
    return MemberClaimRepository(db_session)


@pytest.fixture
def auth_service(
    account_repo: AccountRepository, db_session: AsyncSession, session_store: SessionStore
) -> AuthService:
    return AuthService(account_repo, db_session, session_store)


@pytest.fixture
def verification_service(
    account_repo: AccountRepository, db_session: AsyncSession, outbox: RecordingEmailSender
) -> EmailVerificationService:
    return EmailVerificationService(account_repo, db_session, outbox)  # type: ignore[arg-type]


@pytest.fixture
def reset_service(
    account_repo: AccountRepository,
    db_session: AsyncSession,
    outbox: RecordingEmailSender,
    session_store: SessionStore,
) -> PasswordResetService:
    return PasswordResetService(account_repo, db_session, outbox, session_store)  # type: ignore[arg-type]


@pytest.fixture
def registration_service(
    account_repo: AccountRepository,
    team_repo: TeamRepository,
    membership_repo: MembershipRepository,
    db_session: AsyncSession,
    verification_service: EmailVerificationService,
    auth_service: AuthService,
) -> RegistrationService:
    return RegistrationService(
        account_repo, team_repo, membership_repo, db_session, verification_service, auth_service
    )


@pytest.fixture
def team_service(
    team_repo: TeamRepository,
    membership_repo: MembershipRepository,
    roster_repo: RosterRepository,
    account_repo: AccountRepository,
    db_session: AsyncSession,
) -> TeamService:
    return TeamService(team_repo, membership_repo, roster_repo, account_repo, db_session)


@pytest.fixture
def claim_service(
    claim_repo: MemberClaimRepository,
    roster_repo: RosterRepository,
    team_repo: TeamRepository,
    membership_repo: MembershipRepository,
    db_session: AsyncSession,
) -> MemberClaimService:
    return MemberClaimService(claim_repo, roster_repo, team_repo, membership_repo, db_session)


# --- HTTP ---


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    session_store: SessionStore,
    outbox: RecordingEmailSender,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client over the app with database, sessions and email overridden."""

    async def override_get_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def override_get_session_store() -> SessionStore:
        return session_store

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_session_store] = override_get_session_store
    app.dependency_overrides[get_email_sender] = lambda: outbox

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def cookie_name() -> str:
    return get_settings().session_cookie_name
