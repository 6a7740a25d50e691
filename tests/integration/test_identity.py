"""Resolving a session's account id to the current account."""

import pytest
from sqlalchemy import delete, update

from src.teamkick.models import Account, UserRole
from src.teamkick.schemas.account import AccountRead
from src.teamkick.services import IdentityResolver
from tests.helpers import create_account

pytestmark = pytest.mark.integration


@pytest.fixture
def resolver(account_repo) -> IdentityResolver:
    return IdentityResolver(account_repo)


class TestResolve:
    """Every resolve reads the row as it is now."""

    async def test_returns_public_view(self, resolver, db_session):
        account = await create_account(db_session, username="alice")

        identity = await resolver.resolve(account.id)

        assert isinstance(identity, AccountRead)
        assert identity.username == "alice"
        assert "password_hash" not in identity.model_dump()

    async def test_role_change_applies_to_next_resolve(self, resolver, db_session):
        account = await create_account(db_session, role=UserRole.COACH.value)
        account_id = account.id
        assert (await resolver.resolve(account_id)).role == UserRole.COACH.value

        await db_session.execute(
            update(Account).where(Account.id == account_id).values(role=UserRole.PLAYER.value)
        )
        await db_session.commit()

        assert (await resolver.resolve(account_id)).role == UserRole.PLAYER.value

    async def test_verification_applies_to_next_resolve(self, resolver, db_session):
        account = await create_account(db_session, is_email_verified=False)
        account_id = account.id
        assert (await resolver.resolve(account_id)).is_email_verified is False

        await db_session.execute(
            update(Account).where(Account.id == account_id).values(is_email_verified=True)
        )
        await db_session.commit()

        assert (await resolver.resolve(account_id)).is_email_verified is True

    async def test_deleted_account_resolves_to_none(self, resolver, db_session):
        account = await create_account(db_session)
        account_id = account.id
        await db_session.execute(delete(Account).where(Account.id == account_id))
        await db_session.commit()

        assert await resolver.resolve(account_id) is None

    async def test_no_session_resolves_to_none(self, resolver):
        assert await resolver.resolve(None) is None


class TestAccountRead:
    def test_has_no_password_field(self):
        assert "password_hash" not in AccountRead.model_fields
        assert "password" not in AccountRead.model_fields
