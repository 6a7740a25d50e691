"""Password reset and change-password flows."""

import pytest

from src.teamkick.core.exceptions import InvalidTokenError
from src.teamkick.core.security import verify_password
from tests.factories import DEFAULT_TEST_PASSWORD
from tests.helpers import create_account

pytestmark = pytest.mark.integration


class TestRequest:
    async def test_unknown_email_writes_and_sends_nothing(self, reset_service, outbox):
        await reset_service.request("ghost@example.com")
        assert outbox.sent == []

    async def test_known_email_stores_hashed_token(
        self, reset_service, db_session, account_repo, outbox
    ):
        account = await create_account(db_session, email="bob@example.com")

        await reset_service.request("bob@example.com")

        fresh = await account_repo.get_fresh(account.id)
        assert fresh.reset_password_token_hash is not None
        assert fresh.reset_password_token_hash != outbox.last.token
        assert "/reset-password?token=" in outbox.last.link

    async def test_change_request_uses_change_link(self, reset_service, db_session, outbox):
        account = await create_account(db_session, email="bob@example.com")

        result = await reset_service.request_change(account.id)

        assert result.success is True
        assert "/change-password?token=" in outbox.last.link


class TestReset:
    """Spending a reset token."""

    async def test_reset_changes_password(self, reset_service, db_session, account_repo, outbox):
        account = await create_account(db_session, email="bob@example.com")
        await reset_service.request("bob@example.com")

        await reset_service.reset(outbox.last.token, "brand-new-pass")

        fresh = await account_repo.get_fresh(account.id)
        assert verify_password("brand-new-pass", fresh.password_hash)
        assert not verify_password(DEFAULT_TEST_PASSWORD, fresh.password_hash)
        assert fresh.reset_password_token_hash is None

    async def test_reset_revokes_sessions(
        self, reset_service, db_session, session_store, outbox
    ):
        account = await create_account(db_session, email="bob@example.com")
        first = await session_store.create(account.id)
        second = await session_store.create(account.id)
        await reset_service.request("bob@example.com")

        await reset_service.reset(outbox.last.token, "brand-new-pass")

        assert await session_store.get_account_id(first) is None
        assert await session_store.get_account_id(second) is None

    async def test_token_is_single_use(self, reset_service, db_session, outbox):
        await create_account(db_session, email="bob@example.com")
        await reset_service.request("bob@example.com")
        token = outbox.last.token

        await reset_service.reset(token, "brand-new-pass")

        with pytest.raises(InvalidTokenError):
            await reset_service.reset(token, "another-pass")


class TestChangePassword:
    async def test_own_token_changes_password(
        self, reset_service, db_session, account_repo, outbox
    ):
        account = await create_account(db_session, email="bob@example.com")
        await reset_service.request_change(account.id)

        await reset_service.change_password(account.id, outbox.last.token, "brand-new-pass")

        fresh = await account_repo.get_fresh(account.id)
        assert verify_password("brand-new-pass", fresh.password_hash)

    async def test_other_accounts_token_is_invalid(
        self, reset_service, db_session, account_repo, outbox
    ):
        owner = await create_account(db_session, email="owner@example.com")
        intruder = await create_account(db_session, email="intruder@example.com")
        await reset_service.request_change(owner.id)
        token = outbox.last.token

        with pytest.raises(InvalidTokenError):
            await reset_service.change_password(intruder.id, token, "hijacked-pass")

        # The owner's token survives the failed attempt
        fresh = await account_repo.get_fresh(owner.id)
        assert fresh.reset_password_token_hash is not None
        assert verify_password(DEFAULT_TEST_PASSWORD, fresh.password_hash)
