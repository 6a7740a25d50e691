"""Team creation and join codes."""

import itertools

import pytest
from sqlmodel import select

from src.teamkick.core.exceptions import (
    AccountNotFoundError,
    AlreadyMemberError,
    JoinCodeInvalidError,
    JoinCodeUnavailableError,
    TeamNotFoundError,
)
from src.teamkick.core.security import JOIN_CODE_ALPHABET
from src.teamkick.models import RosterEntry, TeamRole
from tests.factories import TeamFactory
from tests.helpers import add_member, create_account

pytestmark = pytest.mark.integration

GENERATE_JOIN_CODE = "src.teamkick.services.team_service.generate_join_code"


class TestCreateTeam:
    """Creating a team."""

    async def test_creator_becomes_admin_and_verified_roster_entry(
        self, team_service, db_session, membership_repo
    ):
        creator = await create_account(db_session, full_name="Coach Carter")

        team = await team_service.create_team("Lions", creator.id)

        membership = await membership_repo.get_membership(team.id, creator.id)
        assert membership is not None
        assert membership.role == TeamRole.ADMIN.value

        result = await db_session.execute(select(RosterEntry).where(RosterEntry.team_id == team.id))
        roster = list(result.scalars().all())
        assert len(roster) == 1
        assert roster[0].account_id == creator.id
        assert roster[0].is_verified is True
        assert roster[0].full_name == "Coach Carter"

    async def test_join_code_shape(self, team_service, db_session):
        creator = await create_account(db_session)

        team = await team_service.create_team("Lions", creator.id)

        assert len(team.join_code) == 6
        assert set(team.join_code) <= set(JOIN_CODE_ALPHABET)

    async def test_unknown_creator(self, team_service):
        with pytest.raises(AccountNotFoundError):
            await team_service.create_team("Lions", 999_999)

    async def test_collision_draws_again(self, team_service, db_session, monkeypatch):
        db_session.add(TeamFactory.build(join_code="AAAAAA"))
        await db_session.commit()
        creator = await create_account(db_session)
        codes = iter(["AAAAAA", "BBBBBB"])
        monkeypatch.setattr(GENERATE_JOIN_CODE, lambda length: next(codes))

        team = await team_service.create_team("Lions", creator.id)

        assert team.join_code == "BBBBBB"

    async def test_exhausted_code_space(self, team_service, db_session, monkeypatch):
        db_session.add(TeamFactory.build(join_code="AAAAAA"))
        await db_session.commit()
        creator = await create_account(db_session)
        monkeypatch.setattr(GENERATE_JOIN_CODE, lambda length: "AAAAAA")

        with pytest.raises(JoinCodeUnavailableError):
            await team_service.create_team("Lions", creator.id)


class TestValidateJoinCode:
    async def test_case_insensitive(self, team_service, db_session):
        team = TeamFactory.build(join_code="XY34ZW")
        db_session.add(team)
        await db_session.commit()

        found = await team_service.validate_join_code(" xy34zw ")

        assert found.id == team.id

    async def test_unknown_code(self, team_service):
        with pytest.raises(JoinCodeInvalidError):
            await team_service.validate_join_code("NOPE99")

    async def test_deleted_team_code(self, team_service, db_session):
        db_session.add(TeamFactory.deleted(join_code="DEAD77"))
        await db_session.commit()

        with pytest.raises(JoinCodeInvalidError):
            await team_service.validate_join_code("DEAD77")


class TestJoinTeam:
    async def test_join_as_player_completes_onboarding(
        self, team_service, db_session, account_repo
    ):
        team = TeamFactory.build(join_code="JN45KM")
        db_session.add(team)
        account = await create_account(db_session, onboarding_completed=False)

        membership = await team_service.join_team(account.id, "jn45km")

        assert membership.team_id == team.id
        assert membership.role == TeamRole.PLAYER.value
        fresh = await account_repo.get_fresh(account.id)
        assert fresh.onboarding_completed is True

    async def test_joining_twice(self, team_service, db_session):
        team = TeamFactory.build(join_code="JN45KM")
        db_session.add(team)
        account = await create_account(db_session)
        await add_member(db_session, team, account)

        with pytest.raises(AlreadyMemberError):
            await team_service.join_team(account.id, "JN45KM")

    async def test_invalid_code(self, team_service, db_session):
        account = await create_account(db_session)

        with pytest.raises(JoinCodeInvalidError):
            await team_service.join_team(account.id, "NOPE99")

    async def test_list_memberships(self, team_service, db_session):
        account = await create_account(db_session)
        for _ in range(2):
            team = TeamFactory.build()
            db_session.add(team)
            await db_session.flush()
            await add_member(db_session, team, account)

        memberships = await team_service.list_memberships(account.id)

        assert len(memberships) == 2


class TestRegenerateJoinCode:
    async def test_old_code_stops_working(self, team_service, db_session):
        creator = await create_account(db_session)
        team = await team_service.create_team("Lions", creator.id)
        old_code = team.join_code

        updated = await team_service.regenerate_join_code(team.id)

        assert updated.join_code != old_code
        assert (await team_service.validate_join_code(updated.join_code)).id == team.id
        with pytest.raises(JoinCodeInvalidError):
            await team_service.validate_join_code(old_code)

    async def test_same_code_is_redrawn(self, team_service, db_session, monkeypatch):
        team = TeamFactory.build(join_code="AAAAAA")
        db_session.add(team)
        await db_session.commit()
        codes = itertools.chain(["AAAAAA"], itertools.repeat("CCCCCC"))
        monkeypatch.setattr(GENERATE_JOIN_CODE, lambda length: next(codes))

        updated = await team_service.regenerate_join_code(team.id)

        assert updated.join_code == "CCCCCC"

    async def test_unknown_team(self, team_service):
        with pytest.raises(TeamNotFoundError):
            await team_service.regenerate_join_code(999_999)
