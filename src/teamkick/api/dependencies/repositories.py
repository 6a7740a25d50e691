"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.teamkick.api.dependencies.db import DBSession
from src.teamkick.repositories import (
    AccountRepository,
    MemberClaimRepository,
    MembershipRepository,
    RosterRepository,
    TeamRepository,
)


def get_account_repository(session: DBSession) -> AccountRepository:
    return AccountRepository(session)


def get_team_repository(session: DBSession) -> TeamRepository:
    return TeamRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_roster_repository(session: DBSession) -> RosterRepository:
    return RosterRepository(session)


def get_claim_repository(session: DBSession) -> MemberClaimRepository:
    return MemberClaimRepository(session)


AccountRepo = Annotated[AccountRepository, Depends(get_account_repository)]
TeamRepo = Annotated[TeamRepository, Depends(get_team_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
RosterRepo = Annotated[RosterRepository, Depends(get_roster_repository)]
ClaimRepo = Annotated[MemberClaimRepository, Depends(get_claim_repository)]
