"""Team endpoints - creation and join-code enrolment."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.teamkick.api.dependencies import CurrentAccount, TeamAdmin, TeamServiceDep
from src.teamkick.core.rate_limit import JOIN_CODE_LIMIT, limiter
from src.teamkick.schemas.team import (
    JoinCodeRequest,
    MembershipRead,
    TeamCreate,
    TeamRead,
    TeamSummary,
)

router = APIRouter(prefix="/teams", tags=["teams"])


@router.post("", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
async def create_team(
    data: TeamCreate, account: CurrentAccount, service: TeamServiceDep
) -> TeamRead:
    """Create a team. The caller becomes its admin."""
    team = await service.create_team(data.name, account.id)
    return TeamRead.model_validate(team)


@router.post(
    "/join-code/validate",
    response_model=TeamSummary,
    responses={404: {"description": "No active team has this code"}},
)
@limiter.limit(JOIN_CODE_LIMIT)
async def validate_join_code(
    request: Request, data: JoinCodeRequest, service: TeamServiceDep
) -> TeamSummary:
    """Preview the team behind a code before registering or joining."""
    team = await service.validate_join_code(data.join_code)
    return TeamSummary.model_validate(team)


@router.post(
    "/join",
    response_model=MembershipRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "No active team has this code"},
        409: {"description": "Already a member of this team"},
    },
)
@limiter.limit(JOIN_CODE_LIMIT)
async def join_team(
    request: Request,
    data: JoinCodeRequest,
    account: CurrentAccount,
    service: TeamServiceDep,
) -> MembershipRead:
    membership = await service.join_team(account.id, data.join_code)
    return MembershipRead.model_validate(membership)


@router.get("/mine", response_model=list[MembershipRead])
async def my_memberships(account: CurrentAccount, service: TeamServiceDep) -> list[MembershipRead]:
    memberships = await service.list_memberships(account.id)
    return [MembershipRead.model_validate(m) for m in memberships]


@router.post("/{team_id}/join-code/regenerate", response_model=TeamRead)
async def regenerate_join_code(
    team_id: int, admin: TeamAdmin, service: TeamServiceDep
) -> TeamRead:
    """Replace the team's join code. The old code stops working at once."""
    team = await service.regenerate_join_code(team_id)
    return TeamRead.model_validate(team)
