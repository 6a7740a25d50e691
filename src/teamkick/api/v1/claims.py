"""Member claim endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from src.teamkick.api.dependencies import ClaimServiceDep, CurrentAccount, TeamAdmin, TeamMember
from src.teamkick.models import ClaimStatus
from src.teamkick.schemas.claim import ClaimCreate, ClaimNotification, ClaimRead, ClaimReject
from src.teamkick.schemas.pagination import PaginatedResponse

router = APIRouter(tags=["claims"])


@router.post(
    "/teams/{team_id}/claims",
    response_model=ClaimRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"description": "Identical pending claim already exists"},
        404: {"description": "Roster entry not found"},
        409: {"description": "Roster entry already linked to a verified account"},
    },
)
async def create_claim(
    team_id: int,
    data: ClaimCreate,
    response: Response,
    member: TeamMember,
    service: ClaimServiceDep,
) -> ClaimRead:
    """Claim a roster entry as your own. Repeating the request is harmless."""
    claim, created = await service.create_claim(team_id, data.roster_entry_id, member.account_id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return ClaimRead.model_validate(claim)


@router.get("/teams/{team_id}/claims", response_model=PaginatedResponse[ClaimRead])
async def list_team_claims(
    team_id: int,
    admin: TeamAdmin,
    service: ClaimServiceDep,
    claim_status: Annotated[ClaimStatus | None, Query(alias="status")] = None,
    cursor: Annotated[str | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
) -> PaginatedResponse[ClaimRead]:
    """Claims filed on the team, newest first."""
    claims, next_cursor, has_more = await service.list_team_claims(
        team_id, claim_status, cursor, limit
    )
    return PaginatedResponse(
        items=[ClaimRead.model_validate(c) for c in claims],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "/teams/{team_id}/claims/{claim_id}/approve",
    response_model=ClaimRead,
    responses={409: {"description": "Claim already reviewed or entry already linked"}},
)
async def approve_claim(
    team_id: int, claim_id: int, admin: TeamAdmin, service: ClaimServiceDep
) -> ClaimRead:
    claim = await service.approve(team_id, claim_id, admin.id)
    return ClaimRead.model_validate(claim)


@router.post(
    "/teams/{team_id}/claims/{claim_id}/reject",
    response_model=ClaimRead,
    responses={409: {"description": "Claim already reviewed"}},
)
async def reject_claim(
    team_id: int,
    claim_id: int,
    data: ClaimReject,
    admin: TeamAdmin,
    service: ClaimServiceDep,
) -> ClaimRead:
    claim = await service.reject(team_id, claim_id, admin.id, data.reason)
    return ClaimRead.model_validate(claim)


@router.get("/claims/mine", response_model=list[ClaimRead])
async def my_claims(
    account: CurrentAccount,
    service: ClaimServiceDep,
    team_id: Annotated[int | None, Query()] = None,
) -> list[ClaimRead]:
    claims = await service.list_my_claims(account.id, team_id)
    return [ClaimRead.model_validate(c) for c in claims]


@router.get("/claims/notifications", response_model=list[ClaimNotification])
async def claim_notifications(
    account: CurrentAccount, service: ClaimServiceDep
) -> list[ClaimNotification]:
    """Pending-claim counts for the teams you administer."""
    notices = await service.pending_notifications(account.id)
    return [
        ClaimNotification(
            team_id=n.team_id,
            team_name=n.team_name,
            count=n.count,
            latest_claim_id=n.latest_claim_id,
            message=n.message,
        )
        for n in notices
    ]
