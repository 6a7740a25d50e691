"""Authentication and authorization dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, Path, Request, status

from src.teamkick.api.dependencies.repositories import AccountRepo, MembershipRepo
from src.teamkick.api.dependencies.services import SessionStoreDep
from src.teamkick.core.config import get_settings
from src.teamkick.core.exceptions import NotAuthenticatedError
from src.teamkick.core.logging import bind_account_context
from src.teamkick.models import TEAM_ADMIN_ROLES, TeamMembership, UserRole
from src.teamkick.schemas.account import AccountRead
from src.teamkick.services import IdentityResolver


def get_session_id(request: Request) -> str | None:
    """Session id from the session cookie, if any."""
    return request.cookies.get(get_settings().session_cookie_name)


SessionId = Annotated[str | None, Depends(get_session_id)]


async def get_optional_account(
    session_id: SessionId,
    session_store: SessionStoreDep,
    account_repo: AccountRepo,
) -> AccountRead | None:
    """Resolve the session cookie to an account, or None for anonymous requests."""
    if not session_id:
        return None

    account_id = await session_store.get_account_id(session_id)
    account = await IdentityResolver(account_repo).resolve(account_id)
    if account is not None:
        bind_account_context(account.id, account.email)
    return account


OptionalAccount = Annotated[AccountRead | None, Depends(get_optional_account)]


async def get_current_account(account: OptionalAccount) -> AccountRead:
    """Require a signed-in account."""
    if account is None:
        raise NotAuthenticatedError()
    return account


CurrentAccount = Annotated[AccountRead, Depends(get_current_account)]


async def require_team_member(
    team_id: Annotated[int, Path()],
    account: CurrentAccount,
    membership_repo: MembershipRepo,
) -> TeamMembership:
    """Require membership in the team named by the ``team_id`` path parameter."""
    membership = await membership_repo.get_membership(team_id, account.id)
    if membership is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this team",
        )
    return membership


TeamMember = Annotated[TeamMembership, Depends(require_team_member)]


async def require_team_admin(
    team_id: Annotated[int, Path()],
    account: CurrentAccount,
    membership_repo: MembershipRepo,
) -> AccountRead:
    """Require an admin or coach membership in the team.

    Superusers manage every team.
    """
    if account.role == UserRole.SUPERUSER.value:
        return account

    membership = await membership_repo.get_membership(team_id, account.id)
    if membership is None or membership.role not in TEAM_ADMIN_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Team admin role required for this operation",
        )
    return account


TeamAdmin = Annotated[AccountRead, Depends(require_team_admin)]
