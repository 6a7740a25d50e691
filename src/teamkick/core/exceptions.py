"""Domain errors and the exception handlers that render them.

Every error kind raised by the services derives from TeamKickError and carries
a stable ``kind`` plus the HTTP status the API layer maps it to. Handlers add
the correlation id of the request to every error body.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.teamkick.core.logging import get_logger

logger = get_logger(__name__)

INVALID_TOKEN_DETAIL = "Invalid or expired token"
INVALID_CREDENTIALS_DETAIL = "Invalid username or password"


class TeamKickError(Exception):
    """Base class for errors surfaced to API clients."""

    kind: str = "error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateUsernameError(TeamKickError):
    kind = "duplicate_username"
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Username already exists"


class DuplicateEmailError(TeamKickError):
    kind = "duplicate_email"
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Email already registered"


class InvalidCredentialsError(TeamKickError):
    """Unknown username and wrong password are indistinguishable."""

    kind = "invalid_credentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = INVALID_CREDENTIALS_DETAIL


class InvalidTokenError(TeamKickError):
    kind = "invalid_token"
    status_code = status.HTTP_400_BAD_REQUEST
    detail = INVALID_TOKEN_DETAIL


class ExpiredTokenError(InvalidTokenError):
    """Kept apart for the service log; clients get the invalid token response."""


class AccountNotFoundError(TeamKickError):
    kind = "account_not_found"
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Account not found"


class NotAuthenticatedError(TeamKickError):
    kind = "not_authenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"


class AlreadyReviewedError(TeamKickError):
    kind = "already_reviewed"
    status_code = status.HTTP_409_CONFLICT
    detail = "Claim has already been reviewed"


class AlreadyClaimedError(TeamKickError):
    kind = "already_claimed"
    status_code = status.HTTP_409_CONFLICT
    detail = "Roster entry is already linked to a verified account"


class JoinCodeInvalidError(TeamKickError):
    kind = "join_code_invalid"
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Invalid join code"


class JoinCodeUnavailableError(TeamKickError):
    kind = "join_code_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Could not allocate a unique join code, try again"


class AlreadyMemberError(TeamKickError):
    kind = "already_member"
    status_code = status.HTTP_409_CONFLICT
    detail = "Already a member of this team"


class TeamNotFoundError(TeamKickError):
    kind = "team_not_found"
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Team not found"


class RosterEntryNotFoundError(TeamKickError):
    kind = "roster_entry_not_found"
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Team member not found"


class ClaimNotFoundError(TeamKickError):
    kind = "claim_not_found"
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Claim not found"


class SessionStoreUnavailableError(TeamKickError):
    kind = "session_store_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Sessions are temporarily unavailable"


# Non-fatal: recorded on results, never raised.
EMAIL_DISPATCH_FAILED = "email_dispatch_failed"
JOIN_CODE_IGNORED = "join_code_invalid"
SESSION_NOT_STARTED = "session_not_started"


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(TeamKickError)
    async def teamkick_exception_handler(request: Request, exc: TeamKickError) -> JSONResponse:
        logger.info(
            "Request rejected",
            kind=exc.kind,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "kind": exc.kind,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
