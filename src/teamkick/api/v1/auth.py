"""Authentication endpoints - registration, sessions, email tokens."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Header, Response, status
from starlette.requests import Request

from src.teamkick.api.dependencies import (
    AuthServiceDep,
    CurrentAccount,
    EmailVerificationServiceDep,
    PasswordResetServiceDep,
    RegistrationServiceDep,
    SessionId,
)
from src.teamkick.core.config import get_settings
from src.teamkick.core.rate_limit import (
    LOGIN_LIMIT,
    REGISTER_LIMIT,
    TOKEN_CONFIRM_LIMIT,
    TOKEN_REQUEST_LIMIT,
    limiter,
)
from src.teamkick.schemas.account import AccountRead
from src.teamkick.schemas.auth import (
    EmailRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PasswordResetConfirm,
    RegisterRequest,
    RegisterResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])

AcceptLanguage = Annotated[str | None, Header(alias="Accept-Language")]

# Same answer whether or not the address belongs to an account
ENUMERATION_SAFE_MESSAGE = "If the address is registered, an email is on its way"


def _set_session_cookie(response: Response, session_id: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def _clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account created",
            "content": {
                "application/json": {
                    "example": {
                        "account": {
                            "id": 1,
                            "username": "alice",
                            "full_name": "Alice",
                            "email": "alice@example.com",
                            "role": "player",
                            "is_email_verified": False,
                            "onboarding_completed": True,
                        },
                        "team_id": 7,
                        "email_sent": False,
                        "email_queued": True,
                        "warnings": [],
                    }
                }
            },
        },
        400: {"description": "Username or email already registered"},
    },
)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request,
    response: Response,
    register_data: RegisterRequest,
    background_tasks: BackgroundTasks,
    service: RegistrationServiceDep,
    accept_language: AcceptLanguage = None,
) -> RegisterResponse:
    """Create an account, optionally joining a team by code.

    The account is signed in right away; the verification email goes out
    after the response is sent.
    """
    result = await service.register(
        username=register_data.username,
        password=register_data.password,
        full_name=register_data.full_name,
        role=register_data.role,
        email=register_data.email,
        join_code=register_data.join_code,
        agreed_to_terms=register_data.agreed_to_terms,
        language=accept_language,
        background_tasks=background_tasks,
    )

    if result.session_id:
        _set_session_cookie(response, result.session_id)

    return RegisterResponse(
        account=AccountRead.model_validate(result.account),
        team_id=result.membership.team_id if result.membership else None,
        email_sent=result.email_sent,
        email_queued=result.email_queued,
        warnings=result.warnings,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid credentials"}},
)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    response: Response,
    login_data: LoginRequest,
    service: AuthServiceDep,
) -> LoginResponse:
    """Check username and password and open a session (cookie)."""
    account, session_id = await service.login(login_data.username, login_data.password)
    _set_session_cookie(response, session_id)
    return LoginResponse(account=AccountRead.model_validate(account))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response, session_id: SessionId, service: AuthServiceDep) -> None:
    """End the current session. Succeeds for anonymous callers too."""
    if session_id:
        await service.logout(session_id)
    _clear_session_cookie(response)


@router.get("/me", response_model=AccountRead)
async def me(account: CurrentAccount) -> AccountRead:
    return account


@router.post("/verify-email", response_model=VerifyEmailResponse)
@limiter.limit(TOKEN_CONFIRM_LIMIT)
async def verify_email(
    request: Request,
    data: VerifyEmailRequest,
    service: EmailVerificationServiceDep,
) -> VerifyEmailResponse:
    """Confirm an email address with the token from the verification email."""
    account = await service.confirm(data.token)
    return VerifyEmailResponse(
        message="Email verified successfully",
        account=AccountRead.model_validate(account),
    )


@router.post("/verify-email/request", response_model=MessageResponse)
@limiter.limit(TOKEN_REQUEST_LIMIT)
async def request_verification(
    request: Request,
    account: CurrentAccount,
    service: EmailVerificationServiceDep,
    accept_language: AcceptLanguage = None,
) -> MessageResponse:
    """Send a fresh verification email to the signed-in account."""
    result = await service.request_for_account(account.id, accept_language)
    if result is None:
        return MessageResponse(message="Email is already verified")
    if not result.success:
        return MessageResponse(message="Verification email could not be sent, try again later")
    return MessageResponse(message="Verification email sent")


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
@limiter.limit(TOKEN_REQUEST_LIMIT)
async def resend_verification(
    request: Request,
    data: EmailRequest,
    service: EmailVerificationServiceDep,
    accept_language: AcceptLanguage = None,
) -> MessageResponse:
    await service.resend(data.email, accept_language)
    return MessageResponse(message=ENUMERATION_SAFE_MESSAGE)


@router.post(
    "/password-reset/request",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
@limiter.limit(TOKEN_REQUEST_LIMIT)
async def request_password_reset(
    request: Request,
    data: EmailRequest,
    service: PasswordResetServiceDep,
    accept_language: AcceptLanguage = None,
) -> MessageResponse:
    await service.request(data.email, accept_language)
    return MessageResponse(message=ENUMERATION_SAFE_MESSAGE)


@router.post("/password-reset/confirm", response_model=MessageResponse)
@limiter.limit(TOKEN_CONFIRM_LIMIT)
async def confirm_password_reset(
    request: Request,
    response: Response,
    data: PasswordResetConfirm,
    service: PasswordResetServiceDep,
) -> MessageResponse:
    """Set a new password. Every open session of the account is ended."""
    await service.reset(data.token, data.password)
    _clear_session_cookie(response)
    return MessageResponse(message="Password updated, please sign in again")


@router.post("/change-password/request", response_model=MessageResponse)
@limiter.limit(TOKEN_REQUEST_LIMIT)
async def request_password_change(
    request: Request,
    account: CurrentAccount,
    service: PasswordResetServiceDep,
    accept_language: AcceptLanguage = None,
) -> MessageResponse:
    result = await service.request_change(account.id, accept_language)
    if not result.success:
        return MessageResponse(message="Email could not be sent, try again later")
    return MessageResponse(message="Check your email to continue")


@router.post("/change-password/confirm", response_model=MessageResponse)
@limiter.limit(TOKEN_CONFIRM_LIMIT)
async def confirm_password_change(
    request: Request,
    response: Response,
    account: CurrentAccount,
    data: PasswordResetConfirm,
    service: PasswordResetServiceDep,
) -> MessageResponse:
    await service.change_password(account.id, data.token, data.password)
    _clear_session_cookie(response)
    return MessageResponse(message="Password updated, please sign in again")
