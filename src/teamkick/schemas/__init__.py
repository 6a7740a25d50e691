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
from src.teamkick.schemas.claim import ClaimCreate, ClaimNotification, ClaimRead, ClaimReject
from src.teamkick.schemas.pagination import PaginatedResponse
from src.teamkick.schemas.team import (
    JoinCodeRequest,
    MembershipRead,
    TeamCreate,
    TeamRead,
    TeamSummary,
)

__all__ = [
    # Account
    "AccountRead",
    # Auth
    "EmailRequest",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PasswordResetConfirm",
    "RegisterRequest",
    "RegisterResponse",
    "VerifyEmailRequest",
    "VerifyEmailResponse",
    # Claims
    "ClaimCreate",
    "ClaimNotification",
    "ClaimRead",
    "ClaimReject",
    # Pagination
    "PaginatedResponse",
    # Teams
    "JoinCodeRequest",
    "MembershipRead",
    "TeamCreate",
    "TeamRead",
    "TeamSummary",
]
