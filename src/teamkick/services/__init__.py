from src.teamkick.services.auth_service import AuthService
from src.teamkick.services.claim_service import MemberClaimService, PendingClaimsNotice
from src.teamkick.services.email_verification_service import EmailVerificationService
from src.teamkick.services.identity_service import IdentityResolver
from src.teamkick.services.password_reset_service import PasswordResetService
from src.teamkick.services.registration_service import RegistrationResult, RegistrationService
from src.teamkick.services.team_service import TeamService

__all__ = [
    "AuthService",
    "EmailVerificationService",
    "IdentityResolver",
    "MemberClaimService",
    "PasswordResetService",
    "PendingClaimsNotice",
    "RegistrationResult",
    "RegistrationService",
    "TeamService",
]
