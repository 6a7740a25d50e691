"""Authentication service - password login and server-side sessions."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamkick.core.exceptions import InvalidCredentialsError
from src.teamkick.core.logging import get_logger
from src.teamkick.core.security import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)
from src.teamkick.core.sessions import SessionStore
from src.teamkick.models import Account
from src.teamkick.repositories import AccountRepository

logger = get_logger(__name__)


class AuthService:
    """Login, logout and session revocation."""

    def __init__(
        self,
        account_repo: AccountRepository,
        session: AsyncSession,
        session_store: SessionStore,
    ):
        self.account_repo = account_repo
        self.session = session
        self.session_store = session_store

    async def authenticate(self, username: str, password: str) -> Account:
        """Check credentials and return the account.

        An unknown username still pays for a full hash verification, and both
        failure paths raise the same InvalidCredentialsError.

        Legacy or outdated hashes are upgraded on success.
        """
        try:
            account = await self.account_repo.get_by_username(username)

            password_hash = account.password_hash if account else DUMMY_PASSWORD_HASH
            password_valid = verify_password(password, password_hash)

            if account is None or not password_valid:
                logger.info("Login failed", account_id=account.id if account else None)
                raise InvalidCredentialsError()

            if needs_rehash(account.password_hash):
                account.password_hash = hash_password(password)
                logger.info("Password hash upgraded", account_id=account.id)

            self.account_repo.touch_login(account)
            await self.session.commit()
            return account
        except InvalidCredentialsError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Authentication failed unexpectedly", error=str(e))
            raise

    async def login(self, username: str, password: str) -> tuple[Account, str]:
        """Authenticate and open a session. Returns (account, session_id)."""
        account = await self.authenticate(username, password)
        session_id = await self.session_store.create(account.id)  # type: ignore[arg-type]
        logger.info("Login succeeded", account_id=account.id)
        return account, session_id

    async def start_session(self, account: Account) -> str:
        """Open a session for an account that has just been created."""
        return await self.session_store.create(account.id)  # type: ignore[arg-type]

    async def logout(self, session_id: str) -> bool:
        return await self.session_store.delete(session_id)

    async def revoke_all_sessions(self, account_id: int) -> int:
        """Log the account out everywhere (password reset, compromise)."""
        return await self.session_store.revoke_all(account_id)
