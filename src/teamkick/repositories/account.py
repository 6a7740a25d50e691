"""Repository for Account entity."""

from datetime import datetime
from typing import Any

from sqlmodel import select, update

from src.teamkick.models import Account, TokenPurpose
from src.teamkick.models.base import utc_now
from src.teamkick.repositories.base import BaseRepository

# (token hash column, expiry column) per purpose
_TOKEN_COLUMNS: dict[TokenPurpose, tuple[str, str]] = {
    TokenPurpose.VERIFY_EMAIL: ("verification_token_hash", "verification_token_expires_at"),
    TokenPurpose.RESET_PASSWORD: ("reset_password_token_hash", "reset_password_token_expires_at"),
}


def token_columns(purpose: TokenPurpose) -> tuple[str, str]:
    return _TOKEN_COLUMNS[purpose]


class AccountRepository(BaseRepository[Account]):
    """Repository for accounts and their single-use token slots."""

    model = Account

    async def get_fresh(self, account_id: int) -> Account | None:
        """Load an account from the database, overwriting any copy held by the session."""
        result = await self.session.execute(
            select(Account)
            .where(Account.id == account_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Account | None:
        result = await self.session.execute(select(Account).where(Account.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Account | None:
        """Emails are stored lower-cased."""
        result = await self.session.execute(
            select(Account).where(Account.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        return await self.get_by_username(username) is not None

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def get_by_token_hash(self, purpose: TokenPurpose, token_hash: str) -> Account | None:
        """Find the account currently holding a token (expired or not)."""
        hash_column, _ = token_columns(purpose)
        result = await self.session.execute(
            select(Account).where(getattr(Account, hash_column) == token_hash)
        )
        return result.scalar_one_or_none()

    def set_token(
        self, account: Account, purpose: TokenPurpose, token_hash: str, expires_at: datetime
    ) -> None:
        """Store a token on the account, replacing any previous one (no flush/commit)."""
        hash_column, expiry_column = token_columns(purpose)
        setattr(account, hash_column, token_hash)
        setattr(account, expiry_column, expires_at)
        account.updated_at = utc_now()
        self.session.add(account)

    def get_token_expiry(self, account: Account, purpose: TokenPurpose) -> datetime | None:
        _, expiry_column = token_columns(purpose)
        return getattr(account, expiry_column)

    async def consume_token(
        self,
        purpose: TokenPurpose,
        account_id: int,
        token_hash: str,
        values: dict[str, Any] | None = None,
    ) -> bool:
        """Clear the token and apply ``values`` only if the token is still in place.

        The WHERE clause re-checks the hash, so of two concurrent consumers
        exactly one sees a row updated.

        Returns:
            True if this call consumed the token.
        """
        hash_column, expiry_column = token_columns(purpose)
        stmt = (
            update(Account)
            .where(Account.id == account_id)  # type: ignore[arg-type]
            .where(getattr(Account, hash_column) == token_hash)
            .values(
                {
                    hash_column: None,
                    expiry_column: None,
                    "updated_at": utc_now(),
                    **(values or {}),
                }
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def clear_token(self, purpose: TokenPurpose, account_id: int, token_hash: str) -> bool:
        """Drop a token (used when it is found expired)."""
        return await self.consume_token(purpose, account_id, token_hash)

    def touch_login(self, account: Account) -> None:
        account.last_login_at = utc_now()
        self.session.add(account)
