"""Identity resolution for authenticated requests."""

from src.teamkick.core.logging import get_logger
from src.teamkick.repositories import AccountRepository
from src.teamkick.schemas.account import AccountRead

logger = get_logger(__name__)


class IdentityResolver:
    """Turn the account id stored in a session into the current account.

    The account is re-read from the database on every call, so role and
    verification changes apply to the very next request. The returned
    ``AccountRead`` has no password field.
    """

    def __init__(self, account_repo: AccountRepository):
        self.account_repo = account_repo

    async def resolve(self, account_id: int | None) -> AccountRead | None:
        """Return the account, or None when the session points nowhere."""
        if account_id is None:
            return None

        account = await self.account_repo.get_fresh(account_id)
        if account is None:
            logger.warning("Session references missing account", account_id=account_id)
            return None

        return AccountRead.model_validate(account)
