from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AccountRead(BaseModel):
    """Public view of an account. There is deliberately no password field."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    full_name: str
    email: str | None
    role: str
    is_email_verified: bool
    onboarding_completed: bool
    last_login_at: datetime | None = None
    created_at: datetime
