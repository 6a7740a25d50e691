from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClaimCreate(BaseModel):
    roster_entry_id: int


class ClaimReject(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class ClaimRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    team_id: int
    roster_entry_id: int
    account_id: int
    status: str
    requested_at: datetime
    reviewed_at: datetime | None = None
    reviewed_by_id: int | None = None
    rejection_reason: str | None = None


class ClaimNotification(BaseModel):
    """Pending claims waiting on one administered team."""

    team_id: int
    team_name: str
    count: int
    latest_claim_id: int
    message: str
