from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class TeamRead(BaseModel):
    """Team as seen by its admins, join code included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    join_code: str
    created_at: datetime


class TeamSummary(BaseModel):
    """What a join code reveals before joining."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class JoinCodeRequest(BaseModel):
    join_code: str = Field(min_length=1, max_length=12)


class MembershipRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    team_id: int
    account_id: int
    role: str
    joined_at: datetime
