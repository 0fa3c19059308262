from __future__ import annotations
from datetime import datetime
from typing import Literal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

RosterSort = Literal["joined_at", "username"]


class Participant(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID
    username: str
    joined_at: datetime


class JoinRequest(BaseModel):
    username: str = Field(min_length=1, max_length=32)


class ParticipantPublic(BaseModel):
    id: UUID
    username: str
    joined_at: datetime
    is_me: bool = False
