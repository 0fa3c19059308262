from __future__ import annotations
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    participant_id: UUID
    username: str
    joined_at: datetime
    total_points: int
    workout_count: int
    streak: int
    rank: int


class LeaderboardSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    generation: int
    computed_at: datetime
    entries: list[LeaderboardEntry] = Field(default_factory=list)
