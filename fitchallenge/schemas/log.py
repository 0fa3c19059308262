from __future__ import annotations
import datetime as dt
from typing import Literal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class DailyLog(BaseModel):
    """One participant's entry for one calendar date; (participant_id, date) is unique."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    participant_id: UUID
    date: dt.date
    workout_completed: bool = False
    workout_duration_minutes: int | None = None
    workout_proof_reference: str | None = None
    sleep_hours: float | None = None
    screen_time_hours: float | None = None
    no_sugar: bool = False
    step_count: int | None = None
    points: int = 0
    created_at: dt.datetime | None = None

    @property
    def key(self) -> tuple[UUID, dt.date]:
        return self.participant_id, self.date


class DailyLogSubmission(BaseModel):
    workout_completed: bool = False
    workout_duration_minutes: int | None = Field(default=None, ge=0)
    workout_proof_handle: str | None = Field(default=None, description="Uploaded-file handle or URL")
    sleep_hours: float | None = Field(default=None, ge=0, le=24)
    screen_time_hours: float | None = Field(default=None, ge=0, le=24)
    no_sugar: bool = False
    step_count: int | None = Field(default=None, ge=0)


class ScoreItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    points: int


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: list[ScoreItem] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(item.points for item in self.items)

    def points_for(self, label: str) -> int:
        return sum(item.points for item in self.items if item.label == label)

    def describe(self) -> str:
        return ", ".join(f"+{item.points} {item.label}" for item in self.items)


class DailyLogPublic(BaseModel):
    participant_id: UUID
    date: dt.date
    workout_completed: bool
    workout_duration_minutes: int | None
    workout_proof_reference: str | None
    sleep_hours: float | None
    screen_time_hours: float | None
    no_sugar: bool
    step_count: int | None
    points: int
    breakdown: list[ScoreItem]
    created_at: dt.datetime | None = None


class DayLogRow(BaseModel):
    participant_id: UUID
    username: str
    date: dt.date
    workout_completed: bool
    workout_duration_minutes: int | None
    workout_proof_reference: str | None
    sleep_hours: float | None
    screen_time_hours: float | None
    no_sugar: bool
    step_count: int | None
    points: int
    workout_points: int
    breakdown: str
    created_at: dt.datetime | None = None


class DayTable(BaseModel):
    """A day's rows plus the sort state they were ordered by, echoed back for the next header click."""
    date: dt.date
    sort: str
    direction: Literal["asc", "desc"]
    rows: list[DayLogRow]
