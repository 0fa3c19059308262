from __future__ import annotations
import datetime as dt
from typing import Literal
from pydantic import BaseModel, ConfigDict

Direction = Literal["prev", "next"]


class WeekWindow(BaseModel):
    """Monday-start 7-day window; `end` is the Sunday."""
    model_config = ConfigDict(frozen=True)

    start: dt.date
    end: dt.date

    def days(self) -> list[dt.date]:
        return [self.start + dt.timedelta(days=i) for i in range(7)]

    def __contains__(self, d: dt.date) -> bool:
        return self.start <= d <= self.end


class CalendarDay(BaseModel):
    date: dt.date
    in_challenge: bool
    has_log: bool
    selected: bool


class WeekView(BaseModel):
    start: dt.date
    end: dt.date
    week_number: int
    total_weeks: int
    can_go_prev: bool
    can_go_next: bool
    days: list[CalendarDay]
