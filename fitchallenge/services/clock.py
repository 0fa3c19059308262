from __future__ import annotations
from datetime import date, datetime, timezone as dt_tz
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime: ...
    def today(self) -> date: ...


class SystemClock:
    """Wall clock; "today" is the calendar date in the challenge's reference timezone."""

    def __init__(self, tz_name: str = "UTC"):
        self.tz = ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(dt_tz.utc)

    def today(self) -> date:
        return self.now().astimezone(self.tz).date()


class FixedClock:
    def __init__(self, now: datetime, tz_name: str = "UTC"):
        if now.tzinfo is None:
            now = now.replace(tzinfo=dt_tz.utc)
        self._now = now
        self.tz = ZoneInfo(tz_name)

    def now(self) -> datetime:
        return self._now

    def today(self) -> date:
        return self._now.astimezone(self.tz).date()

    def set(self, now: datetime) -> None:
        if now.tzinfo is None:
            now = now.replace(tzinfo=dt_tz.utc)
        self._now = now
