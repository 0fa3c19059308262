from __future__ import annotations
import math
from datetime import date, timedelta
from typing import Iterable
from fitchallenge.schemas.calendar import CalendarDay, Direction, WeekView, WeekWindow


def monday_of(d: date) -> date:
    # Monday = 0
    return d - timedelta(days=d.weekday())


class ChallengeCalendar:
    """
    The fixed, inclusive challenge window and the week arithmetic bounded to it.

    All comparisons are on calendar dates; there is no time-of-day component.

    Examples:
        >>> cal = ChallengeCalendar(date(2025, 1, 19), date(2025, 3, 1))
        >>> cal.is_within_challenge(date(2025, 3, 1))
        True
        >>> cal.week_window(date(2025, 1, 22)).start
        datetime.date(2025, 1, 20)
    """

    def __init__(self, start_date: date, end_date: date):
        if start_date > end_date:
            raise ValueError(f"challenge start {start_date} is after end {end_date}")
        self._start = start_date
        self._end = end_date

    @property
    def start_date(self) -> date:
        return self._start

    @property
    def end_date(self) -> date:
        return self._end

    @property
    def total_weeks(self) -> int:
        return math.ceil(((self._end - self._start).days + 1) / 7)

    def is_within_challenge(self, d: date) -> bool:
        return self._start <= d <= self._end

    def week_window(self, d: date) -> WeekWindow:
        start = monday_of(d)
        return WeekWindow(start=start, end=start + timedelta(days=6))

    def navigate(self, current_week_start: date, direction: Direction) -> WeekWindow:
        """
        Step one week back or forward from `current_week_start`.

        The adjacent week is returned only if its Monday is inside the challenge
        window; otherwise the current week comes back unchanged. Because the
        check is on the Monday, a window that starts mid-week cannot be reached
        by navigating backwards into its first partial week.
        """
        current = self.week_window(current_week_start)
        step = timedelta(days=7 if direction == "next" else -7)
        candidate = current.start + step
        if not self.is_within_challenge(candidate):
            return current
        return self.week_window(candidate)

    def can_navigate(self, current_week_start: date, direction: Direction) -> bool:
        current = self.week_window(current_week_start)
        return self.navigate(current.start, direction) != current

    def initial_week(self, today: date) -> WeekWindow:
        """Week shown on first load: today's week, clamped to the window's endpoints."""
        anchor = min(max(today, self._start), self._end)
        return self.week_window(anchor)

    def week_number(self, d: date) -> int:
        """1-based week of the challenge containing `d`, counted from the start date."""
        anchor = min(max(d, self._start), self._end)
        return (anchor - self._start).days // 7 + 1

    def week_view(self, week_start: date, selected: date | None = None, logged_dates: Iterable[date] = ()) -> WeekView:
        window = self.week_window(week_start)
        logged = set(logged_dates)
        days = [
            CalendarDay(
                date=d,
                in_challenge=self.is_within_challenge(d),
                has_log=d in logged,
                selected=d == selected,
            )
            for d in window.days()
        ]
        return WeekView(
            start=window.start,
            end=window.end,
            week_number=self.week_number(window.start),
            total_weeks=self.total_weeks,
            can_go_prev=self.can_navigate(window.start, "prev"),
            can_go_next=self.can_navigate(window.start, "next"),
            days=days,
        )
