from __future__ import annotations
from datetime import date
from typing import TYPE_CHECKING
from fitchallenge.schemas.calendar import Direction, WeekView
from fitchallenge.schemas.log import DayLogRow, DayTable
from fitchallenge.services.calendar import monday_of
from fitchallenge.services.log_table import SortState, sort
from fitchallenge.services.scoring import score
from fitchallenge.services.weekly import weekly_counts_as_of

if TYPE_CHECKING:
    from fitchallenge.state import AppState


async def day_table(state: AppState, d: date, order: SortState = SortState()) -> DayTable:
    """Every participant's log for `d`, with the workout tier and breakdown as of that day."""
    participants = {p.id: p for p in await state.participants.list_all()}
    week = await state.logs.query(None, monday_of(d), d)
    counts = weekly_counts_as_of(d, week)

    rows = []
    for entry in (e for e in week if e.date == d):
        _, breakdown = score(entry, counts.get(entry.participant_id, 0))
        p = participants.get(entry.participant_id)
        rows.append(DayLogRow(
            participant_id=entry.participant_id,
            username=p.username if p else str(entry.participant_id),
            date=entry.date,
            workout_completed=entry.workout_completed,
            workout_duration_minutes=entry.workout_duration_minutes,
            workout_proof_reference=entry.workout_proof_reference,
            sleep_hours=entry.sleep_hours,
            screen_time_hours=entry.screen_time_hours,
            no_sugar=entry.no_sugar,
            step_count=entry.step_count,
            points=entry.points,
            workout_points=breakdown.points_for("workout"),
            breakdown=breakdown.describe(),
            created_at=entry.created_at,
        ))
    return DayTable(date=d, sort=order.field, direction=order.direction, rows=sort(rows, order.field, order.direction))


async def calendar_week(
    state: AppState,
    week_start: date | None = None,
    direction: Direction | None = None,
    selected: date | None = None,
) -> WeekView:
    """The week to display: the requested week moved one step in `direction` when the window allows it."""
    cal = state.calendar
    window = cal.week_window(week_start) if week_start else cal.initial_week(state.clock.today())
    if direction:
        window = cal.navigate(window.start, direction)
    logged = {entry.date for entry in await state.logs.query(None, window.start, window.end)}
    if selected is None or selected not in window:
        selected = window.start
    return cal.week_view(window.start, selected=selected, logged_dates=logged)
