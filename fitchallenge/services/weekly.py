from __future__ import annotations
from collections import defaultdict
from datetime import date
from typing import Iterable
from uuid import UUID
from fitchallenge.schemas.log import DailyLog
from fitchallenge.services.calendar import monday_of


def weekly_workout_count(participant_id: UUID, d: date, log_history: Iterable[DailyLog]) -> int:
    """
    Running count of completed-workout days for `participant_id` in the
    Monday-start week containing `d`, from Monday through `d` inclusive.

    Later days of the same week are not counted, so the tally reflects the
    week as of `d` rather than its final total.
    """
    week_start = monday_of(d)
    days = {
        log.date
        for log in log_history
        if log.participant_id == participant_id
        and log.workout_completed
        and week_start <= log.date <= d
    }
    return len(days)


def weekly_counts_as_of(d: date, log_history: Iterable[DailyLog]) -> dict[UUID, int]:
    """`weekly_workout_count` for every participant present in `log_history`."""
    week_start = monday_of(d)
    days: dict[UUID, set[date]] = defaultdict(set)
    for log in log_history:
        if log.workout_completed and week_start <= log.date <= d:
            days[log.participant_id].add(log.date)
    return {pid: len(ds) for pid, ds in days.items()}
