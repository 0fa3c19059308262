from __future__ import annotations
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Sequence
from uuid import UUID
from fitchallenge.schemas.leaderboard import LeaderboardEntry
from fitchallenge.schemas.log import DailyLog
from fitchallenge.schemas.participant import Participant


def current_streak(logs: Iterable[DailyLog]) -> int:
    """
    Consecutive completed-workout days ending at the participant's latest
    logged day, scanning backwards. A missing day or a logged day without a
    completed workout ends the scan; if the latest log is itself incomplete
    the streak is 0.
    """
    completed_by_day: dict[date, bool] = {}
    for log in logs:
        completed_by_day[log.date] = completed_by_day.get(log.date, False) or log.workout_completed
    if not completed_by_day:
        return 0

    day = max(completed_by_day)
    streak = 0
    while completed_by_day.get(day):
        streak += 1
        day -= timedelta(days=1)
    return streak


def rank(participants: Sequence[Participant], all_logs: Iterable[DailyLog]) -> list[LeaderboardEntry]:
    """
    Roll every participant's logs up into a ranked leaderboard.

    Order: total points desc, then workout count desc, then earlier join
    first. Participant id is the last resort so that the order, and
    therefore every rank, is total and reproducible. Logs from unknown
    participants are ignored; participants without logs rank with zeros.
    """
    by_participant: dict[UUID, list[DailyLog]] = defaultdict(list)
    for log in all_logs:
        by_participant[log.participant_id].append(log)

    rows = []
    for p in participants:
        logs = by_participant.get(p.id, [])
        rows.append((
            p,
            sum(log.points for log in logs),
            sum(1 for log in logs if log.workout_completed),
            current_streak(logs),
        ))

    rows.sort(key=lambda r: (-r[1], -r[2], r[0].joined_at, str(r[0].id)))

    return [
        LeaderboardEntry(
            participant_id=p.id,
            username=p.username,
            joined_at=p.joined_at,
            total_points=total,
            workout_count=workouts,
            streak=streak,
            rank=i,
        )
        for i, (p, total, workouts, streak) in enumerate(rows, start=1)
    ]
