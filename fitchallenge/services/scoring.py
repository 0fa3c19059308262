from __future__ import annotations
from fitchallenge.schemas.log import DailyLog, ScoreBreakdown, ScoreItem

MIN_WORKOUT_MINUTES = 30
WORKOUT_BASE_POINTS = 5
WORKOUT_BONUS_POINTS = 10
# The bonus tier applies once the running weekly tally exceeds this
WORKOUT_BONUS_AFTER = 5
SLEEP_MIN_HOURS = 7
SLEEP_POINTS = 5
SCREEN_TIME_MAX_HOURS = 5
SCREEN_TIME_POINTS = 5
NO_SUGAR_POINTS = 4
STEP_GOAL = 12000
STEP_POINTS = 5

RULES = [
    {"label": "workout", "rule": f"Completed workout of at least {MIN_WORKOUT_MINUTES} minutes", "points": WORKOUT_BASE_POINTS},
    {"label": "workout", "rule": f"Workout once more than {WORKOUT_BONUS_AFTER} workouts are logged this week (Monday start)", "points": WORKOUT_BONUS_POINTS},
    {"label": "sleep", "rule": f"{SLEEP_MIN_HOURS}+ hours of sleep", "points": SLEEP_POINTS},
    {"label": "screen", "rule": f"Under {SCREEN_TIME_MAX_HOURS} hours of screen time", "points": SCREEN_TIME_POINTS},
    {"label": "sugar", "rule": "No sugar today", "points": NO_SUGAR_POINTS},
    {"label": "steps", "rule": f"{STEP_GOAL:,}+ steps", "points": STEP_POINTS},
]


def workout_points(log: DailyLog, weekly_workout_count: int) -> int:
    if not log.workout_completed:
        return 0
    if log.workout_duration_minutes is None or log.workout_duration_minutes < MIN_WORKOUT_MINUTES:
        return 0
    return WORKOUT_BONUS_POINTS if weekly_workout_count > WORKOUT_BONUS_AFTER else WORKOUT_BASE_POINTS


def score(log: DailyLog, weekly_workout_count: int) -> tuple[int, ScoreBreakdown]:
    """
    Points earned by one day's log.

    Each rule is evaluated on its own and the awarded ones are summed; absent
    optional fields award nothing and are left out of the breakdown.

    Args:
        log: The day's log. Its stored `points` is ignored.
        weekly_workout_count: Completed-workout days in the log's Monday-start
            week up to and including the log's date (see `weekly_workout_count`).

    Returns:
        (points, breakdown) with breakdown items in rule order.

    Examples:
        >>> from datetime import date
        >>> from uuid import uuid4
        >>> log = DailyLog(participant_id=uuid4(), date=date(2025, 1, 20), workout_completed=True,
        ...                workout_duration_minutes=45, sleep_hours=8, no_sugar=True)
        >>> score(log, 3)[0]
        14
    """
    items: list[ScoreItem] = []

    workout = workout_points(log, weekly_workout_count)
    if workout:
        items.append(ScoreItem(label="workout", points=workout))
    if log.sleep_hours is not None and log.sleep_hours >= SLEEP_MIN_HOURS:
        items.append(ScoreItem(label="sleep", points=SLEEP_POINTS))
    if log.screen_time_hours is not None and log.screen_time_hours < SCREEN_TIME_MAX_HOURS:
        items.append(ScoreItem(label="screen", points=SCREEN_TIME_POINTS))
    if log.no_sugar:
        items.append(ScoreItem(label="sugar", points=NO_SUGAR_POINTS))
    if log.step_count is not None and log.step_count >= STEP_GOAL:
        items.append(ScoreItem(label="steps", points=STEP_POINTS))

    breakdown = ScoreBreakdown(items=items)
    return breakdown.total, breakdown
