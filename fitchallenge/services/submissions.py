from __future__ import annotations
from datetime import date
from typing import TYPE_CHECKING, Any
from uuid import UUID
import pydantic
import structlog
from fitchallenge.errors import ConflictError, OutOfWindowError, ParticipantNotFoundError, StaleEditError, ValidationError
from fitchallenge.schemas.log import DailyLog, DailyLogSubmission, ScoreBreakdown
from fitchallenge.services.calendar import monday_of
from fitchallenge.services.notifications import TABLE_DAILY_LOGS
from fitchallenge.services.scoring import score
from fitchallenge.services.weekly import weekly_workout_count

if TYPE_CHECKING:
    from fitchallenge.state import AppState

log = structlog.get_logger()


def validate_submission(data: dict[str, Any]) -> DailyLogSubmission:
    """Boundary check for callers that don't go through a pydantic-validated request body."""
    try:
        return DailyLogSubmission.model_validate(data)
    except pydantic.ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ValidationError(f"Invalid daily log fields: {fields}") from e


async def get_today_log(state: AppState, participant_id: UUID) -> tuple[DailyLog, ScoreBreakdown] | None:
    """The caller's log for today, if any, with its breakdown re-derived from the week so far."""
    today = state.clock.today()
    entry = await state.logs.get(participant_id, today)
    if entry is None:
        return None
    week = await state.logs.query(participant_id, monday_of(today), today)
    _, breakdown = score(entry, weekly_workout_count(participant_id, today, week))
    return entry, breakdown


async def submit_daily_log(
    state: AppState,
    participant_id: UUID,
    submission: DailyLogSubmission,
    log_date: date | None = None,
) -> tuple[DailyLog, ScoreBreakdown]:
    """
    Score and upsert the caller's log for today.

    Re-submitting for the same day replaces the earlier log. The weekly tally
    used for the workout tier counts this submission, so sending the same
    payload twice stores the same points.
    """
    today = state.clock.today()
    log_date = log_date or today
    bound = log.bind(participant_id=str(participant_id), date=log_date.isoformat())

    if not state.calendar.is_within_challenge(log_date):
        bound.warning("daily_log.rejected", reason="out_of_window")
        raise OutOfWindowError(
            f"Logs can only be submitted between {state.calendar.start_date} and {state.calendar.end_date}"
        )
    if log_date != today:
        bound.warning("daily_log.rejected", reason="stale_edit", today=today.isoformat())
        raise StaleEditError()
    if await state.participants.get(participant_id) is None:
        raise ParticipantNotFoundError()

    existing = await state.logs.get(participant_id, log_date)
    proof = state.media.resolve(submission.workout_proof_handle) if submission.workout_proof_handle else None
    entry = DailyLog(
        participant_id=participant_id,
        date=log_date,
        workout_completed=submission.workout_completed,
        workout_duration_minutes=submission.workout_duration_minutes,
        workout_proof_reference=proof,
        sleep_hours=submission.sleep_hours,
        screen_time_hours=submission.screen_time_hours,
        no_sugar=submission.no_sugar,
        step_count=submission.step_count,
        created_at=existing.created_at if existing else state.clock.now(),
    )

    week = [
        prior for prior in await state.logs.query(participant_id, monday_of(log_date), log_date)
        if prior.date != log_date
    ]
    week.append(entry)
    points, breakdown = score(entry, weekly_workout_count(participant_id, log_date, week))
    entry = entry.model_copy(update={"points": points})

    for attempt in range(state.upsert_retries + 1):
        try:
            saved = await state.logs.upsert(entry)
            break
        except ConflictError:
            if attempt == state.upsert_retries:
                raise
            bound.warning("daily_log.retrying_upsert", attempt=attempt + 1)

    bound.info("daily_log.upserted", points=points, replaced=existing is not None)
    state.feed.publish(TABLE_DAILY_LOGS)
    return saved, breakdown
