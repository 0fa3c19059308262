from __future__ import annotations
from datetime import date
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query
from fitchallenge.deps import get_participant_id, get_state, http_error
from fitchallenge.errors import ChallengeError
from fitchallenge.schemas.log import DailyLog, DailyLogPublic, DailyLogSubmission, DayTable, ScoreBreakdown
from fitchallenge.services.dashboard import day_table
from fitchallenge.services.log_table import SortDirection, SortState, resolve_sort
from fitchallenge.services.submissions import get_today_log, submit_daily_log
from fitchallenge.state import AppState

router = APIRouter(prefix="/logs", tags=["logs"])

def to_public(entry: DailyLog, breakdown: ScoreBreakdown) -> DailyLogPublic:
    return DailyLogPublic(
        participant_id=entry.participant_id, date=entry.date,
        workout_completed=entry.workout_completed,
        workout_duration_minutes=entry.workout_duration_minutes,
        workout_proof_reference=entry.workout_proof_reference,
        sleep_hours=entry.sleep_hours, screen_time_hours=entry.screen_time_hours,
        no_sugar=entry.no_sugar, step_count=entry.step_count,
        points=entry.points, breakdown=breakdown.items, created_at=entry.created_at,
    )

@router.get("/today", response_model=DailyLogPublic)
async def today_log(state: AppState = Depends(get_state), participant_id: UUID = Depends(get_participant_id)):
    found = await get_today_log(state, participant_id)
    if not found:
        raise HTTPException(status_code=404, detail="No log for today yet")
    return to_public(*found)

@router.put("/today", response_model=DailyLogPublic)
async def put_today_log(
    payload: DailyLogSubmission,
    state: AppState = Depends(get_state),
    participant_id: UUID = Depends(get_participant_id),
):
    try:
        entry, breakdown = await submit_daily_log(state, participant_id, payload)
    except ChallengeError as e:
        raise http_error(e)
    return to_public(entry, breakdown)

@router.get("/day", response_model=DayTable)
async def logs_for_day(
    day: date = Query(..., alias="date"),
    sort: str | None = Query(default=None),
    direction: SortDirection | None = Query(default=None),
    current_sort: str = Query(default="participant"),
    current_direction: SortDirection = Query(default="asc"),
    state: AppState = Depends(get_state),
    participant_id: UUID = Depends(get_participant_id),
):
    order = resolve_sort(SortState(current_sort, current_direction), sort, direction)
    return await day_table(state, day, order)
