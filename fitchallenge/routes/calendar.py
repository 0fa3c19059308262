from __future__ import annotations
from datetime import date
from fastapi import APIRouter, Depends, Query
from fitchallenge.deps import get_state
from fitchallenge.schemas.calendar import Direction, WeekView
from fitchallenge.services.dashboard import calendar_week
from fitchallenge.state import AppState

router = APIRouter(prefix="/calendar", tags=["calendar"])

@router.get("/week", response_model=WeekView)
async def week(
    start: date | None = Query(default=None, description="Any date in the currently shown week"),
    direction: Direction | None = Query(default=None),
    selected: date | None = Query(default=None),
    state: AppState = Depends(get_state),
):
    return await calendar_week(state, start, direction, selected)
