from __future__ import annotations
from fastapi import APIRouter, Depends
from fitchallenge.deps import get_state
from fitchallenge.schemas.leaderboard import LeaderboardSnapshot
from fitchallenge.services.scoring import RULES
from fitchallenge.state import AppState

router = APIRouter(tags=["leaderboard"])

@router.get("/leaderboard", response_model=LeaderboardSnapshot)
async def leaderboard(state: AppState = Depends(get_state)):
    return await state.recomputer.latest()

@router.get("/rules")
async def rules(state: AppState = Depends(get_state)):
    cal = state.calendar
    return {
        "start_date": cal.start_date.isoformat(),
        "end_date": cal.end_date.isoformat(),
        "total_weeks": cal.total_weeks,
        "points": RULES,
    }
