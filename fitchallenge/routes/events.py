from __future__ import annotations
from typing import Literal
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from fitchallenge.deps import get_state
from fitchallenge.state import AppState

router = APIRouter(prefix="/events", tags=["events"])

class ChangeEvent(BaseModel):
    table: Literal["daily_logs", "participants"]

@router.post("/change", status_code=202)
async def change(event: ChangeEvent, state: AppState = Depends(get_state)):
    """Entry point for whatever push or poll transport watches the store."""
    state.feed.publish(event.table)
    return {"accepted": True, "table": event.table}
