from __future__ import annotations
from fastapi import APIRouter, Depends, Request
from datetime import datetime, timezone
from fitchallenge.config import settings
from fitchallenge.deps import get_state
from fitchallenge.state import AppState

router = APIRouter()

@router.get("/health")
async def health(request: Request, state: AppState = Depends(get_state)):
    return {
        "status": "ok",
        "env": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
        "today": state.clock.today().isoformat(),
        "request_id": request.headers.get("x-request-id") or request.state.request_id,
    }

@router.get("/version")
async def version():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "git_sha": settings.git_sha,
        "build": "docker",
    }
