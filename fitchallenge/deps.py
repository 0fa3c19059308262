from __future__ import annotations
from uuid import UUID
from fastapi import Header, HTTPException, Request
from fitchallenge.errors import (
    ChallengeError, ConflictError, DuplicateUsernameError, OutOfWindowError,
    ParticipantNotFoundError, StaleEditError, ValidationError,
)
from fitchallenge.state import AppState

_STATUS = {
    OutOfWindowError: 400,
    StaleEditError: 403,
    ParticipantNotFoundError: 404,
    ConflictError: 409,
    DuplicateUsernameError: 409,
    ValidationError: 422,
}

def get_state(request: Request) -> AppState:
    return request.app.state.fitness

async def get_participant_id(x_participant_id: str | None = Header(default=None, alias="X-Participant-Id")) -> UUID:
    # Identity is asserted by the auth layer in front of this service
    if not x_participant_id:
        raise HTTPException(status_code=401, detail="Missing participant id")
    try:
        return UUID(x_participant_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid participant id")

def http_error(e: ChallengeError) -> HTTPException:
    return HTTPException(status_code=_STATUS.get(type(e), 400), detail=e.message)
