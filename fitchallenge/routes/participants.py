from __future__ import annotations
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from fitchallenge.deps import get_participant_id, get_state, http_error
from fitchallenge.errors import ChallengeError
from fitchallenge.schemas.participant import JoinRequest, ParticipantPublic, RosterSort
from fitchallenge.services.participants import join_challenge, roster
from fitchallenge.state import AppState

router = APIRouter(prefix="/participants", tags=["participants"])

@router.post("/join", response_model=ParticipantPublic, status_code=201)
async def join(
    payload: JoinRequest,
    state: AppState = Depends(get_state),
    participant_id: UUID = Depends(get_participant_id),
):
    try:
        p = await join_challenge(state, participant_id, payload.username)
    except ChallengeError as e:
        raise http_error(e)
    return ParticipantPublic(id=p.id, username=p.username, joined_at=p.joined_at, is_me=True)

@router.get("", response_model=list[ParticipantPublic])
async def list_participants(
    sort: RosterSort = Query(default="joined_at"),
    state: AppState = Depends(get_state),
    participant_id: UUID = Depends(get_participant_id),
):
    return [
        ParticipantPublic(id=p.id, username=p.username, joined_at=p.joined_at, is_me=p.id == participant_id)
        for p in await roster(state, sort)
    ]
