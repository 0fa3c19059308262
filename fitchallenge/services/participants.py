from __future__ import annotations
from typing import TYPE_CHECKING
from uuid import UUID
import structlog
from fitchallenge.errors import DuplicateUsernameError, ValidationError
from fitchallenge.schemas.participant import Participant, RosterSort
from fitchallenge.services.log_table import name_key
from fitchallenge.services.notifications import TABLE_PARTICIPANTS

if TYPE_CHECKING:
    from fitchallenge.state import AppState

log = structlog.get_logger()


def normalize_username(username: str) -> str:
    normalized = username.strip().lower()
    if not normalized:
        raise ValidationError("Username must not be empty")
    return normalized


async def join_challenge(state: AppState, participant_id: UUID, username: str) -> Participant:
    """Create the participant on first join; joining again returns the existing record."""
    existing = await state.participants.get(participant_id)
    if existing:
        return existing

    normalized = normalize_username(username)
    owner = await state.participants.get_by_username(normalized)
    if owner and owner.id != participant_id:
        raise DuplicateUsernameError()

    candidate = Participant(id=participant_id, username=normalized, joined_at=state.clock.now())
    participant = await state.participants.create(candidate)
    if participant != candidate:
        # a concurrent join for this id won the insert
        return participant
    log.info("participant.joined", participant_id=str(participant.id), username=participant.username)
    state.feed.publish(TABLE_PARTICIPANTS)
    return participant


async def roster(state: AppState, sort: RosterSort = "joined_at") -> list[Participant]:
    participants = await state.participants.list_all()
    if sort == "username":
        return sorted(participants, key=lambda p: name_key(p.username))
    return sorted(participants, key=lambda p: p.joined_at)
