from __future__ import annotations
from datetime import date
from typing import Protocol, Sequence
from uuid import UUID
from fitchallenge.schemas.log import DailyLog
from fitchallenge.schemas.participant import Participant


class LogStore(Protocol):
    """Daily logs keyed uniquely by (participant_id, date)."""

    async def upsert(self, log: DailyLog) -> DailyLog:
        """Insert or replace; raises ConflictError if the store loses a write race."""
        ...

    async def get(self, participant_id: UUID, d: date) -> DailyLog | None: ...

    async def query(
        self,
        participant_id: UUID | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> Sequence[DailyLog]:
        """Logs for one participant (or all when None) with start <= date <= end, by date."""
        ...


class ParticipantStore(Protocol):
    async def get(self, participant_id: UUID) -> Participant | None: ...

    async def get_by_username(self, username: str) -> Participant | None: ...

    async def create(self, participant: Participant) -> Participant:
        """
        Insert the participant, or return the stored record if this id already joined.

        Raises DuplicateUsernameError if another id owns the normalized username.
        """
        ...

    async def list_all(self) -> Sequence[Participant]: ...
