from __future__ import annotations
from datetime import date, datetime, timezone as dt_tz
from uuid import UUID
from fitchallenge.errors import DuplicateUsernameError
from fitchallenge.schemas.log import DailyLog
from fitchallenge.schemas.participant import Participant


class MemoryLogStore:
    def __init__(self, logs: list[DailyLog] | None = None):
        self._logs: dict[tuple[UUID, date], DailyLog] = {}
        for log in logs or []:
            self._logs[log.key] = log

    async def upsert(self, log: DailyLog) -> DailyLog:
        if log.created_at is None:
            log = log.model_copy(update={"created_at": datetime.now(dt_tz.utc)})
        self._logs[log.key] = log
        return log

    async def get(self, participant_id: UUID, d: date) -> DailyLog | None:
        return self._logs.get((participant_id, d))

    async def query(self, participant_id: UUID | None = None, start: date | None = None, end: date | None = None) -> list[DailyLog]:
        rows = [
            log for log in self._logs.values()
            if (participant_id is None or log.participant_id == participant_id)
            and (start is None or log.date >= start)
            and (end is None or log.date <= end)
        ]
        return sorted(rows, key=lambda log: (log.date, str(log.participant_id)))


class MemoryParticipantStore:
    def __init__(self, participants: list[Participant] | None = None):
        self._by_id: dict[UUID, Participant] = {p.id: p for p in participants or []}

    async def get(self, participant_id: UUID) -> Participant | None:
        return self._by_id.get(participant_id)

    async def get_by_username(self, username: str) -> Participant | None:
        return next((p for p in self._by_id.values() if p.username == username), None)

    async def create(self, participant: Participant) -> Participant:
        if participant.id in self._by_id:
            return self._by_id[participant.id]
        taken = await self.get_by_username(participant.username)
        if taken and taken.id != participant.id:
            raise DuplicateUsernameError()
        self._by_id[participant.id] = participant
        return participant

    async def list_all(self) -> list[Participant]:
        return sorted(self._by_id.values(), key=lambda p: (p.joined_at, str(p.id)))
