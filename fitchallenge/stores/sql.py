from __future__ import annotations
from datetime import date
from uuid import UUID
import structlog
from sqlalchemy import select, func
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from fitchallenge.errors import ConflictError, DuplicateUsernameError
from fitchallenge.models.log import DailyLogRow, ParticipantRow
from fitchallenge.schemas.log import DailyLog
from fitchallenge.schemas.participant import Participant

log = structlog.get_logger()

_LOG_FIELDS = (
    "workout_completed",
    "workout_duration_minutes",
    "workout_proof_reference",
    "sleep_hours",
    "screen_time_hours",
    "no_sugar",
    "step_count",
    "points",
)


class SqlLogStore:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    async def upsert(self, entry: DailyLog) -> DailyLog:
        values = {"participant_id": entry.participant_id, "date": entry.date}
        values.update({f: getattr(entry, f) for f in _LOG_FIELDS})
        stmt = insert(DailyLogRow).values(**values)
        # created_at keeps the original insert time on re-submission
        stmt = stmt.on_conflict_do_update(
            constraint="uq_daily_logs_participant_date",
            set_={f: stmt.excluded[f] for f in _LOG_FIELDS},
        ).returning(DailyLogRow)
        async with self._sessions() as session:
            try:
                row = (await session.execute(stmt)).scalar_one()
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                log.warning("daily_log.upsert_conflict", participant_id=str(entry.participant_id), date=entry.date.isoformat(), error=str(e.orig))
                raise ConflictError() from e
            return DailyLog.model_validate(row)

    async def get(self, participant_id: UUID, d: date) -> DailyLog | None:
        async with self._sessions() as session:
            row = await session.scalar(
                select(DailyLogRow).where(DailyLogRow.participant_id == participant_id, DailyLogRow.date == d)
            )
            return DailyLog.model_validate(row) if row else None

    async def query(self, participant_id: UUID | None = None, start: date | None = None, end: date | None = None) -> list[DailyLog]:
        q = select(DailyLogRow)
        if participant_id is not None:
            q = q.where(DailyLogRow.participant_id == participant_id)
        if start is not None:
            q = q.where(DailyLogRow.date >= start)
        if end is not None:
            q = q.where(DailyLogRow.date <= end)
        q = q.order_by(DailyLogRow.date.asc(), DailyLogRow.participant_id.asc())
        async with self._sessions() as session:
            rows = (await session.execute(q)).scalars().all()
            return [DailyLog.model_validate(r) for r in rows]


class SqlParticipantStore:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    async def get(self, participant_id: UUID) -> Participant | None:
        async with self._sessions() as session:
            row = await session.get(ParticipantRow, participant_id)
            return Participant.model_validate(row) if row else None

    async def get_by_username(self, username: str) -> Participant | None:
        async with self._sessions() as session:
            row = await session.scalar(select(ParticipantRow).where(func.lower(ParticipantRow.username) == username.lower()))
            return Participant.model_validate(row) if row else None

    async def create(self, participant: Participant) -> Participant:
        async with self._sessions() as session:
            row = ParticipantRow(id=participant.id, username=participant.username, joined_at=participant.joined_at)
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                # same id committed first by a concurrent join
                winner = await session.get(ParticipantRow, participant.id)
                if winner is None:
                    raise DuplicateUsernameError() from e
                return Participant.model_validate(winner)
            await session.refresh(row)
            return Participant.model_validate(row)

    async def list_all(self) -> list[Participant]:
        async with self._sessions() as session:
            rows = (await session.execute(
                select(ParticipantRow).order_by(ParticipantRow.joined_at.asc(), ParticipantRow.id.asc())
            )).scalars().all()
            return [Participant.model_validate(r) for r in rows]
