from __future__ import annotations
import uuid
import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from fitchallenge.db import Base

class ParticipantRow(Base):
    __tablename__ = "participants"
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)  # lowercased
    joined_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

class DailyLogRow(Base):
    __tablename__ = "daily_logs"
    __table_args__ = (UniqueConstraint("participant_id", "date", name="uq_daily_logs_participant_date"),)
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    participant_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("participants.id", ondelete="CASCADE"), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    workout_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    workout_duration_minutes: Mapped[int | None] = mapped_column(Integer)
    workout_proof_reference: Mapped[str | None] = mapped_column(Text())
    sleep_hours: Mapped[float | None] = mapped_column(Float)
    screen_time_hours: Mapped[float | None] = mapped_column(Float)
    no_sugar: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    step_count: Mapped[int | None] = mapped_column(Integer)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
