from __future__ import annotations
from dataclasses import dataclass, field
from fitchallenge.config import Settings
from fitchallenge.db import make_engine, make_sessionmaker
from fitchallenge.services.calendar import ChallengeCalendar
from fitchallenge.services.clock import Clock, SystemClock
from fitchallenge.services.media import MediaResolver, PublicUrlResolver
from fitchallenge.services.notifications import ChangeFeed, LeaderboardRecomputer
from fitchallenge.stores.base import LogStore, ParticipantStore
from fitchallenge.stores.memory import MemoryLogStore, MemoryParticipantStore
from fitchallenge.stores.sql import SqlLogStore, SqlParticipantStore


@dataclass
class AppState:
    """Collaborators and derived state shared by every request; attached to app.state."""
    calendar: ChallengeCalendar
    clock: Clock
    logs: LogStore
    participants: ParticipantStore
    media: MediaResolver
    upsert_retries: int = 2
    feed: ChangeFeed = field(default_factory=ChangeFeed)
    recomputer: LeaderboardRecomputer = field(init=False)

    def __post_init__(self):
        self.recomputer = LeaderboardRecomputer(self.logs, self.participants, self.clock)
        self.recomputer.attach(self.feed)


def build_state(settings: Settings, clock: Clock | None = None) -> AppState:
    if settings.store_backend == "memory":
        logs, participants = MemoryLogStore(), MemoryParticipantStore()
    elif settings.store_backend == "sql":
        sessions = make_sessionmaker(make_engine(settings.database_url))
        logs, participants = SqlLogStore(sessions), SqlParticipantStore(sessions)
    else:
        raise ValueError(f"unknown STORE_BACKEND {settings.store_backend!r}")
    return AppState(
        calendar=ChallengeCalendar(settings.challenge_start, settings.challenge_end),
        clock=clock or SystemClock(settings.challenge_tz),
        logs=logs,
        participants=participants,
        media=PublicUrlResolver(settings.media_base_url),
        upsert_retries=settings.upsert_retries,
    )
