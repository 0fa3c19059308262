from __future__ import annotations
from datetime import date, datetime, timezone
import pytest
from fitchallenge.services.calendar import ChallengeCalendar
from fitchallenge.services.clock import FixedClock
from fitchallenge.services.media import PublicUrlResolver
from fitchallenge.state import AppState
from fitchallenge.stores.memory import MemoryLogStore, MemoryParticipantStore

CHALLENGE_START = date(2025, 1, 19)
CHALLENGE_END = date(2025, 3, 1)


@pytest.fixture
def clock():
    # Wednesday of the challenge's first full week
    return FixedClock(datetime(2025, 1, 22, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def calendar():
    return ChallengeCalendar(CHALLENGE_START, CHALLENGE_END)


@pytest.fixture
def state(clock, calendar):
    return AppState(
        calendar=calendar,
        clock=clock,
        logs=MemoryLogStore(),
        participants=MemoryParticipantStore(),
        media=PublicUrlResolver("https://media.test/workout-proofs"),
        upsert_retries=2,
    )
