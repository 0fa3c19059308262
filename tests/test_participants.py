from __future__ import annotations
from datetime import datetime, timedelta, timezone
from uuid import uuid4
import pytest
from fitchallenge.errors import DuplicateUsernameError, ValidationError
from fitchallenge.schemas.participant import Participant
from fitchallenge.services.participants import join_challenge, normalize_username, roster
from fitchallenge.stores.memory import MemoryParticipantStore


def test_normalize_username():
    assert normalize_username("  Alice ") == "alice"
    with pytest.raises(ValidationError):
        normalize_username("   ")


@pytest.mark.asyncio
async def test_join_creates_once(state):
    pid = uuid4()
    seen = []
    state.feed.subscribe(seen.append)
    first = await join_challenge(state, pid, "Alice")
    again = await join_challenge(state, pid, "someone-else")
    assert first.username == "alice"
    assert again == first
    assert seen == ["participants"]
    assert first.joined_at == state.clock.now()


@pytest.mark.asyncio
async def test_duplicate_username_is_case_insensitive(state):
    await join_challenge(state, uuid4(), "alice")
    with pytest.raises(DuplicateUsernameError):
        await join_challenge(state, uuid4(), "ALICE")
    assert len(await state.participants.list_all()) == 1


@pytest.mark.asyncio
async def test_roster_sorting(state, clock):
    base = datetime(2025, 1, 19, 8, 0, tzinfo=timezone.utc)
    for i, name in enumerate(["carol", "alice", "bob"]):
        clock.set(base + timedelta(hours=i))
        await join_challenge(state, uuid4(), name)
    assert [p.username for p in await roster(state)] == ["carol", "alice", "bob"]
    assert [p.username for p in await roster(state, "username")] == ["alice", "bob", "carol"]


@pytest.mark.asyncio
async def test_roster_username_sort_folds_accents(state):
    for name in ["zoe", "élodie", "adam"]:
        await join_challenge(state, uuid4(), name)
    assert [p.username for p in await roster(state, "username")] == ["adam", "élodie", "zoe"]


@pytest.mark.asyncio
async def test_store_create_returns_existing_record_for_same_id():
    store = MemoryParticipantStore()
    pid = uuid4()
    first = await store.create(Participant(id=pid, username="alice", joined_at=datetime(2025, 1, 19, tzinfo=timezone.utc)))
    second = await store.create(Participant(id=pid, username="alice", joined_at=datetime(2025, 1, 20, tzinfo=timezone.utc)))
    assert second == first
    assert len(await store.list_all()) == 1


@pytest.mark.asyncio
async def test_concurrent_join_for_same_id_returns_winner(state, clock, monkeypatch):
    """Second join whose existence check ran before the first insert committed"""
    pid = uuid4()
    winner = await join_challenge(state, pid, "alice")
    seen = []
    state.feed.subscribe(seen.append)

    real_get = state.participants.get
    calls = []

    async def stale_get(participant_id):
        calls.append(participant_id)
        return None if len(calls) == 1 else await real_get(participant_id)

    monkeypatch.setattr(state.participants, "get", stale_get)
    clock.set(clock.now() + timedelta(minutes=5))

    again = await join_challenge(state, pid, "Alice")
    assert again == winner
    assert seen == []
