from __future__ import annotations
import asyncio
import threading
from datetime import date, datetime, timezone
from uuid import uuid4
import pytest
from fitchallenge.schemas.log import DailyLog
from fitchallenge.schemas.participant import Participant
from fitchallenge.services.clock import FixedClock
from fitchallenge.services.notifications import ChangeFeed, LeaderboardRecomputer
from fitchallenge.stores.memory import MemoryLogStore, MemoryParticipantStore

JOIN = datetime(2025, 1, 19, tzinfo=timezone.utc)


class GatedParticipantStore(MemoryParticipantStore):
    """Holds the first list_all() call until the gate opens."""

    def __init__(self, participants):
        super().__init__(participants)
        self.gate = asyncio.Event()
        self.calls = 0

    async def list_all(self):
        self.calls += 1
        if self.calls == 1:
            await self.gate.wait()
        return await super().list_all()


def _participant(name):
    return Participant(id=uuid4(), username=name, joined_at=JOIN)


def test_feed_delivers_to_subscribers_until_unsubscribed():
    feed = ChangeFeed()
    seen = []
    unsubscribe = feed.subscribe(seen.append)
    feed.publish("daily_logs")
    unsubscribe()
    feed.publish("participants")
    assert seen == ["daily_logs"]


@pytest.mark.asyncio
async def test_change_triggers_full_recompute():
    p = _participant("alice")
    logs = MemoryLogStore([DailyLog(participant_id=p.id, date=date(2025, 1, 20), points=9, workout_completed=True)])
    recomputer = LeaderboardRecomputer(logs, MemoryParticipantStore([p]), FixedClock(JOIN))
    feed = ChangeFeed()
    recomputer.attach(feed)

    feed.publish("daily_logs")
    await recomputer.drain()

    snap = recomputer.snapshot
    assert snap is not None and snap.generation == 1
    assert snap.entries[0].total_points == 9


@pytest.mark.asyncio
async def test_stale_recompute_is_dropped():
    """An older run that finishes after a newer one must not overwrite it"""
    p = _participant("alice")
    participants = GatedParticipantStore([p])
    recomputer = LeaderboardRecomputer(MemoryLogStore(), participants, FixedClock(JOIN))

    first = recomputer.on_external_change("daily_logs")
    second = recomputer.on_external_change("daily_logs")
    newer = await second
    assert newer.generation == 2
    assert recomputer.snapshot.generation == 2

    participants.gate.set()
    assert await first is None
    assert recomputer.snapshot.generation == 2


@pytest.mark.asyncio
async def test_redundant_triggers_are_idempotent():
    p = _participant("alice")
    logs = MemoryLogStore([DailyLog(participant_id=p.id, date=date(2025, 1, 20), points=4)])
    recomputer = LeaderboardRecomputer(logs, MemoryParticipantStore([p]), FixedClock(JOIN))
    for _ in range(3):
        recomputer.on_external_change()
    await recomputer.drain()
    again = await recomputer.recompute()
    assert again.generation == 4
    assert again.entries == (await recomputer.latest()).entries


@pytest.mark.asyncio
async def test_latest_computes_on_first_use():
    recomputer = LeaderboardRecomputer(MemoryLogStore(), MemoryParticipantStore([_participant("a")]), FixedClock(JOIN))
    assert recomputer.snapshot is None
    snap = await recomputer.latest()
    assert len(snap.entries) == 1 and snap.entries[0].rank == 1


def test_failing_listener_does_not_block_the_rest():
    feed = ChangeFeed()
    seen = []

    def broken(table):
        raise RuntimeError("listener down")

    feed.subscribe(broken)
    feed.subscribe(seen.append)
    feed.publish("daily_logs")
    assert seen == ["daily_logs"]


def test_publish_without_event_loop_recomputes_inline():
    p = _participant("alice")
    logs = MemoryLogStore([DailyLog(participant_id=p.id, date=date(2025, 1, 20), points=7)])
    recomputer = LeaderboardRecomputer(logs, MemoryParticipantStore([p]), FixedClock(JOIN))
    feed = ChangeFeed()
    recomputer.attach(feed)

    feed.publish("daily_logs")

    snap = recomputer.snapshot
    assert snap is not None and snap.generation == 1
    assert snap.entries[0].total_points == 7


@pytest.mark.asyncio
async def test_trigger_from_worker_thread_runs_on_bound_loop():
    p = _participant("alice")
    logs = MemoryLogStore([DailyLog(participant_id=p.id, date=date(2025, 1, 20), points=6)])
    recomputer = LeaderboardRecomputer(logs, MemoryParticipantStore([p]), FixedClock(JOIN))
    feed = ChangeFeed()
    recomputer.attach(feed)

    handles = []
    worker = threading.Thread(target=lambda: handles.append(recomputer.on_external_change("daily_logs")))
    worker.start()
    await asyncio.to_thread(worker.join)

    snap = await asyncio.wrap_future(handles[0])
    assert snap.generation == 1
    assert recomputer.snapshot.entries[0].total_points == 6
