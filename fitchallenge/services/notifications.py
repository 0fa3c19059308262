from __future__ import annotations
import asyncio
import concurrent.futures
import itertools
from typing import Callable
import structlog
from fitchallenge.schemas.leaderboard import LeaderboardSnapshot
from fitchallenge.services.clock import Clock
from fitchallenge.services.leaderboard import rank
from fitchallenge.stores.base import LogStore, ParticipantStore

log = structlog.get_logger()

Listener = Callable[[str], None]

TABLE_DAILY_LOGS = "daily_logs"
TABLE_PARTICIPANTS = "participants"


class ChangeFeed:
    """Explicit "table X changed" channel. Any push or poll transport feeds it via publish()."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, table: str) -> None:
        """Deliver to every listener; a failing listener is logged and does not stop the rest."""
        log.info("change.received", table=table)
        for listener in list(self._listeners):
            try:
                listener(table)
            except Exception:
                log.exception("change.listener_failed", table=table, listener=getattr(listener, "__qualname__", repr(listener)))


class LeaderboardRecomputer:
    """
    Full, non-incremental leaderboard recomputation with latest-wins publication.

    Every trigger takes the next generation number and recomputes from a fresh
    snapshot of the stores. A finished run is published only if no newer
    generation has been published already; stale results are dropped, and
    in-flight runs are never awaited by newer triggers.

    Triggers may come from the event loop, from another thread (handed over
    to the bound loop), or from plain sync code with no loop at all (run inline).
    """

    def __init__(self, logs: LogStore, participants: ParticipantStore, clock: Clock):
        self._logs = logs
        self._participants = participants
        self._clock = clock
        self._generations = itertools.count(1)
        self._published: LeaderboardSnapshot | None = None
        self._tasks: set[asyncio.Task] = set()
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def snapshot(self) -> LeaderboardSnapshot | None:
        return self._published

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def on_external_change(self, table: str | None = None) -> asyncio.Task | concurrent.futures.Future:
        """
        Schedule a recomputation and return a handle to its result.

        On the loop: an asyncio.Task. Off the loop with a bound, running loop:
        a concurrent Future completed by that loop. Otherwise the run happens
        inline and the returned Future is already done.
        """
        generation = next(self._generations)
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is not None:
            self._loop = running
            task = running.create_task(self._run(generation))
            self._track(task)
            return task
        if self._loop is not None and self._loop.is_running():
            return asyncio.run_coroutine_threadsafe(self._run_tracked(generation), self._loop)

        future: concurrent.futures.Future = concurrent.futures.Future()
        future.set_result(asyncio.run(self._run(generation)))
        return future

    def attach(self, feed: ChangeFeed) -> Callable[[], None]:
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            pass
        return feed.subscribe(self.on_external_change)

    async def latest(self) -> LeaderboardSnapshot:
        if self._published is None:
            return await self.recompute()
        return self._published

    async def recompute(self) -> LeaderboardSnapshot:
        """Run a generation inline and return whatever is published once it completes."""
        await self._run(next(self._generations))
        return self._published

    async def _run(self, generation: int) -> LeaderboardSnapshot | None:
        participants = await self._participants.list_all()
        logs = await self._logs.query()
        snapshot = LeaderboardSnapshot(
            generation=generation,
            computed_at=self._clock.now(),
            entries=rank(participants, logs),
        )
        if self._published is not None and self._published.generation > generation:
            log.info("leaderboard.stale_result_dropped", generation=generation, published=self._published.generation)
            return None
        self._published = snapshot
        log.info("leaderboard.recomputed", generation=generation, participants=len(snapshot.entries))
        return snapshot

    async def _run_tracked(self, generation: int) -> LeaderboardSnapshot | None:
        self._track(asyncio.current_task())
        return await self._run(generation)

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("leaderboard.recompute_failed", error=repr(exc))

    async def drain(self) -> None:
        """Wait for scheduled recomputations (shutdown and tests)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
