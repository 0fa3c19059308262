from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4
from fitchallenge.schemas.log import DailyLog
from fitchallenge.schemas.participant import Participant
from fitchallenge.services.leaderboard import current_streak, rank

D = date(2025, 2, 10)
JOIN = datetime(2025, 1, 19, 9, 0, tzinfo=timezone.utc)


def _p(name, minutes_after_start=0):
    return Participant(id=uuid4(), username=name, joined_at=JOIN + timedelta(minutes=minutes_after_start))


def _log(p, d, points=0, completed=False):
    return DailyLog(participant_id=p.id, date=d, points=points, workout_completed=completed)


def test_totals_and_order_by_points():
    alice, bob = _p("alice", 0), _p("bob", 1)
    logs = [
        _log(alice, D, 10, True),
        _log(bob, D, 20, True),
        _log(bob, D - timedelta(days=1), 4, False),
    ]
    board = rank([alice, bob], logs)
    assert [e.username for e in board] == ["bob", "alice"]
    assert board[0].total_points == 24 and board[0].workout_count == 1
    assert board[1].total_points == 10 and board[1].workout_count == 1
    assert [e.rank for e in board] == [1, 2]


def test_tie_broken_by_workout_count():
    alice, bob = _p("alice", 0), _p("bob", 1)
    logs = [
        _log(alice, D, 10, False),
        _log(bob, D, 5, True),
        _log(bob, D - timedelta(days=1), 5, True),
    ]
    assert [e.username for e in rank([alice, bob], logs)] == ["bob", "alice"]


def test_full_tie_broken_by_join_time():
    early, late = _p("early", 0), _p("late", 5)
    logs = [_log(late, D, 9, True), _log(early, D, 9, True)]
    board = rank([late, early], logs)
    assert [e.username for e in board] == ["early", "late"]
    assert [e.rank for e in board] == [1, 2]


def test_ranks_are_strict_sequence_even_with_identical_stats():
    people = [_p(f"p{i}", 0) for i in range(5)]
    board = rank(people, [])
    assert [e.rank for e in board] == [1, 2, 3, 4, 5]
    assert all(e.total_points == 0 and e.streak == 0 for e in board)


def test_rank_is_idempotent():
    people = [_p(f"p{i}", i % 2) for i in range(4)]
    logs = [_log(p, D - timedelta(days=i), points=i, completed=bool(i % 2)) for i, p in enumerate(people)]
    assert rank(people, logs) == rank(people, logs)
    assert rank(people, logs) == rank(list(reversed(people)), list(reversed(logs)))


def test_logs_of_unknown_participants_are_ignored():
    alice = _p("alice")
    stranger = _p("stranger")
    board = rank([alice], [_log(stranger, D, 50, True)])
    assert len(board) == 1 and board[0].total_points == 0


def test_streak_counts_back_from_latest_day():
    p = _p("p")
    logs = [_log(p, D - timedelta(days=i), completed=True) for i in range(3)]
    assert current_streak(logs) == 3
    # an incomplete day three back still ends it at 3
    assert current_streak(logs + [_log(p, D - timedelta(days=3), completed=False)]) == 3


def test_streak_broken_by_gap():
    p = _p("p")
    logs = [
        _log(p, D, completed=True),
        _log(p, D - timedelta(days=1), completed=True),
        _log(p, D - timedelta(days=3), completed=True),
    ]
    assert current_streak(logs) == 2


def test_streak_zero_when_latest_day_incomplete():
    p = _p("p")
    logs = [_log(p, D, completed=False), _log(p, D - timedelta(days=1), completed=True)]
    assert current_streak(logs) == 0
    assert current_streak([]) == 0


def test_streak_reported_on_entries():
    p = _p("p")
    logs = [_log(p, D - timedelta(days=i), points=5, completed=True) for i in range(4)]
    (entry,) = rank([p], logs)
    assert entry.streak == 4 and entry.workout_count == 4 and entry.total_points == 20
