"""Tests for the in-memory session store and its sweep task."""

import asyncio

import pytest

from acns.memory import SessionStore, new_anonymous_session_id
from acns.memory.manager import ANONYMOUS_PREFIX
from conftest import FakeClock


@pytest.fixture
def store(clock):
    return SessionStore(ttl_minutes=30, sweep_interval_minutes=10, clock=clock)


def test_get_or_create_returns_same_session(store):
    first = store.get_or_create("visitor-1")
    first.add_turn("Hi", "Hello!")

    again = store.get_or_create("visitor-1")

    assert again is first
    assert again.turn_count == 1
    assert len(store) == 1


def test_lookup_refreshes_last_access(store):
    session = store.get_or_create("visitor-1")
    before = session.last_access

    store.get_or_create("visitor-1")

    assert session.last_access > before
    assert session.created_at == before


def test_get_does_not_create(store):
    assert store.get("missing") is None
    assert "missing" not in store


def test_sweep_removes_idle_sessions(store, clock):
    store.get_or_create("idle")
    clock.advance(minutes=31)

    assert store.sweep() == 1
    assert "idle" not in store


def test_sweep_keeps_recent_sessions(store, clock):
    store.get_or_create("recent")
    clock.advance(minutes=29)

    assert store.sweep() == 0
    assert "recent" in store


def test_sweep_measures_from_last_access(store, clock):
    store.get_or_create("busy")
    clock.advance(minutes=20)
    store.get_or_create("busy")
    clock.advance(minutes=20)

    assert store.sweep() == 0
    assert "busy" in store


def test_clear_and_stats(store):
    store.get_or_create("a").add_turn("q", "r")
    store.get_or_create("b")

    stats = store.stats()
    assert stats["active_sessions"] == 2
    assert stats["total_turns"] == 1
    assert stats["session_ttl_minutes"] == 30

    assert store.clear("a") is True
    assert store.clear("a") is False
    assert len(store) == 1


def test_recent_turns_returns_tail_oldest_first(store):
    session = store.get_or_create("long")
    for i in range(5):
        session.add_turn(f"q{i}", f"r{i}")

    assert [t.user for t in session.recent_turns(2)] == ["q3", "q4"]
    assert session.recent_turns(0) == []


def test_anonymous_ids_are_unique():
    ids = {new_anonymous_session_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(i.startswith(ANONYMOUS_PREFIX) for i in ids)


# ── Background sweep ──────────────────────────────────────────────

@pytest.mark.asyncio
async def test_start_and_stop_sweep_task(store):
    assert not store.is_sweeping

    store.start()
    assert store.is_sweeping

    await store.stop()
    assert not store.is_sweeping


@pytest.mark.asyncio
async def test_sweep_task_evicts_expired_sessions():
    clock = FakeClock()
    store = SessionStore(ttl_minutes=30, sweep_interval_minutes=0.0001, clock=clock)
    store.get_or_create("stale")
    clock.advance(minutes=45)

    store.start()
    try:
        for _ in range(50):
            if "stale" not in store:
                break
            await asyncio.sleep(0.01)
    finally:
        await store.stop()

    assert "stale" not in store


@pytest.mark.parametrize("ttl, sweep", [(30, 0), (30, -1), (0, 10)])
def test_non_positive_intervals_are_rejected(ttl, sweep):
    with pytest.raises(ValueError):
        SessionStore(ttl_minutes=ttl, sweep_interval_minutes=sweep)


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(store):
    await store.stop()
    assert not store.is_sweeping
