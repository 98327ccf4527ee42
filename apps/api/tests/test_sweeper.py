"""Tests for the background session sweeper."""
from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from app.core.exceptions import SessionNotFoundError
from app.repositories.sessions import MemorySessionRepository
from app.services.sweeper import SessionSweeper


def test_run_once_removes_expired(repository: MemorySessionRepository, clock) -> None:
    expired = repository.create_session(timedelta(seconds=30))
    alive = repository.create_session(timedelta(hours=1))
    sweeper = SessionSweeper(repository, interval=timedelta(minutes=1))

    clock.advance(minutes=1)

    assert sweeper.run_once() == 1
    assert sweeper.run_once() == 0
    with pytest.raises(SessionNotFoundError):
        repository.get_session(expired.token)
    assert repository.get_session(alive.token).token == alive.token


@pytest.mark.asyncio
async def test_sweeper_runs_periodically_and_stops(repository: MemorySessionRepository, clock) -> None:
    repository.create_session(timedelta(seconds=1))
    clock.advance(seconds=5)
    sweeper = SessionSweeper(repository, interval=timedelta(milliseconds=10))

    sweeper.start()
    assert sweeper.running is True
    for _ in range(100):
        if len(repository) == 0:
            break
        await asyncio.sleep(0.01)

    await sweeper.stop()

    assert len(repository) == 0
    assert sweeper.running is False


@pytest.mark.asyncio
async def test_sweeper_survives_failing_pass(repository: MemorySessionRepository, monkeypatch) -> None:
    calls: list[int] = []

    def flaky_cleanup() -> int:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        return 0

    monkeypatch.setattr(repository, "cleanup_expired_sessions", flaky_cleanup)
    sweeper = SessionSweeper(repository, interval=timedelta(milliseconds=5))

    sweeper.start()
    for _ in range(100):
        if len(calls) >= 2:
            break
        await asyncio.sleep(0.01)
    await sweeper.stop()

    assert len(calls) >= 2


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(repository: MemorySessionRepository) -> None:
    sweeper = SessionSweeper(repository, interval=timedelta(minutes=1))

    await sweeper.stop()

    assert sweeper.running is False
