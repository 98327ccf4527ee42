"""Shared fixtures for signaling tests."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.core.config import Settings
from app.main import create_app
from app.repositories.sessions import MemorySessionRepository
from app.services.signaling import HandshakeService

TTL = timedelta(minutes=30)


class FakeClock:
    """Manually advanced clock so expiry can be tested without sleeping."""

    def __init__(self) -> None:
        self.current = datetime(2025, 10, 10, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(clock: FakeClock) -> MemorySessionRepository:
    return MemorySessionRepository(clock=clock)


@pytest.fixture
def service(repository: MemorySessionRepository) -> HandshakeService:
    return HandshakeService(repository, ttl=TTL)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, stun_server="stun:stun.example.test:3478", token_expiry=TTL)


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)
