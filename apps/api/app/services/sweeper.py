"""Background garbage collection of expired signaling sessions."""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from ..repositories.sessions import MemorySessionRepository

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Periodically drop expired sessions from the repository."""

    def __init__(self, repository: MemorySessionRepository, interval: timedelta) -> None:
        self._repository = repository
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.info("Session sweeper started (interval: %ss)", int(self._interval.total_seconds()))
        self._task = asyncio.create_task(self._run(), name="session-sweeper")

    async def stop(self) -> None:
        """Cancel the sweep loop. Expired entries left behind are harmless."""

        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Session sweeper stopped")

    def run_once(self) -> int:
        removed = self._repository.cleanup_expired_sessions()
        if removed:
            logger.info("GC: cleaned up %d expired tokens (remaining: %d)", removed, len(self._repository))
        return removed

    async def _run(self) -> None:
        delay = self._interval.total_seconds()
        while True:
            await asyncio.sleep(delay)
            try:
                self.run_once()
            except Exception as exc:  # noqa: BLE001 - keep sweeping on the next tick
                logger.exception("Session sweep failed: %s", exc)
