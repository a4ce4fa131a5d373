"""Periodic health checks feeding the uptime monitor."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from siteops.domain.entities.health import SystemHealth
from siteops.shared import get_logger

logger = get_logger(__name__)


class HealthCheckScheduler:
    """Runs the scheduled health check on a fixed interval."""

    def __init__(
        self,
        run_check: Callable[[], Awaitable[SystemHealth]],
        interval_seconds: float = 0.0,
    ) -> None:
        self._run_check = run_check
        self._interval_seconds = max(0.0, interval_seconds)
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def enabled(self) -> bool:
        return self._interval_seconds > 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if not self.enabled or self._task is not None:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("health.scheduler.started", interval_seconds=self._interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("health.scheduler.stopped")

    async def run_once(self) -> None:
        try:
            await self._run_check()
        except Exception as exc:
            logger.warning("health.scheduler.run_failed", error=str(exc))

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval_seconds)
