"""Rolling availability over recent health check outcomes."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Deque

from siteops.domain.entities.health import UptimeStats

DEFAULT_MAX_CHECKS = 100
DEFAULT_WINDOW = 20


@dataclass(frozen=True, slots=True)
class UptimeCheck:
    timestamp: datetime
    status: bool


def format_uptime(ms: float) -> str:
    """Render a duration with its two most significant units."""
    seconds = int(ms // 1000)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days}d {hours % 24}h"
    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    return f"{seconds}s"


class UptimeMonitor:
    """Bounded ring of boolean health outcomes."""

    def __init__(
        self,
        max_checks: int = DEFAULT_MAX_CHECKS,
        window: int = DEFAULT_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._start = clock()
        self._window = window
        self._checks: Deque[UptimeCheck] = deque(maxlen=max_checks)

    def record_check(self, is_healthy: bool) -> None:
        self._checks.append(
            UptimeCheck(timestamp=datetime.now(timezone.utc), status=bool(is_healthy))
        )

    def get_stats(self) -> UptimeStats:
        uptime_ms = int((self._clock() - self._start) * 1000)
        recent = list(self._checks)[-self._window :] if self._window > 0 else []
        successful = sum(1 for check in recent if check.status)
        availability = successful / len(recent) * 100 if recent else 100.0

        return UptimeStats(
            uptime_ms=uptime_ms,
            uptime_formatted=format_uptime(uptime_ms),
            availability=round(availability, 2),
            total_checks=len(self._checks),
            recent_checks=len(recent),
            successful_checks=successful,
        )
