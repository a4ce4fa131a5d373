"""Request performance counters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict


@dataclass(slots=True)
class EndpointMetrics:
    count: int = 0
    total_time_ms: float = 0.0
    errors: int = 0


@dataclass(slots=True)
class PerformanceMetrics:
    """Process-lifetime request counters, owned by the metrics recorder."""

    request_count: int = 0
    average_response_time_ms: float = 0.0
    error_rate: float = 0.0
    last_reset: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    endpoints: Dict[str, EndpointMetrics] = field(default_factory=dict)
