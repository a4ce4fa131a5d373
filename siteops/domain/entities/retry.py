"""Retry policy value objects and the named presets for integrations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How many times, and how patiently, to re-attempt an operation."""

    max_attempts: int
    base_delay_ms: float
    max_delay_ms: float
    backoff_multiplier: float = 2.0
    retryable_errors: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be at least 1")
        if self.base_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("delays must not be negative")
        if self.retryable_errors is not None and not isinstance(
            self.retryable_errors, tuple
        ):
            object.__setattr__(self, "retryable_errors", tuple(self.retryable_errors))


GITHUB_RETRY_POLICY = RetryPolicy(
    max_attempts=3,
    base_delay_ms=1000,
    max_delay_ms=10000,
    backoff_multiplier=2,
    retryable_errors=("ECONNRESET", "ETIMEDOUT", "rate limit"),
)

EMAIL_RETRY_POLICY = RetryPolicy(
    max_attempts=3,
    base_delay_ms=2000,
    max_delay_ms=15000,
    backoff_multiplier=2,
    retryable_errors=("timeout", "network", "5"),
)

API_RETRY_POLICY = RetryPolicy(
    max_attempts=2,
    base_delay_ms=500,
    max_delay_ms=5000,
    backoff_multiplier=2,
    retryable_errors=("timeout", "network"),
)

RETRY_POLICIES: Dict[str, RetryPolicy] = {
    "github": GITHUB_RETRY_POLICY,
    "email": EMAIL_RETRY_POLICY,
    "api": API_RETRY_POLICY,
}
