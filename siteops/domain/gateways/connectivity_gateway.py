"""
Connectivity Gateway Interface - Domain Layer

Integrations probed by the health checks (source control, e-mail provider)
only need to answer one question: can we talk to you right now?
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from siteops.domain.entities.health import ConnectionResult


class IConnectivityGateway(ABC):
    """Interface for an external integration that can test its connection."""

    @abstractmethod
    async def test_connection(self) -> ConnectionResult:
        """
        Perform a lightweight round trip against the integration.

        Returns:
            ConnectionResult: ``success`` plus the integration's error text

        Raises:
            Exception: implementations may raise; callers treat it as failure
        """
        pass

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """Configuration summary safe to expose in health details."""
        pass
