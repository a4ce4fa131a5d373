"""GitHub API gateway implementation - Infrastructure layer."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from siteops.domain.entities.health import ConnectionResult
from siteops.domain.gateways.connectivity_gateway import IConnectivityGateway
from siteops.shared import get_logger

logger = get_logger(__name__)


class GitHubGateway(IConnectivityGateway):
    """HTTP client for the GitHub REST API."""

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        token: Optional[str] = None,
        repo: Optional[str] = None,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize GitHub Gateway.

        Args:
            api_url: Base URL of the GitHub REST API
            token: Personal access or app token; anonymous when omitted
            repo: ``owner/name`` of the repository the site reads from
        """
        self.api_url = api_url.rstrip("/")
        self.token = token or None
        self.repo = repo or None
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def describe(self) -> Dict[str, Any]:
        return {
            "token": "configured" if self.token else "missing",
            "repo": self.repo or "not configured",
        }

    async def test_connection(self) -> ConnectionResult:
        """Fetch the configured repository, or the rate limit when none is set."""
        path = f"/repos/{self.repo}" if self.repo else "/rate_limit"
        url = f"{self.api_url}{path}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=self._headers())
                response.raise_for_status()

            remaining = response.headers.get("x-ratelimit-remaining")
            logger.debug(
                "github.connection.ok", url=url, rate_limit_remaining=remaining
            )
            return ConnectionResult(
                success=True,
                details={
                    "status_code": response.status_code,
                    "rate_limit_remaining": remaining,
                },
            )

        except httpx.HTTPStatusError as e:
            logger.warning(
                "github.connection.http_error",
                status_code=e.response.status_code,
                url=url,
            )
            return ConnectionResult(
                success=False,
                error=f"GitHub returned HTTP {e.response.status_code}",
                details={"status_code": e.response.status_code},
            )

        except httpx.RequestError as e:
            logger.warning("github.connection.request_error", error=str(e), url=url)
            return ConnectionResult(
                success=False, error=f"Failed to communicate with GitHub: {e}"
            )
