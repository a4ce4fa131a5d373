"""E-mail provider gateway implementation - Infrastructure layer."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from siteops.domain.entities.health import ConnectionResult
from siteops.domain.gateways.connectivity_gateway import IConnectivityGateway
from siteops.shared import get_logger

logger = get_logger(__name__)


class EmailGateway(IConnectivityGateway):
    """HTTP client for the transactional e-mail provider (SendGrid API)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        *,
        provider: str = "sendgrid",
        api_url: str = "https://api.sendgrid.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or None
        self.from_email = from_email or None
        self.provider = provider
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def describe(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "from_email": self.from_email or "not configured",
        }

    async def test_connection(self) -> ConnectionResult:
        """List the API key scopes; cheap and sends nothing."""
        if not self.api_key:
            return ConnectionResult(
                success=False,
                error=f"{self.provider} API key not configured",
                configured=False,
            )

        url = f"{self.api_url}/v3/scopes"
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()

            scopes = response.json().get("scopes", [])
            can_send = "mail.send" in scopes
            logger.debug("email.connection.ok", url=url, can_send=can_send)
            if not can_send:
                return ConnectionResult(
                    success=False,
                    error="API key is missing the mail.send scope",
                    details={"scopes": len(scopes)},
                )
            return ConnectionResult(success=True, details={"scopes": len(scopes)})

        except httpx.HTTPStatusError as e:
            logger.warning(
                "email.connection.http_error",
                status_code=e.response.status_code,
                url=url,
            )
            return ConnectionResult(
                success=False,
                error=f"{self.provider} returned HTTP {e.response.status_code}",
                details={"status_code": e.response.status_code},
            )

        except httpx.RequestError as e:
            logger.warning("email.connection.request_error", error=str(e), url=url)
            return ConnectionResult(
                success=False, error=f"Failed to communicate with {self.provider}: {e}"
            )
