"""Admin credential check guarding the log management endpoints."""

import secrets
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from siteops.domain.entities.errors import AuthenticationError, AuthorizationError
from siteops.shared import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)
admin_token_header = APIKeyHeader(name="X-Admin-Token", auto_error=False)


def presented_token(
    credentials: Optional[HTTPAuthorizationCredentials], header_token: Optional[str]
) -> Optional[str]:
    """Bearer credentials win over the ``X-Admin-Token`` header."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return header_token or None


@inject
async def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    header_token: Optional[str] = Security(admin_token_header),
    admin_api_token: Optional[str] = Depends(Provide["config.auth.admin_api_token"]),
) -> None:
    """
    Allow the request only when it carries the configured admin token.

    Raises:
        AuthorizationError: no admin token is configured (403)
        AuthenticationError: the token is missing or wrong (401)
    """
    context = {"component": "admin-api", "action": request.method}

    if not isinstance(admin_api_token, str) or not admin_api_token:
        logger.warning("admin.access.not_configured", path=request.url.path)
        raise AuthorizationError("Admin access is not configured", context)

    token = presented_token(credentials, header_token)
    if token is None:
        raise AuthenticationError("Admin credentials required", context)

    if not secrets.compare_digest(token.encode(), admin_api_token.encode()):
        logger.warning("admin.access.denied", path=request.url.path)
        raise AuthenticationError("Invalid admin credentials", context)
