"""FastAPI dependencies for authentication.

This module provides FastAPI dependency injection functions for:
- Extracting and validating JWT tokens
- Resolving the current principal
"""

from typing import Annotated
from urllib.parse import quote

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from qrhunt.api.dependencies import DBSession
from qrhunt.core.auth.backend import decode_token
from qrhunt.core.auth.schemas import Principal, TokenData
from qrhunt.core.constants import VISITOR_LOGIN_PATH
from qrhunt.core.errors import UnauthorizedError
from qrhunt.modules.users.repos import RevokedTokenRepository, UserRepository


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)

Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def visitor_login_url(request: Request) -> str:
    """Login page URL that returns the visitor to the current path."""
    return f"{VISITOR_LOGIN_PATH}?redirect={quote(request.url.path, safe='')}"


async def get_token_data(
    request: Request,
    credentials: Credentials,
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
            login_url=visitor_login_url(request),
        )

    token_data = decode_token(credentials.credentials)
    if not token_data or token_data.type != "access":
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
            login_url=visitor_login_url(request),
        )

    return token_data


async def get_optional_principal(
    request: Request,
    credentials: Credentials,
    db: DBSession,
) -> Principal | None:
    """Get the current principal if authenticated, None otherwise.

    Invalid, expired and revoked tokens all count as unauthenticated, as do
    tokens whose account has been deactivated.

    Args:
        request: The incoming request
        credentials: Optional bearer token credentials
        db: Database session

    Returns:
        Principal if authenticated, None otherwise
    """
    if not credentials:
        return None

    token_data = decode_token(credentials.credentials)
    if not token_data or token_data.type != "access":
        return None

    if await RevokedTokenRepository(db).is_revoked(token_data.jti):
        return None

    user = await UserRepository(db).get_by_id(token_data.user_id)
    if not user or not user.is_active:
        return None

    request.state.user_id = user.id
    structlog.contextvars.bind_contextvars(user_id=str(user.id))

    return Principal(id=user.id, email=user.email)


async def get_current_principal(
    request: Request,
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> Principal:
    """Get the current principal, requiring authentication.

    Raises:
        UnauthorizedError: With a login URL that redirects back here
    """
    if principal is None:
        raise UnauthorizedError(
            "Authentication required",
            error_code="unauthenticated",
            login_url=visitor_login_url(request),
        )
    return principal


# Type aliases for cleaner dependency injection
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipal = Annotated[Principal | None, Depends(get_optional_principal)]
CurrentToken = Annotated[TokenData, Depends(get_token_data)]
