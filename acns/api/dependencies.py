"""
FastAPI dependencies: container access, admin auth and rate limiting.

Auth only verifies bearer tokens issued by the admin login of the main
backend: an HS256 JWT whose ``userId`` claim names an active admin.
"""
from typing import Any, Dict, Optional

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.exc import SQLAlchemyError

from acns.api.container import ServiceContainer
from acns.core.exceptions import AuthenticationError, RateLimitExceeded
from acns.core.logging_config import get_logger
from acns.services import AIService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_ai_service(container: ServiceContainer = Depends(get_container)) -> AIService:
    return container.ai_service


async def _resolve_admin(
    container: ServiceContainer,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Dict[str, Any]:
    """
    Decode the bearer token and load the admin it names.

    Raises:
        AuthenticationError: On a missing, expired or invalid token,
            or when the admin is unknown or inactive
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Access token is required")

    settings = container.settings
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except JWTError:
        raise AuthenticationError("Invalid token")

    user_id = payload.get("userId")
    if not user_id:
        raise AuthenticationError("Invalid token")

    admin = await container.repository.get_active_admin(str(user_id))
    if admin is None:
        raise AuthenticationError("User not found or inactive")
    return admin


async def require_admin(
    container: ServiceContainer = Depends(get_container),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """Admin user for admin-only routes."""
    return await _resolve_admin(container, credentials)


async def optional_admin(
    container: ServiceContainer = Depends(get_container),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Dict[str, Any]]:
    """Admin user when a valid token is present, otherwise None."""
    if credentials is None:
        return None
    try:
        return await _resolve_admin(container, credentials)
    except AuthenticationError as e:
        logger.debug(f"Ignoring bearer token on public route: {e.message}")
        return None
    except SQLAlchemyError as e:
        logger.warning(f"Admin lookup failed, treating caller as anonymous: {e}")
        return None


def rate_limit(
    request: Request,
    response: Response,
    container: ServiceContainer = Depends(get_container),
) -> None:
    """
    Enforce the per-IP limit for AI routes.

    Raises:
        RateLimitExceeded: When the client has used up its window
    """
    limiter = container.rate_limiter
    client_ip = request.client.host if request.client else "unknown"

    is_allowed, remaining = limiter.is_allowed(client_ip)
    response.headers["X-RateLimit-Limit"] = str(limiter.limit)
    response.headers["X-RateLimit-Remaining"] = str(remaining)

    if not is_allowed:
        raise RateLimitExceeded(retry_after=limiter.retry_after_seconds(client_ip))
