from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

import jwt
from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notion_clone.config import settings
from notion_clone.core.repositories.implementations.mongo.page_repository import MongoPageRepository
from notion_clone.core.repositories.implementations.mongo.user_repository import MongoUserRepository
from notion_clone.core.repositories.implementations.mongo.workspace_repository import (
    MongoWorkspaceRepository,
)
from notion_clone.core.schemas.auth import AuthUser
from notion_clone.core.services.page_service import PageService
from notion_clone.core.services.user_service import UserService
from notion_clone.core.services.workspace_service import WorkspaceService
from notion_clone.db.mapper import is_valid_object_id
from notion_clone.utils.logging import get_logger
from notion_clone.utils.security import decode_access_token

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)

if TYPE_CHECKING:
    from notion_clone.core.repositories.page_repository import PageRepository
    from notion_clone.core.repositories.user_repository import UserRepository
    from notion_clone.core.repositories.workspace_repository import WorkspaceRepository
    from notion_clone.core.services.auth_service import AuthService
    from notion_clone.db.base import DocumentStore


# In-memory rate limiting
_login_attempts: dict[str, list[float]] = {}


def _is_rate_limited(identifier: str) -> bool:
    """Check if the identifier is rate limited."""
    if not settings.enable_rate_limiting:
        return False
    now = time.time()
    window_start = now - settings.login_attempt_window
    if identifier in _login_attempts:
        _login_attempts[identifier] = [
            attempt for attempt in _login_attempts[identifier]
            if attempt > window_start
        ]
    attempts = _login_attempts.get(identifier, [])
    if len(attempts) >= settings.max_login_attempts:
        return True
    if identifier not in _login_attempts:
        _login_attempts[identifier] = []
    _login_attempts[identifier].append(now)
    return False


def rate_limit_by_ip(request: Request, operation: str = "default") -> None:
    """Rate limiting dependency that can be used in endpoints.

    Args:
        request: FastAPI request object
        operation: Operation identifier for rate limiting (e.g., "login", "register")

    Raises:
        HTTPException: If rate limit is exceeded
    """
    client_ip = request.client.host if request.client else "unknown"
    identifier = f"{operation}:{client_ip}"
    if _is_rate_limited(identifier):
        logger.warning(f"Rate limited {operation} attempt", extra={"ip": client_ip})

        now = time.time()
        window_seconds = settings.login_attempt_window
        limit = settings.max_login_attempts

        attempts = [ts for ts in _login_attempts.get(identifier, []) if ts > now - window_seconds]
        _login_attempts[identifier] = attempts

        earliest_attempt = min(attempts) if attempts else now
        seconds_until_reset = max(1, math.ceil(window_seconds - (now - earliest_attempt)))

        headers = {
            "Retry-After": str(seconds_until_reset),
            "RateLimit-Limit": str(limit),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(seconds_until_reset),
        }

        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many {operation} attempts. Please try again later.",
            headers=headers,
        )


def get_store(request: Request) -> DocumentStore:
    """Return the process-wide store opened by the application lifespan."""
    return request.app.state.store


def get_workspace_repository(store: DocumentStore = Depends(get_store)) -> WorkspaceRepository:
    return MongoWorkspaceRepository(store)


def get_page_repository(store: DocumentStore = Depends(get_store)) -> PageRepository:
    return MongoPageRepository(store)


def get_user_repository(store: DocumentStore = Depends(get_store)) -> UserRepository:
    return MongoUserRepository(store)


def get_user_service(users: UserRepository = Depends(get_user_repository)) -> UserService:
    """Get a request-scoped user service instance."""
    return UserService(users)


def get_page_service(
    pages: PageRepository = Depends(get_page_repository),
    workspaces: WorkspaceRepository = Depends(get_workspace_repository),
) -> PageService:
    """Get a request-scoped page service instance."""
    return PageService(pages, workspaces)


def get_workspace_service(
    workspaces: WorkspaceRepository = Depends(get_workspace_repository),
    pages: PageRepository = Depends(get_page_repository),
    users: UserRepository = Depends(get_user_repository),
    page_service: PageService = Depends(get_page_service),
) -> WorkspaceService:
    """Get a request-scoped workspace service instance."""
    return WorkspaceService(workspaces, pages, users, page_service)


def get_auth_service(users: UserRepository = Depends(get_user_repository)) -> AuthService:
    """Get a request-scoped auth service instance."""
    # auth_service imports rate_limit_by_ip from this module
    from notion_clone.core.services.auth_service import AuthService
    return AuthService(users)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
) -> AuthUser:
    """Validate the bearer JWT and return the authenticated user."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = credentials.credentials
    if not token or len(token.split(".")) != 3:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = decode_access_token(token)
    except jwt.ExpiredSignatureError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is invalid or expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    except jwt.PyJWTError as err:
        logger.warning(
            "JWT validation failed",
            extra={"error_type": type(err).__name__, "jwt_length": len(token)},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    if not is_valid_object_id(user_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user ID",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthUser(id=user_id)
