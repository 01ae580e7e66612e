from __future__ import annotations

from typing import TYPE_CHECKING

from notion_clone.api.v1.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from notion_clone.config import settings
from notion_clone.core.errors import EmailInUseError, InvalidCredentialsError, ValidationFailedError
from notion_clone.core.models.user import ProfilePicture, User
from notion_clone.dependencies import rate_limit_by_ip
from notion_clone.utils.logging import get_logger
from notion_clone.utils.security import create_access_token, hash_password, verify_password
from notion_clone.utils.validation import validate_password_strength

if TYPE_CHECKING:
    from fastapi import Request

    from notion_clone.core.repositories.user_repository import UserRepository


logger = get_logger(__name__)


class AuthService:
    """Authentication service handling business logic for auth operations."""

    def __init__(self, users: UserRepository):
        self._users = users

    async def register(self, request: Request, payload: RegisterRequest) -> AuthResponse:
        """Create an account and sign it in."""
        rate_limit_by_ip(request, "register")

        is_valid_password, password_error = validate_password_strength(payload.password)
        if not is_valid_password:
            raise ValidationFailedError(password_error)

        email = payload.email.lower().strip()
        if await self._users.get_by_email(email):
            logger.warning("Registration with existing email", extra={"email": email})
            raise EmailInUseError()

        user = User(
            name=payload.name.strip(),
            email=email,
            password=hash_password(payload.password),
            is_dark_mode=payload.is_dark_mode,
            profile_picture=(
                ProfilePicture(url=payload.profile_picture.url) if payload.profile_picture else None
            ),
            workspaces=[],
        )
        user_id = await self._users.create(user)

        logger.info("User registered successfully", extra={"email": email, "user_id": user_id})
        return self._token_response(user_id)

    async def login(self, request: Request, payload: LoginRequest) -> AuthResponse:
        """Check credentials and issue a bearer token."""
        rate_limit_by_ip(request, "login")

        email = payload.email.lower().strip()
        user = await self._users.get_by_email(email)
        if user is None or not verify_password(payload.password, user.password):
            logger.warning("Sign in failed", extra={"email": email})
            raise InvalidCredentialsError()

        logger.info("User signed in successfully", extra={"email": email, "user_id": user.id})
        return self._token_response(user.id)

    @staticmethod
    def _token_response(user_id: str) -> AuthResponse:
        return AuthResponse(
            authentication_token=create_access_token(user_id),
            token_type="bearer",
            expires_in=settings.access_token_expire_minutes * 60,
        )
