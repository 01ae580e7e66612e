from __future__ import annotations


class DomainError(Exception):
    """Base class for errors raised by services and translated by the API layer."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Resource not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class WorkspaceNotFoundError(NotFoundError):
    default_message = "Workspace not found"


class PageNotFoundError(NotFoundError):
    default_message = "Page not found"


class ForbiddenError(DomainError):
    status_code = 403
    default_message = "Forbidden"


class PermissionDeniedError(ForbiddenError):
    default_message = "You do not have access to this resource"


class EmailInUseError(ForbiddenError):
    default_message = "An account with this email already exists"


class InvalidCredentialsError(DomainError):
    status_code = 401
    default_message = "Invalid email or password"


class ValidationFailedError(DomainError):
    status_code = 400
    default_message = "Invalid request"


class ConcurrentUpdateError(DomainError):
    status_code = 409
    default_message = "The resource was modified concurrently, please retry"
