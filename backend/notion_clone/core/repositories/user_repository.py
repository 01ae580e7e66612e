from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from notion_clone.core.models.user import User, WorkspaceAccess


class UserRepository(ABC):
    """Abstract repository interface for users and their workspace access lists."""

    @abstractmethod
    async def create(self, user: User) -> str:  # pragma: no cover - interface only
        """Insert a user and return its id."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:  # pragma: no cover
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:  # pragma: no cover
        ...

    @abstractmethod
    async def update(self, user_id: str, changes: dict[str, Any]) -> User | None:  # pragma: no cover
        """Merge ``changes`` into an existing user; None if the user is missing."""

    @abstractmethod
    async def update_profile_picture(self, user_id: str, url: str) -> User | None:  # pragma: no cover
        ...

    @abstractmethod
    async def add_workspace(self, user_id: str, workspace_id: str) -> User | None:  # pragma: no cover
        """Grant access to a workspace. Adding an existing workspace is a no-op."""

    @abstractmethod
    async def get_workspaces(self, user_id: str) -> list[WorkspaceAccess] | None:  # pragma: no cover
        ...

    @abstractmethod
    async def get_favorites(self, user_id: str, workspace_id: str) -> list[str] | None:  # pragma: no cover
        """Favorites for one workspace; None if the user or the workspace entry is missing."""

    @abstractmethod
    async def add_favorite(self, user_id: str, workspace_id: str, page_id: str) -> User | None:  # pragma: no cover
        ...

    @abstractmethod
    async def remove_favorite(self, user_id: str, workspace_id: str, page_id: str) -> User | None:  # pragma: no cover
        ...

    @abstractmethod
    async def remove_workspace(self, user_id: str, workspace_id: str) -> User | None:  # pragma: no cover
        ...

    @abstractmethod
    async def delete(self, user_id: str) -> bool:  # pragma: no cover
        ...
