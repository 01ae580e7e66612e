from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notion_clone.core.models.page import Page


class PageRepository(ABC):
    """Abstract repository interface for pages."""

    @abstractmethod
    async def create(self, page: Page) -> str:  # pragma: no cover - interface only
        """Persist a new page, generating its reference, and return its id."""

    @abstractmethod
    async def get_by_id(self, page_id: str) -> Page | None:  # pragma: no cover
        """Fetch a page by id or return None if not found or the id is invalid."""

    @abstractmethod
    async def update(self, page_id: str, changes: dict[str, Any]) -> Page | None:  # pragma: no cover
        """Partially update a page and return it, or None if missing."""

    @abstractmethod
    async def update_title(self, page_id: str, title: str, reference: str) -> Page | None:  # pragma: no cover
        """Store a new title together with its derived reference."""

    @abstractmethod
    async def update_path(self, page_id: str, path: str | None) -> Page | None:  # pragma: no cover
        """Replace the serialized ancestor chain of a page."""

    @abstractmethod
    async def delete(self, page_id: str) -> bool:  # pragma: no cover
        """Delete a page by id. Return True if a document was removed."""

    @abstractmethod
    async def delete_many(self, page_ids: Iterable[str]) -> int:  # pragma: no cover
        """Delete several pages and return how many were removed."""

    @abstractmethod
    async def delete_by_workspace(self, workspace_id: str) -> int:  # pragma: no cover
        """Delete every page owned by a workspace."""
