from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notion_clone.core.models.workspace import PageEntry, Workspace


class WorkspaceRepository(ABC):
    """Abstract repository interface for workspaces.

    Every operation targets a single workspace document. Absence, including a
    workspace id the store cannot parse, is reported as ``None`` rather than
    raised, so callers decide whether it is an error.
    """

    @abstractmethod
    async def create(self, workspace: Workspace) -> str:  # pragma: no cover - interface only
        """Insert a workspace stamped with its creation time and return its id."""

    @abstractmethod
    async def add_member(self, workspace_id: str, member_id: str) -> Workspace | None:  # pragma: no cover
        """Add ``member_id`` to the member set. Upserts a missing workspace."""

    @abstractmethod
    async def add_page(self, workspace_id: str, entry: PageEntry) -> Workspace | None:  # pragma: no cover
        """Add a page summary with set semantics on the whole entry."""

    @abstractmethod
    async def get_all_members(self, workspace_id: str) -> list[str] | None:  # pragma: no cover
        """Return the member ids, or None."""

    @abstractmethod
    async def get_all_root_pages(self, workspace_id: str) -> Sequence[PageEntry] | None:  # pragma: no cover
        """Return the summaries whose path is null, or None."""

    @abstractmethod
    async def get_children(self, workspace_id: str, page_id: str) -> Sequence[PageEntry] | None:  # pragma: no cover
        """Return the summaries whose ancestor chain includes ``page_id``'s reference.

        None when the page has no summary in this workspace.
        """

    @abstractmethod
    async def get_by_id(self, workspace_id: str) -> Workspace | None:  # pragma: no cover
        """Fetch the full workspace document, or None."""

    @abstractmethod
    async def update(self, workspace_id: str, changes: dict[str, Any]) -> Workspace | None:  # pragma: no cover
        """Merge ``changes`` into the workspace and stamp ``updated_at``. Upserts."""

    @abstractmethod
    async def update_page_entry(
        self, workspace_id: str, page_id: str, changes: dict[str, Any]
    ) -> Workspace | None:  # pragma: no cover
        """Update fields of one page summary in place, keeping its position."""

    @abstractmethod
    async def remove_member(self, workspace_id: str, member_id: str) -> Workspace | None:  # pragma: no cover
        """Remove ``member_id`` from the member set; no-op if absent."""

    @abstractmethod
    async def remove_page(self, workspace_id: str, page_id: str) -> Workspace | None:  # pragma: no cover
        """Remove the summary of ``page_id``; no-op if absent."""

    @abstractmethod
    async def delete(self, workspace_id: str) -> bool:  # pragma: no cover
        """Delete the workspace document only. Pages are left to the caller."""
