from __future__ import annotations

from typing import TYPE_CHECKING

from notion_clone.core.errors import ForbiddenError, PageNotFoundError, ValidationFailedError
from notion_clone.core.models.page import Page
from notion_clone.core.models.page_path import PagePath, rename_reference
from notion_clone.core.services.access import require_member
from notion_clone.utils.logging import get_logger

if TYPE_CHECKING:
    from notion_clone.core.repositories.page_repository import PageRepository
    from notion_clone.core.repositories.workspace_repository import WorkspaceRepository

logger = get_logger(__name__)


class PageService:
    """Page use cases.

    Every write that touches a field mirrored in the workspace's page index
    writes the page first and the index second. The two writes are not
    transactional; a failure in between surfaces to the caller and leaves the
    page write in place.
    """

    def __init__(self, pages: PageRepository, workspaces: WorkspaceRepository) -> None:
        self._pages = pages
        self._workspaces = workspaces

    async def create_page(self, workspace_id: str, create_dto, user_id: str) -> str:
        """Create a page in a workspace, optionally below an existing page."""
        await require_member(self._workspaces, workspace_id, user_id)

        path = PagePath()
        parent_id = getattr(create_dto, "parent_page_id", None)
        if parent_id:
            parent = await self._pages.get_by_id(parent_id)
            if parent is None or parent.workspace_id != workspace_id:
                raise PageNotFoundError("Parent page not found")
            path = parent.page_path.child(parent.reference)

        fields = create_dto.model_dump(exclude_none=True, exclude={"parent_page_id"})
        try:
            page = Page(**fields, path=path.serialize(), workspace_id=workspace_id)
        except ValueError as err:
            raise ValidationFailedError(str(err)) from err
        return await self.add_page_to_workspace(page)

    async def add_page_to_workspace(self, page: Page) -> str:
        """Store ``page`` and index it in its workspace; returns the page id.

        The page is read back to pick up its generated reference. Not finding
        it right after the insert means the store is inconsistent, which is
        reported as forbidden instead of being retried.
        """
        page_id = await self._pages.create(page)
        stored = await self._pages.get_by_id(page_id)
        if stored is None:
            logger.error("Page vanished after creation", extra={"page_id": page_id})
            raise ForbiddenError("Page could not be read back after creation")

        await self._workspaces.add_page(page.workspace_id, stored.to_entry())
        return page_id

    async def get_page(self, page_id: str, user_id: str) -> Page:
        page = await self._pages.get_by_id(page_id)
        if page is None:
            raise PageNotFoundError()
        await require_member(self._workspaces, page.workspace_id, user_id)
        return page

    async def update_page(self, page_id: str, update_dto, user_id: str) -> Page:
        """Update content, icon, cover or settings of a page."""
        page = await self.get_page(page_id, user_id)
        changes = update_dto.model_dump(exclude_unset=True, exclude_none=True)
        updated = await self._pages.update(page_id, changes)
        if updated is None:
            raise PageNotFoundError()
        if "icon" in changes:
            await self._workspaces.update_page_entry(page.workspace_id, page_id, {"icon": updated.icon})
        return updated

    async def update_title(self, page_id: str, title: str, user_id: str) -> Page:
        """Rename a page.

        The reference keeps its unique suffix and takes the new title as slug.
        The workspace index entry is edited in place so its position in the
        list does not change, and descendants get the new reference in their
        paths so the tree stays connected.
        """
        page = await self.get_page(page_id, user_id)
        old_reference = page.reference
        new_reference = rename_reference(old_reference, title)

        descendants = await self._workspaces.get_children(page.workspace_id, page_id) or []

        updated = await self._pages.update_title(page_id, title, new_reference)
        if updated is None:
            raise PageNotFoundError()
        await self._workspaces.update_page_entry(
            page.workspace_id, page_id, {"title": title, "reference": new_reference}
        )

        if new_reference != old_reference:
            for entry in descendants:
                path = entry.page_path.replace(old_reference, new_reference).serialize()
                await self._pages.update_path(entry.page_id, path)
                await self._workspaces.update_page_entry(page.workspace_id, entry.page_id, {"path": path})

        logger.info(
            "Page renamed",
            extra={"page_id": page_id, "reference": new_reference, "descendants": len(descendants)},
        )
        return updated

    async def delete_page(self, page_id: str, user_id: str) -> None:
        """Delete a page, its descendants and their index entries."""
        page = await self.get_page(page_id, user_id)
        descendants = await self._workspaces.get_children(page.workspace_id, page_id) or []
        page_ids = [page_id, *(entry.page_id for entry in descendants)]

        removed = await self._pages.delete_many(page_ids)
        for removed_id in page_ids:
            await self._workspaces.remove_page(page.workspace_id, removed_id)

        logger.info("Page deleted", extra={"page_id": page_id, "removed": removed})
