from __future__ import annotations

from typing import TYPE_CHECKING

from notion_clone.config import settings
from notion_clone.core.errors import (
    ForbiddenError,
    PageNotFoundError,
    UserNotFoundError,
    WorkspaceNotFoundError,
)
from notion_clone.core.models.page import Page, PageSettings
from notion_clone.core.models.workspace import Workspace
from notion_clone.core.services.access import require_member
from notion_clone.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notion_clone.core.models.workspace import PageEntry
    from notion_clone.core.repositories.page_repository import PageRepository
    from notion_clone.core.repositories.user_repository import UserRepository
    from notion_clone.core.repositories.workspace_repository import WorkspaceRepository
    from notion_clone.core.services.page_service import PageService

logger = get_logger(__name__)


class WorkspaceService:
    """Workspace use cases spanning the workspace, page and user collections."""

    def __init__(
        self,
        workspaces: WorkspaceRepository,
        pages: PageRepository,
        users: UserRepository,
        page_service: PageService,
    ) -> None:
        self._workspaces = workspaces
        self._pages = pages
        self._users = users
        self._page_service = page_service

    async def create_workspace(self, name: str, icon: str, user_id: str) -> str:
        """Create a workspace owned by ``user_id`` with a default root page.

        Steps: insert the workspace with the creator as its only member, grant
        the creator access, create the default page, read it back and add its
        summary to the workspace. Returns the workspace id.
        """
        workspace_id = await self._workspaces.create(
            Workspace(name=name, icon=icon, members=[user_id], pages=[])
        )
        await self._users.add_workspace(user_id, workspace_id)

        default_page = Page(
            title=settings.default_page_title,
            icon=settings.default_page_icon,
            content={"type": "doc", "content": []},
            favorite=[],
            page_settings=PageSettings(font="serif", small_text=True, full_width=True, lock=False),
            path=None,
            workspace_id=workspace_id,
        )
        page_id = await self._page_service.add_page_to_workspace(default_page)

        logger.info(
            "Workspace created",
            extra={"workspace_id": workspace_id, "user_id": user_id, "page_id": page_id},
        )
        return workspace_id

    async def get_workspace(self, workspace_id: str, user_id: str) -> Workspace:
        await require_member(self._workspaces, workspace_id, user_id)
        workspace = await self._workspaces.get_by_id(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError()
        return workspace

    async def update_workspace(self, workspace_id: str, update_dto, user_id: str) -> Workspace:
        await require_member(self._workspaces, workspace_id, user_id)
        changes = update_dto.model_dump(exclude_unset=True, exclude_none=True)
        workspace = await self._workspaces.update(workspace_id, changes)
        if workspace is None:
            raise WorkspaceNotFoundError()
        return workspace

    async def get_members(self, workspace_id: str, user_id: str) -> list[str]:
        return await require_member(self._workspaces, workspace_id, user_id)

    async def add_member(self, workspace_id: str, member_id: str, user_id: str) -> None:
        """Share the workspace with another user."""
        await require_member(self._workspaces, workspace_id, user_id)
        if await self._users.get_by_id(member_id) is None:
            raise UserNotFoundError()
        await self._workspaces.add_member(workspace_id, member_id)
        await self._users.add_workspace(member_id, workspace_id)

    async def remove_member(self, workspace_id: str, member_id: str, user_id: str) -> None:
        """Revoke a member's access. Removing a non-member is a no-op.

        The last member cannot be removed; delete the workspace instead.
        """
        members = await require_member(self._workspaces, workspace_id, user_id)
        if members == [member_id]:
            raise ForbiddenError("The last member of a workspace cannot be removed")
        await self._workspaces.remove_member(workspace_id, member_id)
        await self._users.remove_workspace(member_id, workspace_id)

    async def get_root_pages(self, workspace_id: str, user_id: str) -> Sequence[PageEntry]:
        await require_member(self._workspaces, workspace_id, user_id)
        return await self._workspaces.get_all_root_pages(workspace_id) or []

    async def get_children(self, workspace_id: str, page_id: str, user_id: str) -> Sequence[PageEntry]:
        await require_member(self._workspaces, workspace_id, user_id)
        children = await self._workspaces.get_children(workspace_id, page_id)
        if children is None:
            raise PageNotFoundError()
        return children

    async def delete_workspace(self, workspace_id: str, user_id: str) -> None:
        """Delete a workspace together with its pages and every member's access entry."""
        members = await require_member(self._workspaces, workspace_id, user_id)
        for member_id in members:
            await self._users.remove_workspace(member_id, workspace_id)
        removed_pages = await self._pages.delete_by_workspace(workspace_id)
        await self._workspaces.delete(workspace_id)
        logger.info(
            "Workspace deleted",
            extra={"workspace_id": workspace_id, "members": len(members), "pages": removed_pages},
        )
