from __future__ import annotations

from typing import TYPE_CHECKING

from notion_clone.core.errors import PermissionDeniedError, WorkspaceNotFoundError

if TYPE_CHECKING:
    from notion_clone.core.repositories.workspace_repository import WorkspaceRepository


async def require_member(workspaces: WorkspaceRepository, workspace_id: str, user_id: str) -> list[str]:
    """Return the workspace members, failing unless ``user_id`` is one of them."""
    members = await workspaces.get_all_members(workspace_id)
    if members is None:
        raise WorkspaceNotFoundError()
    if user_id not in members:
        raise PermissionDeniedError("You are not a member of this workspace")
    return members
