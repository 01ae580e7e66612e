from __future__ import annotations

from typing import TYPE_CHECKING

from notion_clone.core.errors import EmailInUseError, PermissionDeniedError, UserNotFoundError
from notion_clone.utils.logging import get_logger

if TYPE_CHECKING:
    from notion_clone.core.models.user import User, WorkspaceAccess
    from notion_clone.core.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class UserService:
    """Profile and workspace-access operations on behalf of the signed-in user.

    A user id that does not resolve raises ``UserNotFoundError`` before any
    ownership check, so an unknown id is reported as 404 and somebody else's
    id as 403.
    """

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    async def get_user(self, user_id: str, actor_id: str) -> User:
        return await self._get_owned(user_id, actor_id)

    async def update_user(self, user_id: str, update_dto, actor_id: str) -> User:
        await self._get_owned(user_id, actor_id)
        changes = update_dto.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in changes:
            changes["email"] = changes["email"].lower().strip()
            holder = await self._users.get_by_email(changes["email"])
            if holder is not None and holder.id != user_id:
                logger.warning("Email change to an address in use", extra={"user_id": user_id})
                raise EmailInUseError()
        updated = await self._users.update(user_id, changes)
        if updated is None:
            raise UserNotFoundError()
        return updated

    async def update_profile_picture(self, user_id: str, url: str, actor_id: str) -> None:
        await self._get_owned(user_id, actor_id)
        if await self._users.update_profile_picture(user_id, url) is None:
            raise UserNotFoundError()

    async def delete_user(self, user_id: str, actor_id: str) -> None:
        await self._get_owned(user_id, actor_id)
        await self._users.delete(user_id)
        logger.info("User deleted", extra={"user_id": user_id})

    async def get_workspaces_access(self, user_id: str, actor_id: str) -> list[WorkspaceAccess]:
        user = await self._get_owned(user_id, actor_id)
        return user.workspaces

    async def add_workspace_access(self, user_id: str, workspace_id: str, actor_id: str) -> None:
        await self._get_owned(user_id, actor_id)
        if await self._users.add_workspace(user_id, workspace_id) is None:
            raise UserNotFoundError()

    async def remove_workspace_access(self, user_id: str, workspace_id: str, actor_id: str) -> None:
        await self._get_accessible(user_id, workspace_id, actor_id)
        await self._users.remove_workspace(user_id, workspace_id)

    async def get_favorites(self, user_id: str, workspace_id: str, actor_id: str) -> list[str]:
        user = await self._get_accessible(user_id, workspace_id, actor_id)
        return user.favorites_for(workspace_id) or []

    async def add_favorite(self, user_id: str, workspace_id: str, page_id: str, actor_id: str) -> None:
        await self._get_accessible(user_id, workspace_id, actor_id)
        await self._users.add_favorite(user_id, workspace_id, page_id)

    async def remove_favorite(self, user_id: str, workspace_id: str, page_id: str, actor_id: str) -> None:
        await self._get_accessible(user_id, workspace_id, actor_id)
        await self._users.remove_favorite(user_id, workspace_id, page_id)

    async def _get_owned(self, user_id: str, actor_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        if user.id != actor_id:
            raise PermissionDeniedError()
        return user

    async def _get_accessible(self, user_id: str, workspace_id: str, actor_id: str) -> User:
        user = await self._get_owned(user_id, actor_id)
        if not user.has_workspace(workspace_id):
            raise PermissionDeniedError("Workspace is not in the user's workspace access list")
        return user
