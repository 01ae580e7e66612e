from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pymongo import ReturnDocument

from notion_clone.core.models.base import utc_now
from notion_clone.core.models.user import User, WorkspaceAccess
from notion_clone.core.repositories.user_repository import UserRepository
from notion_clone.db.base import USERS_COLLECTION
from notion_clone.db.mapper import is_valid_object_id, map_document, object_id_to_string, to_object_id

from .base import MongoRepository

if TYPE_CHECKING:
    from collections.abc import Callable

_PROTECTED_FIELDS = {"id", "_id", "password", "workspaces", "created_at", "updated_at"}


class MongoUserRepository(MongoRepository, UserRepository):
    """MongoDB implementation of the UserRepository.

    ``workspaces`` is an array of ``{workspace_id, favorites}`` entries with at
    most one entry per workspace. Favorites are edited by rewriting the
    ``workspaces`` array with a compare-and-set, so the matching entry keeps
    its position and concurrent edits are replayed rather than lost.
    """

    COLLECTION_NAME = USERS_COLLECTION

    async def create(self, user: User) -> str:
        doc = user.model_dump(exclude={"id", "updated_at"})
        doc["created_at"] = utc_now()
        result = await self._run(lambda: self.collection.insert_one(doc))
        return object_id_to_string(result.inserted_id)

    async def get_by_id(self, user_id: str) -> User | None:
        if not is_valid_object_id(user_id):
            return None
        doc = await self._run(lambda: self.collection.find_one({"_id": to_object_id(user_id)}))
        return self._doc_to_user(doc)

    async def get_by_email(self, email: str) -> User | None:
        doc = await self._run(lambda: self.collection.find_one({"email": email}))
        return self._doc_to_user(doc)

    async def update(self, user_id: str, changes: dict[str, Any]) -> User | None:
        if not is_valid_object_id(user_id):
            return None
        sanitized = {k: v for k, v in (changes or {}).items() if k not in _PROTECTED_FIELDS}
        if not sanitized:
            return await self.get_by_id(user_id)
        sanitized["updated_at"] = utc_now()
        return await self._find_and_update({"_id": to_object_id(user_id)}, {"$set": sanitized})

    async def update_profile_picture(self, user_id: str, url: str) -> User | None:
        if not is_valid_object_id(user_id):
            return None
        return await self._find_and_update(
            {"_id": to_object_id(user_id)},
            {"$set": {"profile_picture": {"url": url}, "updated_at": utc_now()}},
        )

    async def add_workspace(self, user_id: str, workspace_id: str) -> User | None:
        if not is_valid_object_id(user_id):
            return None
        # The $ne guard keeps workspace ids unique without a read-modify-write.
        await self._run(
            lambda: self.collection.update_one(
                {"_id": to_object_id(user_id), "workspaces.workspace_id": {"$ne": workspace_id}},
                {"$push": {"workspaces": {"workspace_id": workspace_id, "favorites": []}}},
            )
        )
        return await self.get_by_id(user_id)

    async def get_workspaces(self, user_id: str) -> list[WorkspaceAccess] | None:
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        return user.workspaces

    async def get_favorites(self, user_id: str, workspace_id: str) -> list[str] | None:
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        return user.favorites_for(workspace_id)

    async def add_favorite(self, user_id: str, workspace_id: str, page_id: str) -> User | None:
        if not is_valid_object_id(user_id):
            return None

        def edit(favorites: list[str]) -> list[str]:
            if page_id not in favorites:
                favorites.append(page_id)
            return favorites

        return await self._edit_favorites(user_id, workspace_id, edit)

    async def remove_favorite(self, user_id: str, workspace_id: str, page_id: str) -> User | None:
        if not is_valid_object_id(user_id):
            return None
        return await self._edit_favorites(
            user_id, workspace_id, lambda favorites: [fav for fav in favorites if fav != page_id]
        )

    async def remove_workspace(self, user_id: str, workspace_id: str) -> User | None:
        if not is_valid_object_id(user_id):
            return None
        return await self._find_and_update(
            {"_id": to_object_id(user_id)},
            {"$pull": {"workspaces": {"workspace_id": workspace_id}}},
        )

    async def delete(self, user_id: str) -> bool:
        if not is_valid_object_id(user_id):
            return False
        result = await self._run(lambda: self.collection.delete_one({"_id": to_object_id(user_id)}))
        return result.deleted_count > 0

    async def _edit_favorites(
        self, user_id: str, workspace_id: str, edit: Callable[[list[str]], list[str]]
    ) -> User | None:
        """Apply ``edit`` to the favorites of one workspace entry; None if the user has no such entry."""

        def edit_workspaces(workspaces: list[dict[str, Any]]) -> list[dict[str, Any]] | None:
            for access in workspaces:
                if access.get("workspace_id") == workspace_id:
                    access["favorites"] = edit(list(access.get("favorites") or []))
                    return workspaces
            return None

        doc = await self._rewrite_array(to_object_id(user_id), "workspaces", edit_workspaces)
        return self._doc_to_user(doc)

    async def _find_and_update(self, query: dict[str, Any], update: dict[str, Any]) -> User | None:
        doc = await self._run(
            lambda: self.collection.find_one_and_update(
                query, update, return_document=ReturnDocument.AFTER
            )
        )
        return self._doc_to_user(doc)

    @staticmethod
    def _doc_to_user(doc: dict[str, Any] | None) -> User | None:
        mapped = map_document(doc)
        if mapped is None:
            return None
        return User.model_validate(mapped)
