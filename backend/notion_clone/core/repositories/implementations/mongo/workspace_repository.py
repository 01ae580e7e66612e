from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pymongo import ReturnDocument

from notion_clone.core.models.base import utc_now
from notion_clone.core.models.workspace import PageEntry, Workspace
from notion_clone.core.repositories.workspace_repository import WorkspaceRepository
from notion_clone.db.base import WORKSPACES_COLLECTION
from notion_clone.db.mapper import is_valid_object_id, map_document, object_id_to_string, to_object_id
from notion_clone.utils.logging import get_logger

from .base import MongoRepository

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

_PROTECTED_FIELDS = {"id", "_id", "created_at", "updated_at", "members", "pages"}


class MongoWorkspaceRepository(MongoRepository, WorkspaceRepository):
    """MongoDB implementation of the WorkspaceRepository.

    Members and page summaries are arrays inside the workspace document and
    are only changed with atomic array operators, or, for in-place edits of a
    page summary, a compare-and-set rewrite of the array. Either way
    concurrent requests against the same workspace never lose each other's
    updates.
    """

    COLLECTION_NAME = WORKSPACES_COLLECTION

    async def create(self, workspace: Workspace) -> str:
        doc = self._workspace_to_doc(workspace)
        doc["created_at"] = utc_now()
        result = await self._run(lambda: self.collection.insert_one(doc))
        return object_id_to_string(result.inserted_id)

    async def add_member(self, workspace_id: str, member_id: str) -> Workspace | None:
        if not is_valid_object_id(workspace_id):
            return None
        # Upserts like update(): a deleted workspace comes back with just this member.
        doc = await self._run(
            lambda: self.collection.find_one_and_update(
                {"_id": to_object_id(workspace_id)},
                {
                    "$addToSet": {"members": member_id},
                    "$setOnInsert": self._insert_defaults(exclude={"members"}),
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        )
        return self._doc_to_workspace(doc)

    async def add_page(self, workspace_id: str, entry: PageEntry) -> Workspace | None:
        if not is_valid_object_id(workspace_id):
            return None
        doc = await self._run(
            lambda: self.collection.find_one_and_update(
                {"_id": to_object_id(workspace_id)},
                {"$addToSet": {"pages": entry.model_dump()}},
                return_document=ReturnDocument.AFTER,
            )
        )
        return self._doc_to_workspace(doc)

    async def get_all_members(self, workspace_id: str) -> list[str] | None:
        if not is_valid_object_id(workspace_id):
            return None
        doc = await self._run(
            lambda: self.collection.find_one({"_id": to_object_id(workspace_id)}, {"members": 1})
        )
        if not doc:
            return None
        return list(doc.get("members") or [])

    async def get_all_root_pages(self, workspace_id: str) -> Sequence[PageEntry] | None:
        entries = await self._get_entries(workspace_id)
        if entries is None:
            return None
        return [entry for entry in entries if entry.is_root]

    async def get_children(self, workspace_id: str, page_id: str) -> Sequence[PageEntry] | None:
        entries = await self._get_entries(workspace_id)
        if entries is None:
            return None
        parent = next((entry for entry in entries if entry.page_id == page_id), None)
        if parent is None:
            return None
        return [entry for entry in entries if entry.page_path.contains(parent.reference)]

    async def get_by_id(self, workspace_id: str) -> Workspace | None:
        if not is_valid_object_id(workspace_id):
            return None
        doc = await self._run(lambda: self.collection.find_one({"_id": to_object_id(workspace_id)}))
        return self._doc_to_workspace(doc)

    async def update(self, workspace_id: str, changes: dict[str, Any]) -> Workspace | None:
        if not is_valid_object_id(workspace_id):
            return None
        sanitized = {k: v for k, v in (changes or {}).items() if k not in _PROTECTED_FIELDS}
        sanitized["updated_at"] = utc_now()
        doc = await self._run(
            lambda: self.collection.find_one_and_update(
                {"_id": to_object_id(workspace_id)},
                {
                    "$set": sanitized,
                    "$setOnInsert": self._insert_defaults(exclude=set(sanitized)),
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        )
        return self._doc_to_workspace(doc)

    async def update_page_entry(
        self, workspace_id: str, page_id: str, changes: dict[str, Any]
    ) -> Workspace | None:
        if not is_valid_object_id(workspace_id) or not changes:
            return None
        update = {field: value for field, value in changes.items() if field != "page_id"}

        def edit(pages: list[dict[str, Any]]) -> list[dict[str, Any]] | None:
            for entry in pages:
                if entry.get("page_id") == page_id:
                    entry.update(update)
                    return pages
            return None

        doc = await self._rewrite_array(to_object_id(workspace_id), "pages", edit)
        return self._doc_to_workspace(doc)

    async def remove_member(self, workspace_id: str, member_id: str) -> Workspace | None:
        if not is_valid_object_id(workspace_id):
            return None
        doc = await self._run(
            lambda: self.collection.find_one_and_update(
                {"_id": to_object_id(workspace_id)},
                {"$pull": {"members": member_id}},
                return_document=ReturnDocument.AFTER,
            )
        )
        return self._doc_to_workspace(doc)

    async def remove_page(self, workspace_id: str, page_id: str) -> Workspace | None:
        if not is_valid_object_id(workspace_id):
            return None
        doc = await self._run(
            lambda: self.collection.find_one_and_update(
                {"_id": to_object_id(workspace_id)},
                {"$pull": {"pages": {"page_id": page_id}}},
                return_document=ReturnDocument.AFTER,
            )
        )
        return self._doc_to_workspace(doc)

    async def delete(self, workspace_id: str) -> bool:
        if not is_valid_object_id(workspace_id):
            return False
        result = await self._run(lambda: self.collection.delete_one({"_id": to_object_id(workspace_id)}))
        return result.deleted_count > 0

    async def _get_entries(self, workspace_id: str) -> list[PageEntry] | None:
        if not is_valid_object_id(workspace_id):
            return None
        doc = await self._run(
            lambda: self.collection.find_one({"_id": to_object_id(workspace_id)}, {"pages": 1})
        )
        if not doc:
            return None
        return [PageEntry.model_validate(raw) for raw in doc.get("pages") or []]

    @staticmethod
    def _insert_defaults(exclude: set[str]) -> dict[str, Any]:
        defaults = {"name": "", "icon": None, "members": [], "pages": [], "created_at": utc_now()}
        return {k: v for k, v in defaults.items() if k not in exclude}

    @staticmethod
    def _workspace_to_doc(workspace: Workspace) -> dict[str, Any]:
        return workspace.model_dump(exclude={"id", "updated_at"})

    @staticmethod
    def _doc_to_workspace(doc: dict[str, Any] | None) -> Workspace | None:
        mapped = map_document(doc)
        if mapped is None:
            return None
        return Workspace.model_validate(mapped)
