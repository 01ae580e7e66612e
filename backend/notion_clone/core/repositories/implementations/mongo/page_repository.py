from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pymongo import ReturnDocument

from notion_clone.core.models.base import utc_now
from notion_clone.core.models.page import Page
from notion_clone.core.models.page_path import make_reference
from notion_clone.core.repositories.page_repository import PageRepository
from notion_clone.db.base import PAGES_COLLECTION
from notion_clone.db.mapper import is_valid_object_id, map_document, object_id_to_string, to_object_id
from notion_clone.utils.logging import get_logger

from .base import MongoRepository

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = get_logger(__name__)

_PROTECTED_FIELDS = {"id", "_id", "workspace_id", "reference", "path", "created_at", "updated_at"}


class MongoPageRepository(MongoRepository, PageRepository):
    """MongoDB implementation of the PageRepository.

    The page document is the source of truth; the summary kept in the owning
    workspace is maintained by the services, not here.
    """

    COLLECTION_NAME = PAGES_COLLECTION

    async def create(self, page: Page) -> str:
        doc = page.model_dump(exclude={"id", "updated_at"})
        doc["reference"] = page.reference or make_reference(page.title)
        doc["created_at"] = utc_now()
        result = await self._run(lambda: self.collection.insert_one(doc))
        page_id = object_id_to_string(result.inserted_id)
        logger.debug("Page created", extra={"page_id": page_id, "workspace_id": page.workspace_id})
        return page_id

    async def get_by_id(self, page_id: str) -> Page | None:
        if not is_valid_object_id(page_id):
            return None
        doc = await self._run(lambda: self.collection.find_one({"_id": to_object_id(page_id)}))
        return self._doc_to_page(doc)

    async def update(self, page_id: str, changes: dict[str, Any]) -> Page | None:
        if not is_valid_object_id(page_id):
            return None
        sanitized = {k: v for k, v in (changes or {}).items() if k not in _PROTECTED_FIELDS}
        if not sanitized:
            return await self.get_by_id(page_id)
        sanitized["updated_at"] = utc_now()
        return await self._set(page_id, sanitized)

    async def update_title(self, page_id: str, title: str, reference: str) -> Page | None:
        if not is_valid_object_id(page_id):
            return None
        return await self._set(page_id, {"title": title, "reference": reference, "updated_at": utc_now()})

    async def update_path(self, page_id: str, path: str | None) -> Page | None:
        if not is_valid_object_id(page_id):
            return None
        return await self._set(page_id, {"path": path, "updated_at": utc_now()})

    async def delete(self, page_id: str) -> bool:
        if not is_valid_object_id(page_id):
            return False
        result = await self._run(lambda: self.collection.delete_one({"_id": to_object_id(page_id)}))
        return result.deleted_count > 0

    async def delete_many(self, page_ids: Iterable[str]) -> int:
        object_ids = [to_object_id(pid) for pid in page_ids if is_valid_object_id(pid)]
        if not object_ids:
            return 0
        result = await self._run(lambda: self.collection.delete_many({"_id": {"$in": object_ids}}))
        return result.deleted_count

    async def delete_by_workspace(self, workspace_id: str) -> int:
        result = await self._run(lambda: self.collection.delete_many({"workspace_id": workspace_id}))
        return result.deleted_count

    async def _set(self, page_id: str, fields: dict[str, Any]) -> Page | None:
        doc = await self._run(
            lambda: self.collection.find_one_and_update(
                {"_id": to_object_id(page_id)},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        )
        return self._doc_to_page(doc)

    @staticmethod
    def _doc_to_page(doc: dict[str, Any] | None) -> Page | None:
        mapped = map_document(doc)
        if mapped is None:
            return None
        return Page.model_validate(mapped)
