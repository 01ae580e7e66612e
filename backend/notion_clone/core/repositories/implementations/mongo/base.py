from __future__ import annotations

import asyncio
import copy
from typing import TYPE_CHECKING, Any

from notion_clone.core.errors import ConcurrentUpdateError
from notion_clone.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from bson import ObjectId
    from pymongo.collection import Collection

    from notion_clone.db.base import DocumentStore

logger = get_logger(__name__)

ARRAY_WRITE_ATTEMPTS = 5


class MongoRepository:
    """Shared plumbing for repositories backed by one MongoDB collection."""

    COLLECTION_NAME: str = ""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def collection(self) -> Collection:
        return self._store.get_collection(self.COLLECTION_NAME)

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        # pymongo is blocking; keep the event loop free.
        return await asyncio.to_thread(func)

    async def _rewrite_array(
        self,
        document_id: ObjectId,
        field: str,
        edit: Callable[[list[Any]], list[Any] | None],
    ) -> dict[str, Any] | None:
        """Replace one array field through a compare-and-set on its current value.

        ``edit`` gets a copy of the array and returns the new array, or None
        when the element it targets is not there (the call then returns None).
        The write only lands if the array is unchanged since it was read, so a
        concurrent writer makes it fail and the edit is replayed on the fresh
        value. Element order is preserved by construction.
        """
        for attempt in range(ARRAY_WRITE_ATTEMPTS):
            doc = await self._run(lambda: self.collection.find_one({"_id": document_id}))
            if doc is None:
                return None

            current = doc.get(field)
            updated = edit(copy.deepcopy(current or []))
            if updated is None:
                return None
            if updated == (current or []):
                return doc

            result = await self._run(
                lambda: self.collection.update_one(
                    {"_id": document_id, field: current}, {"$set": {field: updated}}
                )
            )
            if result.matched_count:
                return await self._run(lambda: self.collection.find_one({"_id": document_id}))

            logger.debug(
                "Array changed during rewrite, retrying",
                extra={"collection": self.COLLECTION_NAME, "field": field, "attempt": attempt + 1},
            )

        logger.warning(
            "Array rewrite gave up after concurrent updates",
            extra={"collection": self.COLLECTION_NAME, "field": field},
        )
        raise ConcurrentUpdateError()
