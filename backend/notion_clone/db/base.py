from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pymongo import MongoClient

from notion_clone.utils.logging import get_logger

if TYPE_CHECKING:
    from pymongo.collection import Collection
    from pymongo.database import Database

logger = get_logger(__name__)

USERS_COLLECTION = "users"
WORKSPACES_COLLECTION = "workspaces"
PAGES_COLLECTION = "pages"


class DocumentStore:
    """Process-wide handle on the document database.

    Created once at startup and closed at shutdown. Repositories receive it
    through dependency injection and only ever ask it for collections.
    ``client`` replaces the ``MongoClient`` built from ``url``; anything with
    the pymongo client interface works.
    """

    def __init__(self, url: str, db_name: str, client: Any | None = None) -> None:
        self._url = url
        self._db_name = db_name
        self._client: Any | None = client
        self._db: Database | None = client[db_name] if client is not None else None

    def connect(self) -> None:
        if self._client is not None:
            return
        logger.debug("Creating MongoDB client", extra={"db": self._db_name})
        self._client = MongoClient(self._url)
        self._db = self._client[self._db_name]

    def disconnect(self) -> None:
        if self._client is None:
            return
        logger.debug("Closing MongoDB client")
        self._client.close()
        self._client = None
        self._db = None

    def get_collection(self, name: str) -> Collection:
        """Return a collection, connecting lazily on first use."""
        if self._db is None:
            self.connect()
        return self._db[name]

    def ping(self) -> None:
        if self._client is None:
            self.connect()
        self._client.admin.command("ping")
