"""Persistence gateway and database connection management."""

import asyncio
import copy
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Sequence
from uuid import uuid4

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from .config import get_settings
from .errors import DuplicateEntityError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

# Collections
SKILL_CATEGORIES = "skillCategories"
CATEGORY_REQUESTS = "categoryRequests"
SKILL_REQUESTS = "skillRequests"
PORTFOLIOS = "portfolios"
USERS = "users"


class _ServerTimestamp:
    """Placeholder resolved to the write time by the gateway."""

    _instance: Optional["_ServerTimestamp"] = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"

    def __deepcopy__(self, memo: dict) -> "_ServerTimestamp":
        return self


SERVER_TIMESTAMP = _ServerTimestamp()


def _split_timestamps(document: dict) -> tuple[dict, list[str]]:
    """Separate top-level SERVER_TIMESTAMP fields from concrete values."""
    values = {k: v for k, v in document.items() if v is not SERVER_TIMESTAMP}
    stamped = [k for k, v in document.items() if v is SERVER_TIMESTAMP]
    return values, stamped


class PersistenceGateway(ABC):
    """Abstract CRUD interface over a document store.

    Documents are plain dicts. Every document returned carries its id under
    the ``id`` key.
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        """Fetch one document, or None if absent."""

    @abstractmethod
    async def list(
        self,
        collection: str,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        """List documents matching equality filters."""

    @abstractmethod
    async def create(
        self, collection: str, document: dict, doc_id: Optional[str] = None
    ) -> str:
        """Insert a document and return its id."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, partial: dict) -> None:
        """Merge top-level fields into an existing document."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Missing documents are ignored."""

    @abstractmethod
    async def increment_field(
        self, collection: str, doc_id: str, field: str, delta: int = 1
    ) -> None:
        """Atomically add ``delta`` to a numeric field."""

    def server_timestamp(self) -> _ServerTimestamp:
        """Opaque token resolved to the write time."""
        return SERVER_TIMESTAMP

    async def ensure_index(
        self, collection: str, fields: Sequence[tuple[str, int]], unique: bool = False
    ) -> None:
        """Create an index where the backend supports it."""
        return None

    async def close(self) -> None:
        """Release backend resources."""
        return None


class MongoGateway(PersistenceGateway):
    """Gateway backed by MongoDB through the pymongo async client."""

    def __init__(self, client: AsyncMongoClient, database: str) -> None:
        self.client = client
        self.db = client[database]

    @staticmethod
    def _to_public(doc: Optional[dict]) -> Optional[dict]:
        if not doc:
            return doc
        doc = {**doc}
        if "_id" in doc:
            doc["id"] = str(doc.pop("_id"))
        return doc

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        try:
            doc = await self.db[collection].find_one({"_id": doc_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to read {collection}/{doc_id}: {e}") from e
        return self._to_public(doc)

    async def list(
        self,
        collection: str,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        try:
            cursor = self.db[collection].find(filters or {})
            if order_by:
                cursor = cursor.sort(order_by, DESCENDING if descending else ASCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise PersistenceError(f"Failed to list {collection}: {e}") from e
        return [self._to_public(d) for d in docs]

    async def create(
        self, collection: str, document: dict, doc_id: Optional[str] = None
    ) -> str:
        doc_id = doc_id or document.get("id") or uuid4().hex
        values, stamped = _split_timestamps(document)
        values.pop("id", None)
        # insert_one cannot use $currentDate; stamp with the write time here
        now = datetime.now(timezone.utc)
        for field in stamped:
            values[field] = now
        try:
            await self.db[collection].insert_one({"_id": doc_id, **values})
        except DuplicateKeyError as e:
            raise DuplicateEntityError(f"{collection}/{doc_id} already exists") from e
        except PyMongoError as e:
            raise PersistenceError(f"Failed to create in {collection}: {e}") from e
        return doc_id

    async def update(self, collection: str, doc_id: str, partial: dict) -> None:
        values, stamped = _split_timestamps(partial)
        values.pop("id", None)
        update: dict[str, Any] = {}
        if values:
            update["$set"] = values
        if stamped:
            update["$currentDate"] = {field: True for field in stamped}
        if not update:
            return
        try:
            result = await self.db[collection].update_one({"_id": doc_id}, update)
        except DuplicateKeyError as e:
            raise DuplicateEntityError(f"Update of {collection}/{doc_id} conflicts: {e}") from e
        except PyMongoError as e:
            raise PersistenceError(f"Failed to update {collection}/{doc_id}: {e}") from e
        if result.matched_count == 0:
            raise NotFoundError(f"{collection}/{doc_id} not found")

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            await self.db[collection].delete_one({"_id": doc_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to delete {collection}/{doc_id}: {e}") from e

    async def increment_field(
        self, collection: str, doc_id: str, field: str, delta: int = 1
    ) -> None:
        try:
            result = await self.db[collection].update_one(
                {"_id": doc_id}, {"$inc": {field: delta}}
            )
        except PyMongoError as e:
            raise PersistenceError(f"Failed to increment {collection}/{doc_id}.{field}: {e}") from e
        if result.matched_count == 0:
            raise NotFoundError(f"{collection}/{doc_id} not found")

    async def ensure_index(
        self, collection: str, fields: Sequence[tuple[str, int]], unique: bool = False
    ) -> None:
        try:
            await self.db[collection].create_index(fields, unique=unique)
        except PyMongoError as e:
            raise PersistenceError(f"Failed to create index on {collection}: {e}") from e

    async def close(self) -> None:
        await self.client.close()


class InMemoryGateway(PersistenceGateway):
    """Process-local gateway used in tests and with STORAGE_BACKEND=memory."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict]] = {}
        self._lock = asyncio.Lock()
        self._last_ts: Optional[datetime] = None

    def _now(self) -> datetime:
        # Strictly increasing so created_at ordering is deterministic
        now = datetime.now(timezone.utc)
        if self._last_ts is not None and now <= self._last_ts:
            now = self._last_ts + timedelta(microseconds=1)
        self._last_ts = now
        return now

    def _resolve(self, document: dict) -> dict:
        values, stamped = _split_timestamps(document)
        if stamped:
            now = self._now()
            for field in stamped:
                values[field] = now
        return copy.deepcopy(values)

    @staticmethod
    def _lookup(doc: dict, key: str) -> Any:
        value: Any = doc
        for part in key.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value

    def _matches(self, doc: dict, filters: dict) -> bool:
        return all(self._lookup(doc, k) == v for k, v in filters.items())

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        doc = self._collections.get(collection, {}).get(doc_id)
        if doc is None:
            return None
        return {**copy.deepcopy(doc), "id": doc_id}

    async def list(
        self,
        collection: str,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        docs = [
            {**copy.deepcopy(doc), "id": doc_id}
            for doc_id, doc in self._collections.get(collection, {}).items()
            if self._matches(doc, filters or {})
        ]
        if order_by:
            present = [d for d in docs if self._lookup(d, order_by) is not None]
            missing = [d for d in docs if self._lookup(d, order_by) is None]
            present.sort(key=lambda d: self._lookup(d, order_by), reverse=descending)
            docs = present + missing
        return docs

    async def create(
        self, collection: str, document: dict, doc_id: Optional[str] = None
    ) -> str:
        doc_id = doc_id or document.get("id") or uuid4().hex
        async with self._lock:
            docs = self._collections.setdefault(collection, {})
            if doc_id in docs:
                raise DuplicateEntityError(f"{collection}/{doc_id} already exists")
            values = self._resolve(document)
            values.pop("id", None)
            docs[doc_id] = values
        return doc_id

    async def update(self, collection: str, doc_id: str, partial: dict) -> None:
        async with self._lock:
            doc = self._collections.get(collection, {}).get(doc_id)
            if doc is None:
                raise NotFoundError(f"{collection}/{doc_id} not found")
            values = self._resolve(partial)
            values.pop("id", None)
            doc.update(values)

    async def delete(self, collection: str, doc_id: str) -> None:
        async with self._lock:
            self._collections.get(collection, {}).pop(doc_id, None)

    async def increment_field(
        self, collection: str, doc_id: str, field: str, delta: int = 1
    ) -> None:
        async with self._lock:
            doc = self._collections.get(collection, {}).get(doc_id)
            if doc is None:
                raise NotFoundError(f"{collection}/{doc_id} not found")
            doc[field] = (doc.get(field) or 0) + delta


class Database:
    """Database connection manager."""

    _gateway: PersistenceGateway | None = None

    @classmethod
    async def connect(cls) -> None:
        """Create the gateway selected by settings."""
        settings = get_settings()
        if settings.storage_backend == "memory":
            cls._gateway = InMemoryGateway()
            logger.warning("Using in-memory storage; data is lost on restart")
            return

        client: AsyncMongoClient = AsyncMongoClient(settings.mongo_uri, tz_aware=True)
        # Verify connection
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            await client.close()
            raise PersistenceError(f"Cannot reach MongoDB at {settings.mongo_uri}: {e}") from e
        cls._gateway = MongoGateway(client, settings.mongo_database)

    @classmethod
    async def disconnect(cls) -> None:
        """Close the gateway."""
        if cls._gateway:
            await cls._gateway.close()
            cls._gateway = None

    @classmethod
    def get_gateway(cls) -> PersistenceGateway:
        """Get the active gateway."""
        if not cls._gateway:
            raise RuntimeError("Database not connected. Call connect() first.")
        return cls._gateway


async def init_indexes(gateway: PersistenceGateway) -> None:
    """Initialize indexes used by the service's queries."""
    # Unique constraints
    await gateway.ensure_index(SKILL_CATEGORIES, [("name_key", ASCENDING)], unique=True)

    # Indexes for faster lookups
    indexes = [
        (SKILL_CATEGORIES, [("approved", ASCENDING), ("name", ASCENDING)]),
        (CATEGORY_REQUESTS, [("status", ASCENDING), ("created_at", DESCENDING)]),
        (CATEGORY_REQUESTS, [("user_id", ASCENDING), ("created_at", DESCENDING)]),
        (SKILL_REQUESTS, [("status", ASCENDING), ("created_at", DESCENDING)]),
        (SKILL_REQUESTS, [("user_id", ASCENDING), ("created_at", DESCENDING)]),
        (PORTFOLIOS, [("is_public", ASCENDING), ("updated_at", DESCENDING)]),
    ]

    for collection, fields in indexes:
        await gateway.ensure_index(collection, fields)
