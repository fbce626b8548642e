# eventpro/repository.py
"""Persistence collaborator.

Services only see the ``Repository`` interface. Documents go in and come
out as plain dicts keyed by their wire names, with the Mongo ``_id``
exposed as a string ``id``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from bson import ObjectId
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from eventpro.exceptions import ConflictError, InternalError


class Repository(ABC):
    """CRUD access to one collection."""

    @abstractmethod
    async def find_by_id(self, document_id: str) -> Optional[dict]:
        """Return the document, or None if absent or the id is malformed."""
        ...

    @abstractmethod
    async def find_one(self, filters: dict) -> Optional[dict]:
        ...

    @abstractmethod
    async def find(self, filters: Optional[dict] = None) -> list[dict]:
        ...

    @abstractmethod
    async def insert(self, document: dict) -> dict:
        """Store a new document and return it with its generated ``id``."""
        ...

    @abstractmethod
    async def update(self, document_id: str, changes: dict) -> Optional[dict]:
        """Set the given fields and return the updated document."""
        ...

    @abstractmethod
    async def increment(self, document_id: str, field: str, amount: int) -> None:
        ...

    @abstractmethod
    async def delete(self, document_id: str) -> bool:
        ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoRepository(Repository):
    """Repository backed by a Motor collection.

    ``reference_fields`` hold ids of documents in other collections; they are
    stored as ObjectId like the rest of the deployment's data and handed back
    to callers as strings.
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        reference_fields: Iterable[str] = (),
        timestamps: bool = False,
    ) -> None:
        self._collection = collection
        self._reference_fields = tuple(reference_fields)
        self._timestamps = timestamps

    @property
    def name(self) -> str:
        return self._collection.name

    def _to_store(self, document: dict) -> dict:
        stored = dict(document)
        stored.pop("id", None)
        for field in self._reference_fields:
            value = stored.get(field)
            if isinstance(value, str) and ObjectId.is_valid(value):
                stored[field] = ObjectId(value)
        return stored

    def _from_store(self, document: Optional[dict]) -> Optional[dict]:
        if document is None:
            return None
        loaded = dict(document)
        loaded["id"] = str(loaded.pop("_id"))
        for field in self._reference_fields:
            if isinstance(loaded.get(field), ObjectId):
                loaded[field] = str(loaded[field])
        return loaded

    def _failure(self, operation: str, exc: PyMongoError) -> Exception:
        if isinstance(exc, DuplicateKeyError):
            key_value = (exc.details or {}).get("keyValue") or {}
            field = next(iter(key_value), "unknown")
            return ConflictError(f"The field '{field}' is already in use.")
        logger.error(f"{operation} on '{self.name}' failed: {exc}")
        return InternalError(f"Database error during {operation}")

    async def find_by_id(self, document_id: str) -> Optional[dict]:
        if not ObjectId.is_valid(document_id):
            return None
        try:
            document = await self._collection.find_one({"_id": ObjectId(document_id)})
        except PyMongoError as exc:
            raise self._failure("find_by_id", exc) from exc
        return self._from_store(document)

    async def find_one(self, filters: dict) -> Optional[dict]:
        try:
            document = await self._collection.find_one(self._to_store(filters))
        except PyMongoError as exc:
            raise self._failure("find_one", exc) from exc
        return self._from_store(document)

    async def find(self, filters: Optional[dict] = None) -> list[dict]:
        try:
            documents = await self._collection.find(self._to_store(filters or {})).to_list(length=None)
        except PyMongoError as exc:
            raise self._failure("find", exc) from exc
        return [self._from_store(document) for document in documents]

    async def insert(self, document: dict) -> dict:
        stored = self._to_store(document)
        if self._timestamps:
            stored["createdAt"] = stored["updatedAt"] = utcnow()
        try:
            result = await self._collection.insert_one(stored)
        except PyMongoError as exc:
            raise self._failure("insert", exc) from exc
        stored["_id"] = result.inserted_id
        return self._from_store(stored)

    async def update(self, document_id: str, changes: dict) -> Optional[dict]:
        if not ObjectId.is_valid(document_id):
            return None
        stored = self._to_store(changes)
        if self._timestamps:
            stored["updatedAt"] = utcnow()
        try:
            document = await self._collection.find_one_and_update(
                {"_id": ObjectId(document_id)},
                {"$set": stored},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise self._failure("update", exc) from exc
        return self._from_store(document)

    async def increment(self, document_id: str, field: str, amount: int) -> None:
        if not ObjectId.is_valid(document_id):
            return
        try:
            await self._collection.update_one({"_id": ObjectId(document_id)}, {"$inc": {field: amount}})
        except PyMongoError as exc:
            raise self._failure("increment", exc) from exc

    async def delete(self, document_id: str) -> bool:
        if not ObjectId.is_valid(document_id):
            return False
        try:
            result = await self._collection.delete_one({"_id": ObjectId(document_id)})
        except PyMongoError as exc:
            raise self._failure("delete", exc) from exc
        return result.deleted_count == 1
