# eventpro/database.py
from typing import Optional

from fastapi import Request
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from eventpro.config import MONGO_DB_NAME, MONGO_URI
from eventpro.repository import MongoRepository


class Database:
    """Owns the Motor client for the lifetime of the process."""

    def __init__(self, uri: str = MONGO_URI, name: str = MONGO_DB_NAME) -> None:
        self._uri = uri
        self._name = name
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None

        self.users: Optional[MongoRepository] = None
        self.events: Optional[MongoRepository] = None
        self.inscriptions: Optional[MongoRepository] = None

    async def connect(self) -> None:
        self._client = AsyncIOMotorClient(self._uri)
        self._database = self._client[self._name]

        self.users = MongoRepository(self._database.get_collection("users"), timestamps=True)
        self.events = MongoRepository(self._database.get_collection("events"), reference_fields=("userId",))
        self.inscriptions = MongoRepository(
            self._database.get_collection("inscriptions"),
            reference_fields=("userId", "eventId"),
            timestamps=True,
        )

        await self._ensure_indexes()
        logger.info(f"Connected to MongoDB database '{self._name}'")

    async def _ensure_indexes(self) -> None:
        users = self._database.get_collection("users")
        await users.create_index([("email", ASCENDING)], unique=True)
        await users.create_index([("cpf", ASCENDING)], unique=True)

        events = self._database.get_collection("events")
        await events.create_index([("userId", ASCENDING)])

        inscriptions = self._database.get_collection("inscriptions")
        await inscriptions.create_index([("eventId", ASCENDING), ("participants.document", ASCENDING)])

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")


def get_database(request: Request) -> Database:
    return request.app.state.database
