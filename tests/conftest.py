"""Shared fixtures: an in-memory persistence layer and seeded records."""

import copy
from datetime import datetime, timezone
from typing import Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from eventpro.database import get_database
from eventpro.repository import Repository
from eventpro.services.dashboard import DashboardService
from eventpro.services.events import EventService
from eventpro.services.inscriptions import InscriptionService
from eventpro.services.users import UserService
from eventpro.utils.auth_utils import get_password_hash

OWNER_PASSWORD = "Owner#2024"


def _lookup(document: dict, path: str):
    value = document
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _matches(document: dict, filters: dict) -> bool:
    for key, expected in filters.items():
        value = _lookup(document, key)
        if isinstance(expected, dict) and "$ne" in expected:
            if value == expected["$ne"]:
                return False
        elif value != expected:
            return False
    return True


class InMemoryRepository(Repository):
    """Dict-backed repository supporting equality and ``$ne`` filters."""

    def __init__(self) -> None:
        self.documents: dict[str, dict] = {}
        self.writes = 0

    def add(self, document: dict) -> dict:
        stored = copy.deepcopy(document)
        stored.setdefault("id", str(ObjectId()))
        self.documents[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def find_by_id(self, document_id: str) -> Optional[dict]:
        document = self.documents.get(document_id)
        return copy.deepcopy(document) if document else None

    async def find_one(self, filters: dict) -> Optional[dict]:
        for document in self.documents.values():
            if _matches(document, filters):
                return copy.deepcopy(document)
        return None

    async def find(self, filters: Optional[dict] = None) -> list[dict]:
        return [copy.deepcopy(d) for d in self.documents.values() if _matches(d, filters or {})]

    async def insert(self, document: dict) -> dict:
        self.writes += 1
        return self.add(document)

    async def update(self, document_id: str, changes: dict) -> Optional[dict]:
        if document_id not in self.documents:
            return None
        self.writes += 1
        self.documents[document_id].update(copy.deepcopy(changes))
        return copy.deepcopy(self.documents[document_id])

    async def increment(self, document_id: str, field: str, amount: int) -> None:
        document = self.documents.get(document_id)
        if document is None:
            return
        *parents, leaf = field.split(".")
        for part in parents:
            document = document.setdefault(part, {})
        document[leaf] = document.get(leaf, 0) + amount

    async def delete(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None


class InMemoryDatabase:
    def __init__(self) -> None:
        self.users = InMemoryRepository()
        self.events = InMemoryRepository()
        self.inscriptions = InMemoryRepository()


def make_user(name: str, cpf: str, email: str, password: str = OWNER_PASSWORD) -> dict:
    return {
        "name": name,
        "lastname": "Silva",
        "password": get_password_hash(password),
        "dateOfBirth": datetime(1990, 5, 17, tzinfo=timezone.utc),
        "cpf": cpf,
        "phone": "+55 11 99999-0000",
        "email": email,
    }


def make_event(owner_id: str, name: str = "Tech Meetup", max_capacity: int = 100) -> dict:
    return {
        "userId": owner_id,
        "name": name,
        "description": "Monthly meetup",
        "categories": ["tech"],
        "date": datetime(2026, 11, 20, tzinfo=timezone.utc),
        "location": {"address": "Rua A, 100", "city": "São Paulo", "state": "SP", "country": "Brasil"},
        "capacity": {"max": max_capacity, "current": 0, "total": 0},
        "schedules": {
            "start": datetime(2026, 11, 20, 19, tzinfo=timezone.utc),
            "end": datetime(2026, 11, 20, 22, tzinfo=timezone.utc),
        },
        "type": "standard",
        "inscriptionPrice": 0,
    }


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def owner(db: InMemoryDatabase) -> dict:
    return db.users.add(make_user("Ana", "111.111.111-11", "ana@example.com"))


@pytest.fixture
def attendee(db: InMemoryDatabase) -> dict:
    return db.users.add(make_user("Bruno", "222.222.222-22", "bruno@example.com"))


@pytest.fixture
def event(db: InMemoryDatabase, owner: dict) -> dict:
    return db.events.add(make_event(owner["id"]))


@pytest.fixture
def inscription_service(db: InMemoryDatabase) -> InscriptionService:
    return InscriptionService(db.inscriptions, db.events, db.users)


@pytest.fixture
def event_service(db: InMemoryDatabase) -> EventService:
    return EventService(db.events, db.users)


@pytest.fixture
def dashboard_service(db: InMemoryDatabase) -> DashboardService:
    return DashboardService(db.events, db.inscriptions, db.users)


@pytest.fixture
def user_service(db: InMemoryDatabase) -> UserService:
    return UserService(db.users)


@pytest.fixture
def client(db: InMemoryDatabase):
    from contextlib import asynccontextmanager

    from eventpro.main import create_app

    @asynccontextmanager
    async def no_database(app):
        yield

    app = create_app(lifespan=no_database)
    app.dependency_overrides[get_database] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
