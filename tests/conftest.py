"""
pytest configuration and fixtures for the API test suites
In-memory database double so no MongoDB server is needed
"""

import os

# Settings are read at import time; these must be set before the app is imported
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("EXPIRES_IN", "1h")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import copy
from collections import defaultdict
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from app import create_app
from database.connection import get_database, to_object_id


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in query.items())


def _project(document: Dict[str, Any], projection: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    document = copy.deepcopy(document)
    if not projection:
        return document
    included = {key for key, flag in projection.items() if flag}
    if included:
        return {key: value for key, value in document.items() if key in included or key == "_id"}
    return {key: value for key, value in document.items() if key not in projection}


class FakeDatabase:
    """In-memory stand-in for MongoDatabase with the same coroutine interface"""

    def __init__(self):
        self.collections: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.unique_fields = {"users": "email"}
        self.fail_with: Optional[Exception] = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def ping(self) -> None:
        self._check()

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        self._check()
        field = self.unique_fields.get(collection)
        if field and any(doc.get(field) == document.get(field) for doc in self.collections[collection]):
            raise DuplicateKeyError(f"E11000 duplicate key error collection: {collection}")
        stored = copy.deepcopy(document)
        stored["_id"] = ObjectId()
        self.collections[collection].append(stored)
        return str(stored["_id"])

    async def find_one(self, collection, query, projection=None):
        self._check()
        for document in self.collections[collection]:
            if _matches(document, query):
                return _project(document, projection)
        return None

    async def find_many(self, collection, query=None, projection=None):
        self._check()
        return [
            _project(document, projection)
            for document in self.collections[collection]
            if _matches(document, query or {})
        ]

    async def find_by_id(self, collection, document_id, projection=None):
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        return await self.find_one(collection, {"_id": object_id}, projection)

    async def replace_by_id(self, collection, document_id, document) -> int:
        self._check()
        object_id = to_object_id(document_id)
        documents = self.collections[collection]
        for index, existing in enumerate(documents):
            if existing["_id"] == object_id:
                replacement = copy.deepcopy(document)
                replacement["_id"] = object_id
                documents[index] = replacement
                return 1
        return 0

    async def delete_by_id(self, collection, document_id) -> int:
        self._check()
        object_id = to_object_id(document_id)
        documents = self.collections[collection]
        for index, existing in enumerate(documents):
            if existing["_id"] == object_id:
                del documents[index]
                return 1
        return 0


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


def _client_for(app, fake_db):
    app.dependency_overrides[get_database] = lambda: fake_db
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest_asyncio.fixture
async def client(fake_db):
    """HTTP client for the full service (community routes mounted)"""
    async with _client_for(create_app(enable_community_routes=True), fake_db) as http_client:
        yield http_client


@pytest_asyncio.fixture
async def reduced_client(fake_db):
    """HTTP client for the clothing-only variant"""
    async with _client_for(create_app(enable_community_routes=False), fake_db) as http_client:
        yield http_client
