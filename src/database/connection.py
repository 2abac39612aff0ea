"""
Database connection and collection access
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import OperationFailure

from config.settings import USERS_COLLECTION

logger = logging.getLogger(__name__)


def to_object_id(document_id: str) -> Optional[ObjectId]:
    """Parse a hex id, returning None when it is not a valid ObjectId"""
    # ObjectId(None) would mint a fresh id
    if not isinstance(document_id, str):
        return None
    try:
        return ObjectId(document_id)
    except InvalidId:
        return None


class MongoDatabase:
    """
    Async MongoDB handle shared by every request.

    Opened once in the application lifespan and injected into route
    handlers; holds no application logic beyond id parsing.
    """

    def __init__(self, uri: str, db_name: str):
        self._uri = uri
        self._db_name = db_name
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def collection(self, name: str) -> AsyncIOMotorCollection:
        if self._db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._db[name]

    async def connect(self) -> "MongoDatabase":
        """Open the client and verify the server answers"""
        if self.is_connected:
            return self
        self._client = AsyncIOMotorClient(self._uri)
        self._db = self._client[self._db_name]

        await self.ping()
        logger.info(f"Connected to MongoDB database '{self._db_name}'")
        return self

    async def close(self) -> None:
        if self.is_connected:
            self._client.close()
            self._client = None
            self._db = None
        logger.info("Database connections closed")

    async def ping(self) -> None:
        if self._db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        await self._db.command("ping")

    async def ensure_indexes(self) -> None:
        """Back the registration email check with a unique index"""
        try:
            await self.collection(USERS_COLLECTION).create_index("email", unique=True)
        except OperationFailure as e:
            # Existing duplicate emails prevent the index; registration still checks first
            logger.warning(f"Could not create unique index on {USERS_COLLECTION}.email: {e}")

    # Generic document operations

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document and return its id as a hex string"""
        result = await self.collection(collection).insert_one(document)
        return str(result.inserted_id)

    async def find_one(
        self,
        collection: str,
        query: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        return await self.collection(collection).find_one(query, projection)

    async def find_many(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        cursor = self.collection(collection).find(query or {}, projection)
        return await cursor.to_list(length=None)

    async def find_by_id(
        self,
        collection: str,
        document_id: str,
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        return await self.find_one(collection, {"_id": object_id}, projection)

    async def replace_by_id(self, collection: str, document_id: str, document: Dict[str, Any]) -> int:
        """Replace the whole document; returns the matched count (0 or 1)"""
        object_id = to_object_id(document_id)
        if object_id is None:
            return 0
        result = await self.collection(collection).replace_one({"_id": object_id}, document)
        return result.matched_count

    async def delete_by_id(self, collection: str, document_id: str) -> int:
        """Delete a document; returns the deleted count (0 or 1)"""
        object_id = to_object_id(document_id)
        if object_id is None:
            return 0
        result = await self.collection(collection).delete_one({"_id": object_id})
        return result.deleted_count


def get_database(request: Request) -> MongoDatabase:
    """Return the handle opened by the application lifespan"""
    return request.app.state.database
