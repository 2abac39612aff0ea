"""
Generic CRUD service shared by the clothing, testimonial and comment collections
"""

import logging
from typing import Dict, Any

from pymongo.errors import PyMongoError

from database.connection import MongoDatabase
from models.enums import ServiceErrorType
from services.base_service import BaseService, ServiceResult
from utils.helpers import serialize_document, serialize_documents

logger = logging.getLogger(__name__)

class CollectionService(BaseService):
    """Insert, list, get, replace and delete for one free-form collection"""

    def __init__(self, db: MongoDatabase, collection_name: str, label: str):
        super().__init__(db, collection_name)
        self.label = label

    async def create(self, fields: Dict[str, Any]) -> ServiceResult:
        """
        Insert a new record

        Args:
            fields: Field values to store as-is

        Returns:
            ServiceResult whose single row carries the generated ``_id``
        """
        try:
            inserted_id = await self.db.insert_one(self.collection_name, dict(fields))
        except PyMongoError as e:
            return self._database_error("create", e)

        logger.info(f"Created {self.label} {inserted_id}")
        return ServiceResult.ok([{"_id": inserted_id}])

    async def list_all(self) -> ServiceResult:
        """Every record, in storage order"""
        try:
            documents = await self.db.find_many(self.collection_name)
        except PyMongoError as e:
            return self._database_error("list", e)

        return ServiceResult.ok(serialize_documents(documents))

    async def get_by_id(self, document_id: str) -> ServiceResult:
        try:
            document = await self.db.find_by_id(self.collection_name, document_id)
        except PyMongoError as e:
            return self._database_error("get", e)

        if document is None:
            return ServiceResult.fail(ServiceErrorType.RESOURCE_NOT_FOUND, f"{self.label} not found")
        return ServiceResult.ok([serialize_document(document)])

    async def replace_by_id(self, document_id: str, fields: Dict[str, Any]) -> ServiceResult:
        """
        Overwrite a record with exactly the given fields

        Fields missing from ``fields`` are removed from the stored record.
        """
        try:
            matched = await self.db.replace_by_id(self.collection_name, document_id, dict(fields))
        except PyMongoError as e:
            return self._database_error("replace", e)

        if matched == 0:
            return ServiceResult.fail(ServiceErrorType.RESOURCE_NOT_FOUND, f"{self.label} not found")

        logger.info(f"Replaced {self.label} {document_id}")
        return ServiceResult.ok([], count=matched)

    async def delete_by_id(self, document_id: str) -> ServiceResult:
        """Remove a record; ``count`` is the number of records deleted (0 or 1)"""
        try:
            deleted = await self.db.delete_by_id(self.collection_name, document_id)
        except PyMongoError as e:
            return self._database_error("delete", e)

        if deleted:
            logger.info(f"Deleted {self.label} {document_id}")
        return ServiceResult.ok([], count=deleted)
