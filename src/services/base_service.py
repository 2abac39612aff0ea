"""
Base service layer for MongoDB-backed operations
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

from database.connection import MongoDatabase
from models.enums import ServiceErrorType

logger = logging.getLogger(__name__)

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[ServiceErrorType] = None

    @classmethod
    def ok(cls, data: Optional[List[Dict[str, Any]]] = None, count: Optional[int] = None) -> "ServiceResult":
        data = data if data is not None else []
        return cls(success=True, data=data, count=len(data) if count is None else count)

    @classmethod
    def fail(cls, error_type: ServiceErrorType, error: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)

class BaseService:
    """Base service bound to one collection of the shared database handle"""

    def __init__(self, db: MongoDatabase, collection_name: str):
        self.db = db
        self.collection_name = collection_name

    def _database_error(self, operation: str, error: Exception) -> ServiceResult:
        logger.error(f"{operation} failed on '{self.collection_name}': {error}")
        return ServiceResult.fail(ServiceErrorType.DATABASE_ERROR, f"Database error: {error}")
