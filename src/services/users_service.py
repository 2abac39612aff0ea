"""
Users service - registration, login and read-only user projections
"""

import asyncio
import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from config.settings import USERS_COLLECTION
from database.connection import MongoDatabase
from models.enums import ServiceErrorType
from services.base_service import BaseService, ServiceResult
from services.token_service import AccessTokenService, get_token_service
from utils.auth import hash_password, verify_password
from utils.helpers import serialize_document, serialize_documents

logger = logging.getLogger(__name__)

# Stored hashes never leave the service
PUBLIC_USER_PROJECTION = {"password": 0}

INVALID_CREDENTIALS = "Invalid email or password"

class UsersService(BaseService):
    """Credential store backed by the users collection"""

    def __init__(self, db: MongoDatabase, token_service: Optional[AccessTokenService] = None):
        super().__init__(db, USERS_COLLECTION)
        self.token_service = token_service or get_token_service()

    async def register(self, name: Optional[str], email: str, password: str) -> ServiceResult:
        """
        Register a new user

        Args:
            name: Display name, stored as given
            email: Login email; must not already be registered
            password: Plaintext password, stored only as a bcrypt hash

        Returns:
            ServiceResult with the new user's ``_id``, or CONFLICT for a known email
        """
        try:
            existing = await self.db.find_one(self.collection_name, {"email": email}, {"_id": 1})
            if existing:
                logger.warning("Registration rejected: email already registered")
                return ServiceResult.fail(ServiceErrorType.CONFLICT, "User already exists")

            password_hash = await asyncio.to_thread(hash_password, password)
            inserted_id = await self.db.insert_one(
                self.collection_name,
                {"name": name, "email": email, "password": password_hash}
            )
        except DuplicateKeyError:
            # Lost a race with a concurrent registration for the same email
            logger.warning("Registration rejected by unique email index")
            return ServiceResult.fail(ServiceErrorType.CONFLICT, "User already exists")
        except PyMongoError as e:
            return self._database_error("register", e)

        logger.info(f"Registered user {inserted_id}")
        return ServiceResult.ok([{"_id": inserted_id}])

    async def login(self, email: str, password: str) -> ServiceResult:
        """
        Check credentials and issue an access token

        Unknown email and wrong password fail with the same UNAUTHORIZED result.
        """
        try:
            user = await self.db.find_one(self.collection_name, {"email": email})
        except PyMongoError as e:
            return self._database_error("login", e)

        if user is None:
            logger.warning("Login failed: unknown email")
            return ServiceResult.fail(ServiceErrorType.UNAUTHORIZED, INVALID_CREDENTIALS)

        password_ok = await asyncio.to_thread(verify_password, password, user.get("password"))
        if not password_ok:
            logger.warning(f"Login failed: wrong password for user {user['_id']}")
            return ServiceResult.fail(ServiceErrorType.UNAUTHORIZED, INVALID_CREDENTIALS)

        token = self.token_service.generate_access_token(user["email"])
        return ServiceResult.ok([{"token": token}])

    async def list_users(self) -> ServiceResult:
        try:
            users = await self.db.find_many(self.collection_name, projection=PUBLIC_USER_PROJECTION)
        except PyMongoError as e:
            return self._database_error("list users", e)

        return ServiceResult.ok(serialize_documents(users))

    async def get_user(self, user_id: str) -> ServiceResult:
        try:
            user = await self.db.find_by_id(self.collection_name, user_id, PUBLIC_USER_PROJECTION)
        except PyMongoError as e:
            return self._database_error("get user", e)

        if user is None:
            return ServiceResult.fail(ServiceErrorType.RESOURCE_NOT_FOUND, "User not found")
        return ServiceResult.ok([serialize_document(user)])
