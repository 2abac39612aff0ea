"""
MongoDatabase wrapper tests against mocked motor objects
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from database.connection import MongoDatabase, to_object_id


@pytest.fixture
def collection():
    mock = MagicMock()
    mock.insert_one = AsyncMock()
    mock.find_one = AsyncMock()
    mock.replace_one = AsyncMock()
    mock.delete_one = AsyncMock()
    mock.create_index = AsyncMock()
    return mock


@pytest.fixture
def database(collection):
    """A MongoDatabase whose motor database hands out the mocked collection"""
    db = MongoDatabase("mongodb://localhost:27017", "test_db")
    motor_db = MagicMock()
    motor_db.__getitem__.return_value = collection
    motor_db.command = AsyncMock(return_value={"ok": 1})
    db._client = MagicMock()
    db._db = motor_db
    return db


def test_to_object_id():
    object_id = ObjectId()

    assert to_object_id(str(object_id)) == object_id
    assert to_object_id("nope") is None
    assert to_object_id(None) is None


def test_collection_requires_connection():
    db = MongoDatabase("mongodb://localhost:27017", "test_db")

    assert db.is_connected is False
    with pytest.raises(RuntimeError):
        db.collection("cloths")


@pytest.mark.asyncio
async def test_connect_pings_and_close_releases_client():
    motor_db = MagicMock()
    motor_db.command = AsyncMock(return_value={"ok": 1})
    client = MagicMock()
    client.__getitem__.return_value = motor_db

    with patch("database.connection.AsyncIOMotorClient", return_value=client) as client_cls:
        db = MongoDatabase("mongodb://example:27017", "assignment7")
        await db.connect()
        await db.connect()

    client_cls.assert_called_once_with("mongodb://example:27017")
    client.__getitem__.assert_called_once_with("assignment7")
    motor_db.command.assert_awaited_once_with("ping")
    assert db.is_connected

    await db.close()

    client.close.assert_called_once()
    assert db.is_connected is False


@pytest.mark.asyncio
async def test_close_before_connect_is_a_no_op():
    db = MongoDatabase("mongodb://localhost:27017", "test_db")

    await db.close()

    assert db.is_connected is False


@pytest.mark.asyncio
async def test_insert_returns_hex_id(database, collection):
    object_id = ObjectId()
    collection.insert_one.return_value = SimpleNamespace(inserted_id=object_id)

    assert await database.insert_one("cloths", {"title": "Scarf"}) == str(object_id)
    collection.insert_one.assert_awaited_once_with({"title": "Scarf"})


@pytest.mark.asyncio
async def test_find_many_reads_whole_cursor(database, collection):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[{"title": "Scarf"}])
    collection.find.return_value = cursor

    result = await database.find_many("users", projection={"password": 0})

    assert result == [{"title": "Scarf"}]
    collection.find.assert_called_once_with({}, {"password": 0})
    cursor.to_list.assert_awaited_once_with(length=None)


@pytest.mark.asyncio
async def test_find_by_id_queries_object_id(database, collection):
    object_id = ObjectId()
    collection.find_one.return_value = {"_id": object_id}

    assert await database.find_by_id("cloths", str(object_id)) == {"_id": object_id}
    collection.find_one.assert_awaited_once_with({"_id": object_id}, None)


@pytest.mark.asyncio
async def test_malformed_ids_never_reach_the_driver(database, collection):
    assert await database.find_by_id("cloths", "bad-id") is None
    assert await database.replace_by_id("cloths", "bad-id", {"title": "x"}) == 0
    assert await database.delete_by_id("cloths", "bad-id") == 0

    collection.find_one.assert_not_awaited()
    collection.replace_one.assert_not_awaited()
    collection.delete_one.assert_not_awaited()


@pytest.mark.asyncio
async def test_replace_reports_matched_count(database, collection):
    object_id = ObjectId()
    collection.replace_one.return_value = SimpleNamespace(matched_count=1, modified_count=0)

    assert await database.replace_by_id("cloths", str(object_id), {"title": "Parka"}) == 1
    collection.replace_one.assert_awaited_once_with({"_id": object_id}, {"title": "Parka"})


@pytest.mark.asyncio
async def test_delete_reports_deleted_count(database, collection):
    collection.delete_one.return_value = SimpleNamespace(deleted_count=0)

    assert await database.delete_by_id("cloths", str(ObjectId())) == 0


@pytest.mark.asyncio
async def test_ensure_indexes_creates_unique_email_index(database, collection):
    await database.ensure_indexes()

    collection.create_index.assert_awaited_once_with("email", unique=True)


@pytest.mark.asyncio
async def test_ensure_indexes_tolerates_existing_duplicates(database, collection):
    collection.create_index.side_effect = OperationFailure("E11000 duplicate key error")

    await database.ensure_indexes()
