"""Tests for the persistence gateways."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import DuplicateKeyError, PyMongoError

from portfolio_service.database import (
    SERVER_TIMESTAMP,
    InMemoryGateway,
    MongoGateway,
)
from portfolio_service.errors import DuplicateEntityError, NotFoundError, PersistenceError


@pytest.mark.asyncio
async def test_create_and_get():
    """Test creating and reading a document."""
    gw = InMemoryGateway()

    doc_id = await gw.create("things", {"name": "a", "created_at": gw.server_timestamp()})
    doc = await gw.get("things", doc_id)

    assert doc["id"] == doc_id
    assert doc["name"] == "a"
    assert doc["created_at"] is not SERVER_TIMESTAMP
    assert doc["created_at"].tzinfo is not None


@pytest.mark.asyncio
async def test_get_missing_returns_none():
    """Test reading a missing document."""
    gw = InMemoryGateway()
    assert await gw.get("things", "nope") is None


@pytest.mark.asyncio
async def test_create_duplicate_id():
    """Test that creating a document with a taken id fails."""
    gw = InMemoryGateway()
    await gw.create("things", {"name": "a"}, doc_id="x")

    with pytest.raises(DuplicateEntityError):
        await gw.create("things", {"name": "b"}, doc_id="x")


@pytest.mark.asyncio
async def test_returned_documents_are_copies():
    """Test that mutating a read result does not change the stored document."""
    gw = InMemoryGateway()
    await gw.create("things", {"tags": ["a"]}, doc_id="x")

    doc = await gw.get("things", "x")
    doc["tags"].append("b")

    assert (await gw.get("things", "x"))["tags"] == ["a"]


@pytest.mark.asyncio
async def test_update_merges_and_stamps():
    """Test that updates merge fields and resolve timestamps."""
    gw = InMemoryGateway()
    now = gw.server_timestamp()
    await gw.create("things", {"name": "a", "n": 1, "updated_at": now}, doc_id="x")
    before = (await gw.get("things", "x"))["updated_at"]

    await gw.update("things", "x", {"name": "b", "updated_at": now})
    doc = await gw.get("things", "x")

    assert doc["name"] == "b"
    assert doc["n"] == 1
    assert doc["updated_at"] > before


@pytest.mark.asyncio
async def test_update_missing_raises():
    """Test updating a missing document."""
    gw = InMemoryGateway()
    with pytest.raises(NotFoundError):
        await gw.update("things", "x", {"name": "b"})


@pytest.mark.asyncio
async def test_delete_is_idempotent():
    """Test that deleting a missing document is ignored."""
    gw = InMemoryGateway()
    await gw.create("things", {"name": "a"}, doc_id="x")

    await gw.delete("things", "x")
    await gw.delete("things", "x")

    assert await gw.get("things", "x") is None


@pytest.mark.asyncio
async def test_list_filters_and_orders():
    """Test equality filters and ordering with missing values last."""
    gw = InMemoryGateway()
    await gw.create("things", {"kind": "a", "rank": 2}, doc_id="1")
    await gw.create("things", {"kind": "a", "rank": 1}, doc_id="2")
    await gw.create("things", {"kind": "b", "rank": 3}, doc_id="3")
    await gw.create("things", {"kind": "a"}, doc_id="4")

    asc = await gw.list("things", {"kind": "a"}, order_by="rank")
    desc = await gw.list("things", {"kind": "a"}, order_by="rank", descending=True)

    assert [d["id"] for d in asc] == ["2", "1", "4"]
    assert [d["id"] for d in desc] == ["1", "2", "4"]


@pytest.mark.asyncio
async def test_list_dotted_filter():
    """Test filtering on a nested field."""
    gw = InMemoryGateway()
    await gw.create("things", {"info": {"country": "BD"}}, doc_id="1")
    await gw.create("things", {"info": {"country": "DE"}}, doc_id="2")

    docs = await gw.list("things", {"info.country": "BD"})

    assert [d["id"] for d in docs] == ["1"]


@pytest.mark.asyncio
async def test_concurrent_increments_are_not_lost():
    """Test that N concurrent increments yield exactly N."""
    gw = InMemoryGateway()
    await gw.create("things", {"visit_count": 0}, doc_id="x")

    await asyncio.gather(*(gw.increment_field("things", "x", "visit_count") for _ in range(50)))

    assert (await gw.get("things", "x"))["visit_count"] == 50


@pytest.mark.asyncio
async def test_increment_missing_raises():
    """Test incrementing a field of a missing document."""
    gw = InMemoryGateway()
    with pytest.raises(NotFoundError):
        await gw.increment_field("things", "x", "visit_count")


# ----- MongoGateway -----


def _mongo_gateway(collection):
    client = MagicMock()
    db = MagicMock()
    db.__getitem__.return_value = collection
    client.__getitem__.return_value = db
    return MongoGateway(client, "portfolio")


@pytest.mark.asyncio
async def test_mongo_get_maps_id():
    """Test that Mongo documents expose their _id as id."""
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value={"_id": "x", "name": "a"})
    gw = _mongo_gateway(collection)

    doc = await gw.get("things", "x")

    assert doc == {"id": "x", "name": "a"}
    collection.find_one.assert_awaited_once_with({"_id": "x"})


@pytest.mark.asyncio
async def test_mongo_update_uses_current_date():
    """Test that SERVER_TIMESTAMP becomes $currentDate on update."""
    collection = MagicMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    gw = _mongo_gateway(collection)

    await gw.update("things", "x", {"name": "b", "updated_at": SERVER_TIMESTAMP})

    collection.update_one.assert_awaited_once_with(
        {"_id": "x"},
        {"$set": {"name": "b"}, "$currentDate": {"updated_at": True}},
    )


@pytest.mark.asyncio
async def test_mongo_update_missing_raises():
    """Test updating a missing Mongo document."""
    collection = MagicMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))
    gw = _mongo_gateway(collection)

    with pytest.raises(NotFoundError):
        await gw.update("things", "x", {"name": "b"})


@pytest.mark.asyncio
async def test_mongo_increment_uses_inc():
    """Test that Mongo increments use $inc."""
    collection = MagicMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    gw = _mongo_gateway(collection)

    await gw.increment_field("portfolios", "u1", "visit_count")

    collection.update_one.assert_awaited_once_with({"_id": "u1"}, {"$inc": {"visit_count": 1}})


@pytest.mark.asyncio
async def test_mongo_create_stamps_timestamps():
    """Test that Mongo inserts resolve timestamps to the write time."""
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    gw = _mongo_gateway(collection)

    doc_id = await gw.create("things", {"name": "a", "created_at": SERVER_TIMESTAMP}, doc_id="x")

    assert doc_id == "x"
    inserted = collection.insert_one.await_args.args[0]
    assert inserted["_id"] == "x"
    assert inserted["created_at"] is not SERVER_TIMESTAMP


@pytest.mark.asyncio
async def test_mongo_errors_are_wrapped():
    """Test that driver errors become persistence errors."""
    collection = MagicMock()
    collection.find_one = AsyncMock(side_effect=PyMongoError("down"))
    collection.insert_one = AsyncMock(side_effect=DuplicateKeyError("dup"))
    gw = _mongo_gateway(collection)

    with pytest.raises(PersistenceError):
        await gw.get("things", "x")
    with pytest.raises(DuplicateEntityError):
        await gw.create("things", {"name": "a"}, doc_id="x")
