"""
Pytest configuration and shared fixtures for MDB_REPOSITORY tests.

This module provides:
- Sample document types
- Mock motor database / collection fixtures
- Repository and data-access helper fixtures
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson.codec_options import CodecOptions
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from mdb_repository.context import MongoDbContext
from mdb_repository.models.document import (Document, KeyedDocument,
                                            PartitionedDocument,
                                            collection_name)
from mdb_repository.observability.metrics import get_metrics_collector

# ============================================================================
# SAMPLE DOCUMENTS
# ============================================================================


@dataclass
class Child:
    type: str = ""
    value: str = ""


@dataclass
class Nested:
    some_amount: float = 0.0
    some_date: Any = None


@dataclass(kw_only=True)
class Order(Document):
    customer: str = ""
    total: float = 0.0
    nested: Nested = field(default_factory=Nested)
    children: List[Child] = field(default_factory=list)


@dataclass(kw_only=True)
class PartitionedOrder(PartitionedDocument):
    customer: str = ""
    total: float = 0.0


@collection_name("invoices")
@dataclass(kw_only=True)
class Invoice(KeyedDocument[int]):
    number: str = ""


@dataclass(kw_only=True)
class Tag(KeyedDocument[str]):
    label: str = ""


@dataclass
class CustomerTotal:
    id: str = ""
    total: float = 0.0


# ============================================================================
# MOCK MONGODB FIXTURES
# ============================================================================


def make_cursor(documents: List[Dict[str, Any]] | None = None) -> MagicMock:
    """Create a mock cursor whose sort/skip/limit chain back to itself."""
    cursor = MagicMock()
    cursor.sort = MagicMock(return_value=cursor)
    cursor.skip = MagicMock(return_value=cursor)
    cursor.limit = MagicMock(return_value=cursor)
    cursor.to_list = AsyncMock(return_value=list(documents or []))
    return cursor


def make_collection(name: str) -> MagicMock:
    """Create a mock motor collection."""
    collection = MagicMock(spec=AsyncIOMotorCollection)
    collection.name = name
    collection.find = MagicMock(return_value=make_cursor())
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id="test_id"))
    collection.insert_many = AsyncMock(return_value=MagicMock(inserted_ids=["id1", "id2"]))
    collection.replace_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.update_many = AsyncMock(return_value=MagicMock(modified_count=2))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=2))
    collection.count_documents = AsyncMock(return_value=0)
    collection.aggregate = MagicMock(return_value=make_cursor())
    collection.list_indexes = MagicMock(return_value=make_cursor())
    collection.create_index = AsyncMock(return_value="test_index")
    collection.drop_index = AsyncMock()
    return collection


@pytest.fixture
def mock_mongo_client() -> MagicMock:
    """Create a mock MongoDB client."""
    client = MagicMock(spec=AsyncIOMotorClient)
    client.admin = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    return client


@pytest.fixture
def mock_mongo_database(mock_mongo_client: MagicMock) -> MagicMock:
    """
    Create a mock MongoDB database.

    ``get_collection`` returns one mock collection per name, so tests can
    fetch the collection an operation used with ``collections[name]``.
    """
    db = MagicMock(spec=AsyncIOMotorDatabase)
    db.client = mock_mongo_client
    db.name = "test_db"
    db.codec_options = CodecOptions()
    db.drop_collection = AsyncMock()

    collections: Dict[str, MagicMock] = {}

    def get_collection(name: str, codec_options: Any = None):
        if name not in collections:
            collections[name] = make_collection(name)
        return collections[name]

    db.get_collection = MagicMock(side_effect=get_collection)
    db.collections = collections
    return db


@pytest.fixture
def mongo_db_context(mock_mongo_database: MagicMock) -> MongoDbContext:
    """Create a MongoDbContext over the mocked database."""
    return MongoDbContext(mock_mongo_database)


@pytest.fixture
def collection_for(mock_mongo_database: MagicMock):
    """Return the mock collection with the given name, creating it if needed."""

    def _collection_for(name: str) -> MagicMock:
        collections = mock_mongo_database.collections
        if name not in collections:
            collections[name] = make_collection(name)
        return collections[name]

    return _collection_for


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with an empty global metrics collector."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()


# ============================================================================
# TEST DATA FACTORIES
# ============================================================================


@pytest.fixture
def sample_order() -> Order:
    """Provide an order with nested values."""
    return Order(
        customer="ada",
        total=12.5,
        nested=Nested(some_amount=3.5),
        children=[Child(type="gift", value="card")],
    )


@pytest.fixture
def sample_order_document() -> Dict[str, Any]:
    """Provide a raw order as stored in MongoDB."""
    return {
        "_id": uuid.UUID("12345678-1234-5678-1234-567812345678"),
        "customer": "ada",
        "total": 12.5,
        "version": 2,
        "nested": {"some_amount": 3.5, "some_date": None},
        "children": [{"type": "gift", "value": "card"}],
        "unknown_field": "ignored",
    }
