"""
Unit tests for MongoDbUpdater.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import Order, PartitionedOrder
from pymongo import ReturnDocument

from mdb_repository.data_access.update import MongoDbUpdater
from mdb_repository.models.options import OperationOptions


@pytest.fixture
def updater(mongo_db_context) -> MongoDbUpdater:
    return MongoDbUpdater(mongo_db_context)


@pytest.fixture
def orders(collection_for) -> MagicMock:
    return collection_for("orders")


class TestDocumentUpdates:
    """Test updates addressed by document id."""

    @pytest.mark.asyncio
    async def test_replace_one(self, updater, orders, sample_order):
        assert await updater.replace_one(sample_order) is True

        orders.replace_one.assert_awaited_once_with(
            {"_id": sample_order.id}, sample_order.to_dict()
        )

    @pytest.mark.asyncio
    async def test_replace_one_nothing_modified(self, updater, orders, sample_order):
        orders.replace_one = AsyncMock(return_value=MagicMock(modified_count=0))
        assert await updater.replace_one(sample_order) is False

    @pytest.mark.asyncio
    async def test_replace_partitioned_document(self, updater, collection_for):
        order = PartitionedOrder(partition_key="eu")

        await updater.replace_one(order)

        collection_for("eu-partitionedOrders").replace_one.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_one(self, updater, orders, sample_order):
        update = {"$inc": {"version": 1}}

        assert await updater.update_one(sample_order, update) is True
        orders.update_one.assert_awaited_once_with({"_id": sample_order.id}, update)

    @pytest.mark.asyncio
    async def test_update_one_field(self, updater, orders, sample_order):
        await updater.update_one_field(sample_order, "total", 20.0)

        orders.update_one.assert_awaited_once_with(
            {"_id": sample_order.id}, {"$set": {"total": 20.0}}
        )

    @pytest.mark.asyncio
    async def test_session_forwarded(self, updater, orders, sample_order):
        session = MagicMock()

        await updater.update_one_field(sample_order, "total", 1.0, OperationOptions(session=session))

        _, kwargs = orders.update_one.call_args
        assert kwargs == {"session": session}


class TestFilterUpdates:
    """Test updates addressed by filter."""

    @pytest.mark.asyncio
    async def test_update_one_by_filter_partitioned(self, updater, collection_for):
        options = OperationOptions(partition_key="eu")

        result = await updater.update_one_by_filter(
            Order, {"customer": "ada"}, {"$set": {"total": 1}}, options
        )

        assert result is True
        collection_for("eu-orders").update_one.assert_awaited_once_with(
            {"customer": "ada"}, {"$set": {"total": 1}}
        )

    @pytest.mark.asyncio
    async def test_update_field_by_filter(self, updater, orders):
        orders.update_one = AsyncMock(return_value=MagicMock(modified_count=0))

        result = await updater.update_field_by_filter(Order, {"customer": "x"}, "total", 3)

        assert result is False
        orders.update_one.assert_awaited_once_with({"customer": "x"}, {"$set": {"total": 3}})

    @pytest.mark.asyncio
    async def test_update_many_returns_modified_count(self, updater, orders):
        count = await updater.update_many(Order, {}, {"$inc": {"version": 1}})

        assert count == 2
        orders.update_many.assert_awaited_once_with({}, {"$inc": {"version": 1}})

    @pytest.mark.asyncio
    async def test_update_many_field(self, updater, orders):
        await updater.update_many_field(Order, {"customer": "ada"}, "nested.some_amount", 0)

        orders.update_many.assert_awaited_once_with(
            {"customer": "ada"}, {"$set": {"nested.some_amount": 0}}
        )


class TestGetAndUpdateOne:
    @pytest.mark.asyncio
    async def test_returns_updated_document(self, updater, orders, sample_order_document):
        orders.find_one_and_update = AsyncMock(return_value=sample_order_document)

        order = await updater.get_and_update_one(
            Order, {"customer": "ada"}, {"$inc": {"version": 1}}
        )

        orders.find_one_and_update.assert_awaited_once_with(
            {"customer": "ada"}, {"$inc": {"version": 1}}, return_document=ReturnDocument.AFTER
        )
        assert isinstance(order, Order)

    @pytest.mark.asyncio
    async def test_no_match(self, updater, orders):
        result = await updater.get_and_update_one(
            Order, {}, {"$set": {"total": 0}}, return_document=ReturnDocument.BEFORE
        )

        assert result is None
        _, kwargs = orders.find_one_and_update.call_args
        assert kwargs["return_document"] == ReturnDocument.BEFORE
