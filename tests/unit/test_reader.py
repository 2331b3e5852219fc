"""
Unit tests for MongoDbReader.

Tests that each read forwards the right filter, sort, paging and projection
arguments to the driver and converts the results.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import CustomerTotal, Order, make_cursor
from pymongo import ASCENDING, DESCENDING

from mdb_repository.data_access.read import MongoDbReader, get_field_value
from mdb_repository.models.options import OperationOptions


@pytest.fixture
def reader(mongo_db_context) -> MongoDbReader:
    return MongoDbReader(mongo_db_context)


@pytest.fixture
def orders(collection_for) -> MagicMock:
    return collection_for("orders")


class TestGetFieldValue:
    def test_dotted_path(self):
        assert get_field_value({"nested": {"some_amount": 3}}, "nested.some_amount") == 3

    def test_missing_path(self):
        assert get_field_value({"nested": None}, "nested.some_amount") is None
        assert get_field_value(None, "total") is None


class TestLookups:
    """Test single-document and existence reads."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, reader, orders, sample_order_document):
        orders.find_one = AsyncMock(return_value=sample_order_document)
        order_id = sample_order_document["_id"]

        order = await reader.get_by_id(Order, order_id)

        orders.find_one.assert_awaited_once_with({"_id": order_id})
        assert isinstance(order, Order)
        assert order.id == order_id

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, reader, orders):
        assert await reader.get_by_id(Order, uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_by_id_partitioned_with_session(self, reader, collection_for):
        session = MagicMock()
        options = OperationOptions(partition_key="eu", session=session)

        await reader.get_by_id(Order, 1, options)

        collection_for("eu-orders").find_one.assert_awaited_once_with({"_id": 1}, session=session)

    @pytest.mark.asyncio
    async def test_get_one_with_sort(self, reader, orders):
        await reader.get_one(Order, {"customer": "ada"}, sort=[("total", DESCENDING)])

        orders.find_one.assert_awaited_once_with(
            {"customer": "ada"}, sort=[("total", DESCENDING)]
        )

    @pytest.mark.asyncio
    async def test_get_one_without_filter(self, reader, orders):
        await reader.get_one(Order)
        orders.find_one.assert_awaited_once_with({})

    def test_get_cursor(self, reader, orders):
        cursor = reader.get_cursor(Order, {"total": {"$gt": 10}})

        orders.find.assert_called_once_with({"total": {"$gt": 10}})
        assert cursor is orders.find.return_value

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count, expected", [(0, False), (3, True)])
    async def test_any(self, reader, orders, count, expected):
        orders.count_documents = AsyncMock(return_value=count)

        assert await reader.any(Order, {"customer": "ada"}) is expected
        orders.count_documents.assert_awaited_once_with({"customer": "ada"})

    @pytest.mark.asyncio
    async def test_count(self, reader, orders):
        orders.count_documents = AsyncMock(return_value=7)

        assert await reader.count(Order) == 7
        orders.count_documents.assert_awaited_once_with({})


class TestGetAll:
    @pytest.mark.asyncio
    async def test_converts_documents(self, reader, orders, sample_order_document):
        orders.find = MagicMock(return_value=make_cursor([sample_order_document]))

        result = await reader.get_all(Order, {"customer": "ada"})

        assert len(result) == 1
        assert result[0].customer == "ada"
        cursor = orders.find.return_value
        cursor.sort.assert_not_called()
        cursor.skip.assert_not_called()
        cursor.limit.assert_not_called()

    @pytest.mark.asyncio
    async def test_sort_skip_limit(self, reader, orders):
        await reader.get_all(Order, {}, sort=[("total", ASCENDING)], skip=5, limit=10)

        cursor = orders.find.return_value
        cursor.sort.assert_called_once_with([("total", ASCENDING)])
        cursor.skip.assert_called_once_with(5)
        cursor.limit.assert_called_once_with(10)
        cursor.to_list.assert_awaited_once_with(length=None)


class TestMinMax:
    """Test min/max queries (sort on the field, first result)."""

    @pytest.mark.asyncio
    async def test_get_by_max(self, reader, orders, sample_order_document):
        orders.find_one = AsyncMock(return_value=sample_order_document)

        order = await reader.get_by_max(Order, {"customer": "ada"}, "total")

        orders.find_one.assert_awaited_once_with(
            {"customer": "ada"}, sort=[("total", DESCENDING)]
        )
        assert order.total == 12.5

    @pytest.mark.asyncio
    async def test_get_by_min(self, reader, orders):
        await reader.get_by_min(Order, None, "added_at_utc")

        orders.find_one.assert_awaited_once_with({}, sort=[("added_at_utc", ASCENDING)])

    @pytest.mark.asyncio
    async def test_get_max_value_nested_field(self, reader, orders):
        orders.find_one = AsyncMock(return_value={"_id": 1, "nested": {"some_amount": 9.5}})

        value = await reader.get_max_value(Order, {}, "nested.some_amount")

        orders.find_one.assert_awaited_once_with(
            {},
            sort=[("nested.some_amount", DESCENDING)],
            projection={"nested.some_amount": 1},
        )
        assert value == 9.5

    @pytest.mark.asyncio
    async def test_get_min_value_empty_collection(self, reader, orders):
        assert await reader.get_min_value(Order, {}, "total") is None


class TestAggregation:
    """Test sum and group pipelines."""

    @pytest.mark.asyncio
    async def test_sum_by(self, reader, orders):
        orders.aggregate = MagicMock(return_value=make_cursor([{"_id": None, "total": 42.5}]))

        total = await reader.sum_by(Order, {"customer": "ada"}, "total")

        assert total == 42.5
        (pipeline,), _ = orders.aggregate.call_args
        assert pipeline == [
            {"$match": {"customer": "ada"}},
            {"$group": {"_id": None, "total": {"$sum": "$total"}}},
        ]

    @pytest.mark.asyncio
    async def test_sum_by_no_match(self, reader, orders):
        assert await reader.sum_by(Order, {"customer": "nobody"}, "total") == 0

    @pytest.mark.asyncio
    async def test_group_by_into_projection_type(self, reader, orders):
        orders.aggregate = MagicMock(
            return_value=make_cursor([{"_id": "ada", "total": 30.0}, {"_id": "bob", "total": 5.0}])
        )

        result = await reader.group_by(
            Order,
            "customer",
            {"total": {"$sum": "$total"}},
            filter={"total": {"$gt": 1}},
            projection_type=CustomerTotal,
        )

        (pipeline,), _ = orders.aggregate.call_args
        assert pipeline == [
            {"$match": {"total": {"$gt": 1}}},
            {"$group": {"_id": "$customer", "total": {"$sum": "$total"}}},
        ]
        assert result == [CustomerTotal(id="ada", total=30.0), CustomerTotal(id="bob", total=5.0)]

    @pytest.mark.asyncio
    async def test_group_by_without_filter_returns_raw(self, reader, orders):
        orders.aggregate = MagicMock(return_value=make_cursor([{"_id": "ada", "count": 2}]))

        result = await reader.group_by(Order, "customer", {"count": {"$sum": 1}})

        (pipeline,), _ = orders.aggregate.call_args
        assert pipeline == [{"$group": {"_id": "$customer", "count": {"$sum": 1}}}]
        assert result == [{"_id": "ada", "count": 2}]


class TestPagination:
    @pytest.mark.asyncio
    async def test_get_paginated(self, reader, orders):
        await reader.get_paginated(Order, {"customer": "ada"}, skip=10, take=5)

        cursor = orders.find.return_value
        cursor.sort.assert_not_called()
        cursor.skip.assert_called_once_with(10)
        cursor.limit.assert_called_once_with(5)

    @pytest.mark.asyncio
    async def test_sorted_paginated_defaults(self, reader, orders):
        await reader.get_sorted_paginated(Order, {}, sort_field="total", ascending=False)

        cursor = orders.find.return_value
        cursor.sort.assert_called_once_with([("total", DESCENDING)])
        cursor.skip.assert_called_once_with(0)
        cursor.limit.assert_called_once_with(50)

    @pytest.mark.asyncio
    async def test_sorted_paginated_with_explicit_sort(self, reader, orders):
        sort = [("customer", ASCENDING), ("total", DESCENDING)]

        await reader.get_sorted_paginated(Order, {}, sort=sort, skip=20, take=10)

        orders.find.return_value.sort.assert_called_once_with(sort)

    @pytest.mark.asyncio
    async def test_sorted_paginated_requires_sort(self, reader):
        with pytest.raises(ValueError):
            await reader.get_sorted_paginated(Order, {})


class TestProjections:
    @pytest.mark.asyncio
    async def test_project_one(self, reader, orders):
        orders.find_one = AsyncMock(return_value={"_id": "x", "total": 3.0})

        result = await reader.project_one(
            Order, {"customer": "ada"}, {"total": 1}, projection_type=CustomerTotal
        )

        orders.find_one.assert_awaited_once_with({"customer": "ada"}, projection={"total": 1})
        assert result == CustomerTotal(id="x", total=3.0)

    @pytest.mark.asyncio
    async def test_project_one_not_found(self, reader, orders):
        assert await reader.project_one(Order, {}, {"total": 1}, projection_type=CustomerTotal) is None

    @pytest.mark.asyncio
    async def test_project_many(self, reader, orders):
        orders.find = MagicMock(
            return_value=make_cursor([{"customer": "ada"}, {"customer": "bob"}])
        )

        result = await reader.project_many(Order, {}, {"customer": 1, "_id": 0})

        orders.find.assert_called_once_with({}, projection={"customer": 1, "_id": 0})
        assert result == [{"customer": "ada"}, {"customer": "bob"}]
