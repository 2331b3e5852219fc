"""
Document reads: lookups, counts, min/max, sums, grouping, pagination and
projections.

Filters, sorts and projections are MongoDB dictionaries passed through to
the driver unchanged. Results are rebuilt into the requested document type
(or projection type when one is given).
"""

from typing import Any

from motor.motor_asyncio import AsyncIOMotorCursor
from pymongo import ASCENDING, DESCENDING

from ..constants import DEFAULT_PAGE_SIZE, ID_FIELD
from ..models.document import to_projection
from ..models.options import OperationOptions
from ..observability.metrics import timed_operation
from .base import DataAccessBase

SortSpec = list[tuple[str, int]]


def get_field_value(document: dict[str, Any] | None, field: str) -> Any:
    """Value at a dotted path of a raw document, ``None`` when missing."""
    value: Any = document
    for part in field.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class MongoDbReader(DataAccessBase):
    """Read operations forwarded to the driver collection."""

    # ------------------------------------------------------------------ lookups

    @timed_operation("reader.get_by_id")
    async def get_by_id(
        self, document_type: type, id: Any, options: OperationOptions | None = None
    ) -> Any:
        """Document with the given id, or None."""
        raw = await self.handle_partitioned(document_type, options).find_one(
            {ID_FIELD: id}, **self.session_kwargs(options)
        )
        return document_type.from_dict(raw)

    @timed_operation("reader.get_one")
    async def get_one(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        sort: SortSpec | None = None,
    ) -> Any:
        """First document matching ``filter``, or None."""
        kwargs = self.session_kwargs(options)
        if sort:
            kwargs["sort"] = sort
        raw = await self.handle_partitioned(document_type, options).find_one(filter or {}, **kwargs)
        return document_type.from_dict(raw)

    def get_cursor(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> AsyncIOMotorCursor:
        """Driver cursor over raw documents matching ``filter``."""
        return self.handle_partitioned(document_type, options).find(
            filter or {}, **self.session_kwargs(options)
        )

    @timed_operation("reader.any")
    async def any(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> bool:
        """True when at least one document matches ``filter``."""
        count = await self.handle_partitioned(document_type, options).count_documents(
            filter or {}, **self.session_kwargs(options)
        )
        return count > 0

    @timed_operation("reader.get_all")
    async def get_all(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Any]:
        """All documents matching ``filter``."""
        cursor = self.handle_partitioned(document_type, options).find(
            filter or {}, **self.session_kwargs(options)
        )
        if sort:
            cursor = cursor.sort(sort)
        if skip > 0:
            cursor = cursor.skip(skip)
        if limit > 0:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return [document_type.from_dict(doc) for doc in docs]

    @timed_operation("reader.count")
    async def count(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> int:
        """Number of documents matching ``filter``."""
        return await self.handle_partitioned(document_type, options).count_documents(
            filter or {}, **self.session_kwargs(options)
        )

    # ---------------------------------------------------------------- min / max

    async def _find_extreme(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        direction: int,
        options: OperationOptions | None,
        projection: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        kwargs = self.session_kwargs(options)
        if projection is not None:
            kwargs["projection"] = projection
        return await self.handle_partitioned(document_type, options).find_one(
            filter or {}, sort=[(field, direction)], **kwargs
        )

    @timed_operation("reader.get_by_max")
    async def get_by_max(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        """Matching document with the greatest value of ``field``."""
        raw = await self._find_extreme(document_type, filter, field, DESCENDING, options)
        return document_type.from_dict(raw)

    @timed_operation("reader.get_by_min")
    async def get_by_min(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        """Matching document with the smallest value of ``field``."""
        raw = await self._find_extreme(document_type, filter, field, ASCENDING, options)
        return document_type.from_dict(raw)

    @timed_operation("reader.get_max_value")
    async def get_max_value(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        """Greatest value of ``field`` among matching documents, or None."""
        raw = await self._find_extreme(
            document_type, filter, field, DESCENDING, options, projection={field: 1}
        )
        return get_field_value(raw, field)

    @timed_operation("reader.get_min_value")
    async def get_min_value(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        """Smallest value of ``field`` among matching documents, or None."""
        raw = await self._find_extreme(
            document_type, filter, field, ASCENDING, options, projection={field: 1}
        )
        return get_field_value(raw, field)

    # -------------------------------------------------------------- aggregation

    @timed_operation("reader.sum_by")
    async def sum_by(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> int | float:
        """Sum of ``field`` over matching documents; 0 when nothing matches."""
        pipeline = [
            {"$match": filter or {}},
            {"$group": {"_id": None, "total": {"$sum": f"${field}"}}},
        ]
        cursor = self.handle_partitioned(document_type, options).aggregate(
            pipeline, **self.session_kwargs(options)
        )
        results = await cursor.to_list(length=None)
        return results[0]["total"] if results else 0

    @timed_operation("reader.group_by")
    async def group_by(
        self,
        document_type: type,
        group_key: str,
        projection: dict[str, Any],
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        projection_type: type | None = None,
    ) -> list[Any]:
        """
        Group matching documents by ``group_key``.

        Args:
            document_type: Document type of the source collection
            group_key: Field to group on; becomes ``_id`` of each group
            projection: Accumulators of the ``$group`` stage,
                e.g. ``{"total": {"$sum": "$amount"}}``
            filter: Optional ``$match`` applied before grouping
            options: Operation options
            projection_type: Optional type each group is converted into

        Example:
            totals = await reader.group_by(
                Order, "customer", {"total": {"$sum": "$amount"}},
                filter={"status": "paid"},
            )
        """
        pipeline: list[dict[str, Any]] = []
        if filter is not None:
            pipeline.append({"$match": filter})
        pipeline.append({"$group": {"_id": f"${group_key}", **projection}})

        cursor = self.handle_partitioned(document_type, options).aggregate(
            pipeline, **self.session_kwargs(options)
        )
        results = await cursor.to_list(length=None)
        return [to_projection(projection_type, doc) for doc in results]

    # --------------------------------------------------------------- pagination

    @timed_operation("reader.get_paginated")
    async def get_paginated(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        skip: int = 0,
        take: int = DEFAULT_PAGE_SIZE,
        options: OperationOptions | None = None,
    ) -> list[Any]:
        """One page of matching documents, in natural order."""
        cursor = (
            self.handle_partitioned(document_type, options)
            .find(filter or {}, **self.session_kwargs(options))
            .skip(skip)
            .limit(take)
        )
        docs = await cursor.to_list(length=None)
        return [document_type.from_dict(doc) for doc in docs]

    @timed_operation("reader.get_sorted_paginated")
    async def get_sorted_paginated(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        sort_field: str | None = None,
        ascending: bool = True,
        sort: SortSpec | None = None,
        skip: int = 0,
        take: int = DEFAULT_PAGE_SIZE,
        options: OperationOptions | None = None,
    ) -> list[Any]:
        """
        One page of matching documents, sorted.

        Either ``sort_field`` (with ``ascending``) or a full ``sort``
        order must be given; ``sort`` wins when both are.
        """
        if sort is None:
            if sort_field is None:
                raise ValueError("get_sorted_paginated requires sort_field or sort")
            sort = [(sort_field, ASCENDING if ascending else DESCENDING)]

        cursor = (
            self.handle_partitioned(document_type, options)
            .find(filter or {}, **self.session_kwargs(options))
            .sort(sort)
            .skip(skip)
            .limit(take)
        )
        docs = await cursor.to_list(length=None)
        return [document_type.from_dict(doc) for doc in docs]

    # -------------------------------------------------------------- projections

    @timed_operation("reader.project_one")
    async def project_one(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        projection: dict[str, Any],
        options: OperationOptions | None = None,
        projection_type: type | None = None,
    ) -> Any:
        """First matching document, projected; None when nothing matches."""
        raw = await self.handle_partitioned(document_type, options).find_one(
            filter or {}, projection=projection, **self.session_kwargs(options)
        )
        return to_projection(projection_type, raw)

    @timed_operation("reader.project_many")
    async def project_many(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        projection: dict[str, Any],
        options: OperationOptions | None = None,
        projection_type: type | None = None,
    ) -> list[Any]:
        """All matching documents, projected."""
        cursor = self.handle_partitioned(document_type, options).find(
            filter or {}, projection=projection, **self.session_kwargs(options)
        )
        docs = await cursor.to_list(length=None)
        return [to_projection(projection_type, doc) for doc in docs]
