"""
Read-only repository.

Exposes every read operation of MongoDbReader for any document type. The
reader itself is created on first use.
"""

import threading
from collections.abc import Callable
from typing import Any, TypeVar

from motor.motor_asyncio import AsyncIOMotorCursor, AsyncIOMotorDatabase

from ..config import RepositoryConfig
from ..constants import DEFAULT_PAGE_SIZE
from ..context import MongoDbContext
from ..data_access.read import MongoDbReader, SortSpec
from ..models.options import OperationOptions
from ..observability.logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R", bound="ReadOnlyMongoRepository")
H = TypeVar("H")


class ReadOnlyMongoRepository:
    """
    Repository exposing read operations only.

    Example:
        repo = ReadOnlyMongoRepository.from_connection_string(
            "mongodb://localhost:27017", "shop"
        )
        order = await repo.get_by_id(Order, order_id)
        paid = await repo.get_all(Order, {"status": "paid"}, sort=[("total", -1)])
    """

    def __init__(self, mongo_db_context: MongoDbContext):
        self._context = mongo_db_context
        self._init_lock = threading.Lock()
        self._reader: MongoDbReader | None = None

    @classmethod
    def from_database(cls: type[R], database: AsyncIOMotorDatabase, **kwargs: Any) -> R:
        """Repository over an existing motor database handle."""
        return cls(MongoDbContext(database), **kwargs)

    @classmethod
    def from_connection_string(
        cls: type[R],
        connection_string: str,
        database_name: str | None = None,
        **kwargs: Any,
    ) -> R:
        """
        Repository on the shared client for ``connection_string``.

        ``database_name`` defaults to the database named in the URI.
        """
        return cls(MongoDbContext.from_connection_string(connection_string, database_name), **kwargs)

    @classmethod
    def from_config(cls: type[R], config: RepositoryConfig, **kwargs: Any) -> R:
        return cls(MongoDbContext.from_config(config), **kwargs)

    @property
    def context(self) -> MongoDbContext:
        return self._context

    def _get_or_create(self, attr: str, factory: Callable[[MongoDbContext], H]) -> H:
        helper = getattr(self, attr)
        if helper is None:
            with self._init_lock:
                # Double-check: another thread may have created it while we waited
                helper = getattr(self, attr)
                if helper is None:
                    helper = factory(self._context)
                    setattr(self, attr, helper)
                    logger.debug(f"Created {type(helper).__name__} for {type(self).__name__}")
        return helper

    @property
    def reader(self) -> MongoDbReader:
        return self._get_or_create("_reader", MongoDbReader)

    # ------------------------------------------------------------------ reads

    async def get_by_id(
        self, document_type: type, id: Any, options: OperationOptions | None = None
    ) -> Any:
        return await self.reader.get_by_id(document_type, id, options)

    async def get_one(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        sort: SortSpec | None = None,
    ) -> Any:
        return await self.reader.get_one(document_type, filter, options, sort=sort)

    def get_cursor(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> AsyncIOMotorCursor:
        return self.reader.get_cursor(document_type, filter, options)

    async def any(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> bool:
        return await self.reader.any(document_type, filter, options)

    async def get_all(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Any]:
        return await self.reader.get_all(
            document_type, filter, options, sort=sort, skip=skip, limit=limit
        )

    async def count(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> int:
        return await self.reader.count(document_type, filter, options)

    # -------------------------------------------------------------- min / max

    async def get_by_max(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        return await self.reader.get_by_max(document_type, filter, field, options)

    async def get_by_min(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        return await self.reader.get_by_min(document_type, filter, field, options)

    async def get_max_value(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        return await self.reader.get_max_value(document_type, filter, field, options)

    async def get_min_value(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> Any:
        return await self.reader.get_min_value(document_type, filter, field, options)

    # ------------------------------------------------------------ aggregation

    async def sum_by(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        field: str,
        options: OperationOptions | None = None,
    ) -> int | float:
        return await self.reader.sum_by(document_type, filter, field, options)

    async def group_by(
        self,
        document_type: type,
        group_key: str,
        projection: dict[str, Any],
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        projection_type: type | None = None,
    ) -> list[Any]:
        return await self.reader.group_by(
            document_type, group_key, projection, filter, options, projection_type
        )

    # ------------------------------------------------------------- pagination

    async def get_paginated(
        self,
        document_type: type,
        filter: dict[str, Any] | None = None,
        skip: int = 0,
        take: int = DEFAULT_PAGE_SIZE,
        options: OperationOptions | None = None,
    ) -> list[Any]:
        return await self.reader.get_paginated(document_type, filter, skip, take, options)

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
        return await self.reader.get_sorted_paginated(
            document_type,
            filter,
            sort_field=sort_field,
            ascending=ascending,
            sort=sort,
            skip=skip,
            take=take,
            options=options,
        )

    # ------------------------------------------------------------ projections

    async def project_one(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        projection: dict[str, Any],
        options: OperationOptions | None = None,
        projection_type: type | None = None,
    ) -> Any:
        return await self.reader.project_one(
            document_type, filter, projection, options, projection_type
        )

    async def project_many(
        self,
        document_type: type,
        filter: dict[str, Any] | None,
        projection: dict[str, Any],
        options: OperationOptions | None = None,
        projection_type: type | None = None,
    ) -> list[Any]:
        return await self.reader.project_many(
            document_type, filter, projection, options, projection_type
        )
