"""
Read/write repository.

BaseMongoRepository adds create, update, delete and index operations on top
of ReadOnlyMongoRepository. Each data-access helper is created on first use,
under the repository's lock.
"""

from collections.abc import Iterable
from typing import Any

from pymongo import ReturnDocument

from ..context import MongoDbContext
from ..data_access.create import MongoDbCreator
from ..data_access.delete import MongoDbEraser
from ..data_access.index import MongoDbIndexHandler
from ..data_access.update import MongoDbUpdater
from ..models.index_options import IndexCreationOptions
from ..models.options import OperationOptions, resolve_options
from .read_only import ReadOnlyMongoRepository


class BaseMongoRepository(ReadOnlyMongoRepository):
    """
    Repository for any number of document types.

    Example:
        repo = BaseMongoRepository.from_connection_string("mongodb://localhost:27017/shop")

        order = Order(customer="ada", total=12.5)
        await repo.add_one(order)
        await repo.update_one_field(order, "total", 15.0)

        # Partitioned: stored in the "2024-orders" collection
        await repo.add_one(order, OperationOptions(partition_key="2024"))
    """

    def __init__(self, mongo_db_context: MongoDbContext):
        super().__init__(mongo_db_context)
        self._creator: MongoDbCreator | None = None
        self._updater: MongoDbUpdater | None = None
        self._eraser: MongoDbEraser | None = None
        self._index_handler: MongoDbIndexHandler | None = None

    @property
    def creator(self) -> MongoDbCreator:
        return self._get_or_create("_creator", MongoDbCreator)

    @property
    def updater(self) -> MongoDbUpdater:
        return self._get_or_create("_updater", MongoDbUpdater)

    @property
    def eraser(self) -> MongoDbEraser:
        return self._get_or_create("_eraser", MongoDbEraser)

    @property
    def index_handler(self) -> MongoDbIndexHandler:
        return self._get_or_create("_index_handler", MongoDbIndexHandler)

    # ----------------------------------------------------------------- create

    async def add_one(self, document: Any, options: OperationOptions | None = None) -> None:
        await self.creator.add_one(document, options)

    async def add_many(
        self, documents: Iterable[Any], options: OperationOptions | None = None
    ) -> None:
        await self.creator.add_many(documents, options)

    # ----------------------------------------------------------------- update

    async def replace_one(self, document: Any, options: OperationOptions | None = None) -> bool:
        return await self.updater.replace_one(document, options)

    async def update_one(
        self,
        document: Any,
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> bool:
        return await self.updater.update_one(document, update, options)

    async def update_one_field(
        self,
        document: Any,
        field: str,
        value: Any,
        options: OperationOptions | None = None,
    ) -> bool:
        return await self.updater.update_one_field(document, field, value, options)

    async def update_one_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> bool:
        return await self.updater.update_one_by_filter(document_type, filter, update, options)

    async def update_field_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        field: str,
        value: Any,
        options: OperationOptions | None = None,
    ) -> bool:
        return await self.updater.update_field_by_filter(
            document_type, filter, field, value, options
        )

    async def update_many(
        self,
        document_type: type,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> int:
        return await self.updater.update_many(document_type, filter, update, options)

    async def update_many_field(
        self,
        document_type: type,
        filter: dict[str, Any],
        field: str,
        value: Any,
        options: OperationOptions | None = None,
    ) -> int:
        return await self.updater.update_many_field(document_type, filter, field, value, options)

    async def get_and_update_one(
        self,
        document_type: type,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: OperationOptions | None = None,
        return_document: ReturnDocument = ReturnDocument.AFTER,
    ) -> Any:
        return await self.updater.get_and_update_one(
            document_type, filter, update, options, return_document
        )

    # ----------------------------------------------------------------- delete

    async def delete_one(self, document: Any, options: OperationOptions | None = None) -> int:
        return await self.eraser.delete_one(document, options)

    async def delete_one_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> int:
        return await self.eraser.delete_one_by_filter(document_type, filter, options)

    async def delete_many(
        self, documents: Iterable[Any], options: OperationOptions | None = None
    ) -> int:
        return await self.eraser.delete_many(documents, options)

    async def delete_many_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> int:
        return await self.eraser.delete_many_by_filter(document_type, filter, options)

    # ---------------------------------------------------------------- indexes

    async def get_index_names(
        self, document_type: type, options: OperationOptions | None = None
    ) -> list[str]:
        return await self.index_handler.get_index_names(document_type, options)

    async def create_text_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self.index_handler.create_text_index(
            document_type, field, index_options, options
        )

    async def create_ascending_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self.index_handler.create_ascending_index(
            document_type, field, index_options, options
        )

    async def create_descending_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self.index_handler.create_descending_index(
            document_type, field, index_options, options
        )

    async def create_hashed_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self.index_handler.create_hashed_index(
            document_type, field, index_options, options
        )

    async def create_combined_text_index(
        self,
        document_type: type,
        fields: Iterable[str],
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self.index_handler.create_combined_text_index(
            document_type, fields, index_options, options
        )

    async def drop_index(
        self,
        document_type: type,
        index_name: str,
        options: OperationOptions | None = None,
    ) -> None:
        await self.index_handler.drop_index(document_type, index_name, options)

    # ------------------------------------------------------------ collections

    async def drop_collection(
        self, document_type: type, options: OperationOptions | None = None
    ) -> None:
        """Drop the document type's collection (the partitioned one when a key is given)."""
        options = resolve_options(options)
        await self._context.drop_collection(
            document_type, options.partition_key, session=options.session
        )
