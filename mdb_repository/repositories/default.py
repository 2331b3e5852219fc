"""
Single-document-type repository.

DefaultMongoRepository binds a BaseMongoRepository to one document type so
callers do not repeat it on every call.
"""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..config import RepositoryConfig
from ..constants import DEFAULT_PAGE_SIZE
from ..context import MongoDbContext
from ..data_access.read import SortSpec
from ..models.document import KeyedDocument
from ..models.index_options import IndexCreationOptions
from ..models.options import OperationOptions
from .base import BaseMongoRepository

TDocument = TypeVar("TDocument", bound=KeyedDocument)


class DefaultMongoRepository(Generic[TDocument]):
    """
    Repository for a single document type.

    Example:
        orders = DefaultMongoRepository.from_connection_string(
            "mongodb://localhost:27017/shop", Order
        )
        await orders.insert_one(Order(customer="ada", total=12.5))
        recent = await orders.find_all({"customer": "ada"}, sort=[("added_at_utc", -1)])
    """

    def __init__(self, mongo_db_context: MongoDbContext, document_type: type[TDocument]):
        self._repository = BaseMongoRepository(mongo_db_context)
        self._document_type = document_type

    @classmethod
    def from_database(
        cls, database: AsyncIOMotorDatabase, document_type: type[TDocument]
    ) -> "DefaultMongoRepository[TDocument]":
        return cls(MongoDbContext(database), document_type)

    @classmethod
    def from_connection_string(
        cls,
        connection_string: str,
        document_type: type[TDocument],
        database_name: str | None = None,
    ) -> "DefaultMongoRepository[TDocument]":
        """
        Repository on the shared client for ``connection_string``.

        The database name is read from the connection string unless given.
        """
        context = MongoDbContext.from_connection_string(connection_string, database_name)
        return cls(context, document_type)

    @classmethod
    def from_config(
        cls, config: RepositoryConfig, document_type: type[TDocument]
    ) -> "DefaultMongoRepository[TDocument]":
        return cls(MongoDbContext.from_config(config), document_type)

    @property
    def document_type(self) -> type[TDocument]:
        return self._document_type

    @property
    def repository(self) -> BaseMongoRepository:
        """Underlying multi-type repository."""
        return self._repository

    @property
    def collection_name(self) -> str:
        return self._repository.context.get_collection_name(self._document_type)

    # ----------------------------------------------------------------- create

    async def insert_one(
        self, document: TDocument, options: OperationOptions | None = None
    ) -> TDocument:
        """Insert a document; returns it with its id assigned."""
        await self._repository.add_one(document, options)
        return document

    async def insert_many(
        self, documents: Iterable[TDocument], options: OperationOptions | None = None
    ) -> list[TDocument]:
        documents = list(documents)
        await self._repository.add_many(documents, options)
        return documents

    # ------------------------------------------------------------------- read

    async def find_by_id(
        self, id: Any, options: OperationOptions | None = None
    ) -> TDocument | None:
        return await self._repository.get_by_id(self._document_type, id, options)

    async def find_one(
        self,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        sort: SortSpec | None = None,
    ) -> TDocument | None:
        return await self._repository.get_one(self._document_type, filter, options, sort=sort)

    async def find_all(
        self,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[TDocument]:
        return await self._repository.get_all(
            self._document_type, filter, options, sort=sort, skip=skip, limit=limit
        )

    async def find_page(
        self,
        filter: dict[str, Any] | None = None,
        sort_field: str | None = None,
        ascending: bool = True,
        skip: int = 0,
        take: int = DEFAULT_PAGE_SIZE,
        options: OperationOptions | None = None,
    ) -> list[TDocument]:
        """One page of documents; sorted when ``sort_field`` is given."""
        if sort_field is None:
            return await self._repository.get_paginated(
                self._document_type, filter, skip, take, options
            )
        return await self._repository.get_sorted_paginated(
            self._document_type,
            filter,
            sort_field=sort_field,
            ascending=ascending,
            skip=skip,
            take=take,
            options=options,
        )

    async def exists(
        self, filter: dict[str, Any] | None = None, options: OperationOptions | None = None
    ) -> bool:
        return await self._repository.any(self._document_type, filter, options)

    async def count(
        self, filter: dict[str, Any] | None = None, options: OperationOptions | None = None
    ) -> int:
        return await self._repository.count(self._document_type, filter, options)

    async def max_value(
        self,
        field: str,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> Any:
        return await self._repository.get_max_value(self._document_type, filter, field, options)

    async def min_value(
        self,
        field: str,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> Any:
        return await self._repository.get_min_value(self._document_type, filter, field, options)

    async def sum(
        self,
        field: str,
        filter: dict[str, Any] | None = None,
        options: OperationOptions | None = None,
    ) -> int | float:
        return await self._repository.sum_by(self._document_type, filter, field, options)

    # ----------------------------------------------------------------- update

    async def replace(self, document: TDocument, options: OperationOptions | None = None) -> bool:
        return await self._repository.replace_one(document, options)

    async def update(
        self,
        document: TDocument,
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> bool:
        return await self._repository.update_one(document, update, options)

    async def update_field(
        self,
        document: TDocument,
        field: str,
        value: Any,
        options: OperationOptions | None = None,
    ) -> bool:
        return await self._repository.update_one_field(document, field, value, options)

    async def update_many(
        self,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> int:
        return await self._repository.update_many(self._document_type, filter, update, options)

    # ----------------------------------------------------------------- delete

    async def delete(self, document: TDocument, options: OperationOptions | None = None) -> int:
        return await self._repository.delete_one(document, options)

    async def delete_many(
        self, documents: Iterable[TDocument], options: OperationOptions | None = None
    ) -> int:
        return await self._repository.delete_many(documents, options)

    async def delete_by_filter(
        self, filter: dict[str, Any], options: OperationOptions | None = None
    ) -> int:
        return await self._repository.delete_many_by_filter(self._document_type, filter, options)

    # ---------------------------------------------------------------- indexes

    async def get_index_names(self, options: OperationOptions | None = None) -> list[str]:
        return await self._repository.get_index_names(self._document_type, options)

    async def create_ascending_index(
        self,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._repository.create_ascending_index(
            self._document_type, field, index_options, options
        )

    async def create_descending_index(
        self,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._repository.create_descending_index(
            self._document_type, field, index_options, options
        )

    async def create_text_index(
        self,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._repository.create_text_index(
            self._document_type, field, index_options, options
        )

    async def create_hashed_index(
        self,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._repository.create_hashed_index(
            self._document_type, field, index_options, options
        )

    async def create_combined_text_index(
        self,
        fields: Iterable[str],
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._repository.create_combined_text_index(
            self._document_type, fields, index_options, options
        )

    async def drop_index(self, index_name: str, options: OperationOptions | None = None) -> None:
        await self._repository.drop_index(self._document_type, index_name, options)

    async def drop_collection(self, options: OperationOptions | None = None) -> None:
        await self._repository.drop_collection(self._document_type, options)
