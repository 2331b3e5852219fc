"""
Index management.

Thin wrappers around ``create_index`` / ``drop_index`` for the single-field
index kinds the repositories expose, plus combined text indexes.
"""

from collections.abc import Iterable
from typing import Any

from pymongo import ASCENDING, DESCENDING, HASHED, TEXT

from ..models.index_options import IndexCreationOptions
from ..models.options import OperationOptions
from ..observability.logging import get_logger
from ..observability.metrics import timed_operation
from .base import DataAccessBase

logger = get_logger(__name__)

IndexKeys = list[tuple[str, Any]]


class MongoDbIndexHandler(DataAccessBase):
    """Creates, lists and drops indexes on document collections."""

    @timed_operation("index.get_index_names")
    async def get_index_names(
        self, document_type: type, options: OperationOptions | None = None
    ) -> list[str]:
        """Names of all indexes on the document type's collection."""
        cursor = self.handle_partitioned(document_type, options).list_indexes(
            **self.session_kwargs(options)
        )
        indexes = await cursor.to_list(length=None)
        return [index["name"] for index in indexes]

    async def _create_index(
        self,
        document_type: type,
        keys: IndexKeys,
        index_options: IndexCreationOptions | None,
        options: OperationOptions | None,
    ) -> str:
        collection = self.handle_partitioned(document_type, options)
        kwargs = self.map_index_options(index_options)
        created_name = await collection.create_index(
            keys, **kwargs, **self.session_kwargs(options)
        )
        logger.debug(f"Index '{created_name}' ensured on '{collection.name}' (keys={keys})")
        return created_name

    @timed_operation("index.create_text_index")
    async def create_text_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._create_index(document_type, [(field, TEXT)], index_options, options)

    @timed_operation("index.create_ascending_index")
    async def create_ascending_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._create_index(
            document_type, [(field, ASCENDING)], index_options, options
        )

    @timed_operation("index.create_descending_index")
    async def create_descending_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._create_index(
            document_type, [(field, DESCENDING)], index_options, options
        )

    @timed_operation("index.create_hashed_index")
    async def create_hashed_index(
        self,
        document_type: type,
        field: str,
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        return await self._create_index(document_type, [(field, HASHED)], index_options, options)

    @timed_operation("index.create_combined_text_index")
    async def create_combined_text_index(
        self,
        document_type: type,
        fields: Iterable[str],
        index_options: IndexCreationOptions | None = None,
        options: OperationOptions | None = None,
    ) -> str:
        """
        Create one text index spanning several fields.

        Raises:
            ValueError: If ``fields`` is empty
        """
        keys = [(field, TEXT) for field in fields]
        if not keys:
            raise ValueError("create_combined_text_index requires at least one field")
        return await self._create_index(document_type, keys, index_options, options)

    @timed_operation("index.drop_index")
    async def drop_index(
        self,
        document_type: type,
        index_name: str,
        options: OperationOptions | None = None,
    ) -> None:
        collection = self.handle_partitioned(document_type, options)
        logger.info(f"Dropping index '{index_name}' on '{collection.name}'")
        await collection.drop_index(index_name, **self.session_kwargs(options))
