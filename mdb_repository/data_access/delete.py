"""
Document deletion.
"""

from collections.abc import Iterable
from itertools import groupby
from typing import Any

from ..constants import ID_FIELD
from ..models.document import get_partition_key
from ..models.options import OperationOptions
from ..observability.logging import get_logger
from ..observability.metrics import timed_operation
from .base import DataAccessBase

logger = get_logger(__name__)


class MongoDbEraser(DataAccessBase):
    """Delete operations; every method returns the number of deleted documents."""

    @timed_operation("eraser.delete_one")
    async def delete_one(self, document: Any, options: OperationOptions | None = None) -> int:
        result = await self.handle_partitioned_document(document, options).delete_one(
            self.id_filter(document), **self.session_kwargs(options)
        )
        return result.deleted_count

    @timed_operation("eraser.delete_one_by_filter")
    async def delete_one_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> int:
        result = await self.handle_partitioned(document_type, options).delete_one(
            filter, **self.session_kwargs(options)
        )
        return result.deleted_count

    @timed_operation("eraser.delete_many")
    async def delete_many(
        self, documents: Iterable[Any], options: OperationOptions | None = None
    ) -> int:
        """
        Delete the given documents by id.

        Partitioned documents are grouped by partition key, with one
        ``delete_many`` per partition collection; the counts are summed.
        """
        documents = list(documents)
        if not documents:
            return 0

        session_kwargs = self.session_kwargs(options)

        if all(get_partition_key(d) is None for d in documents):
            result = await self.handle_partitioned(type(documents[0]), options).delete_many(
                {ID_FIELD: {"$in": [d.id for d in documents]}}, **session_kwargs
            )
            return result.deleted_count

        deleted = 0
        by_partition = sorted(documents, key=lambda d: get_partition_key(d) or "")
        for partition_key, group in groupby(by_partition, key=get_partition_key):
            group = list(group)
            logger.debug(f"Deleting {len(group)} documents from partition {partition_key!r}")
            result = await self.handle_partitioned_document(group[0], options).delete_many(
                {ID_FIELD: {"$in": [d.id for d in group]}}, **session_kwargs
            )
            deleted += result.deleted_count
        return deleted

    @timed_operation("eraser.delete_many_by_filter")
    async def delete_many_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> int:
        result = await self.handle_partitioned(document_type, options).delete_many(
            filter, **self.session_kwargs(options)
        )
        return result.deleted_count
