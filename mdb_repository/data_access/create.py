"""
Document creation.
"""

from collections.abc import Iterable
from itertools import groupby
from typing import Any

from ..models.document import get_partition_key
from ..models.options import OperationOptions
from ..observability.logging import get_logger
from ..observability.metrics import timed_operation
from ..utils.id_generator import generate_id, is_default_id
from .base import DataAccessBase

logger = get_logger(__name__)


class MongoDbCreator(DataAccessBase):
    """Inserts documents, assigning ids to documents that have none."""

    @staticmethod
    def format_document(document: Any) -> None:
        """Assign a generated id to a document whose id is unset."""
        if document is None:
            raise ValueError("document cannot be None")
        if is_default_id(document.id):
            document.id = generate_id(type(document).id_type)

    @timed_operation("creator.add_one")
    async def add_one(self, document: Any, options: OperationOptions | None = None) -> None:
        """Insert one document into its (partitioned) collection."""
        self.format_document(document)
        await self.handle_partitioned_document(document, options).insert_one(
            document.to_dict(), **self.session_kwargs(options)
        )

    @timed_operation("creator.add_many")
    async def add_many(
        self, documents: Iterable[Any], options: OperationOptions | None = None
    ) -> None:
        """
        Insert several documents.

        Partitioned documents are grouped by partition key and each group is
        inserted into its own collection with one ``insert_many`` call.
        """
        documents = list(documents)
        if not documents:
            return

        for document in documents:
            self.format_document(document)

        session_kwargs = self.session_kwargs(options)

        if all(get_partition_key(d) is None for d in documents):
            collection = self.handle_partitioned(type(documents[0]), options)
            await collection.insert_many([d.to_dict() for d in documents], **session_kwargs)
            return

        by_partition = sorted(documents, key=lambda d: get_partition_key(d) or "")
        for partition_key, group in groupby(by_partition, key=get_partition_key):
            group = list(group)
            logger.debug(f"Inserting {len(group)} documents into partition {partition_key!r}")
            await self.handle_partitioned_document(group[0], options).insert_many(
                [d.to_dict() for d in group], **session_kwargs
            )
