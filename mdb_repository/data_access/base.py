"""
Shared plumbing for the data-access helpers.

Every helper (reader, creator, updater, eraser, index handler) resolves its
target collection the same way: an explicit partition key from the
operation options, or the partition key carried by a partitioned document.
"""

from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from ..constants import ID_FIELD
from ..context import MongoDbContext
from ..models.document import get_partition_key
from ..models.index_options import IndexCreationOptions
from ..models.options import OperationOptions, resolve_options


class DataAccessBase:
    """Base class of the data-access helpers; holds the MongoDbContext."""

    def __init__(self, mongo_db_context: MongoDbContext):
        self._context = mongo_db_context

    @property
    def context(self) -> MongoDbContext:
        return self._context

    def get_collection(
        self, document_type: type, partition_key: str | None = None
    ) -> AsyncIOMotorCollection:
        return self._context.get_collection(document_type, partition_key)

    def handle_partitioned(
        self, document_type: type, options: OperationOptions | None = None
    ) -> AsyncIOMotorCollection:
        """Collection for ``document_type``, partitioned when the options carry a key."""
        partition_key = resolve_options(options).partition_key
        if partition_key:
            return self.get_collection(document_type, partition_key)
        return self.get_collection(document_type)

    def handle_partitioned_document(
        self, document: Any, options: OperationOptions | None = None
    ) -> AsyncIOMotorCollection:
        """
        Collection for a document instance.

        A partitioned document's own key wins over the key in the options.
        """
        partition_key = get_partition_key(document) or resolve_options(options).partition_key
        return self.get_collection(type(document), partition_key)

    @staticmethod
    def id_filter(document: Any) -> dict[str, Any]:
        return {ID_FIELD: document.id}

    @staticmethod
    def session_kwargs(options: OperationOptions | None) -> dict[str, Any]:
        """Keyword arguments forwarding the session, empty when there is none."""
        session = resolve_options(options).session
        return {"session": session} if session is not None else {}

    @staticmethod
    def map_index_options(index_options: IndexCreationOptions | None) -> dict[str, Any]:
        if index_options is None:
            return {}
        return index_options.to_index_kwargs()
