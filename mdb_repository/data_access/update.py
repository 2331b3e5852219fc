"""
Document updates.
"""

from typing import Any

from pymongo import ReturnDocument

from ..models.options import OperationOptions
from ..observability.metrics import timed_operation
from .base import DataAccessBase


def set_field(field: str, value: Any) -> dict[str, Any]:
    return {"$set": {field: value}}


class MongoDbUpdater(DataAccessBase):
    """Replace and update operations forwarded to the driver collection."""

    @timed_operation("updater.replace_one")
    async def replace_one(self, document: Any, options: OperationOptions | None = None) -> bool:
        """Replace the stored document with the same id; True when one document changed."""
        result = await self.handle_partitioned_document(document, options).replace_one(
            self.id_filter(document), document.to_dict(), **self.session_kwargs(options)
        )
        return result.modified_count == 1

    @timed_operation("updater.update_one")
    async def update_one(
        self,
        document: Any,
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> bool:
        """Apply ``update`` to the stored copy of ``document``."""
        result = await self.handle_partitioned_document(document, options).update_one(
            self.id_filter(document), update, **self.session_kwargs(options)
        )
        return result.modified_count == 1

    async def update_one_field(
        self,
        document: Any,
        field: str,
        value: Any,
        options: OperationOptions | None = None,
    ) -> bool:
        """Set a single field of the stored copy of ``document``."""
        return await self.update_one(document, set_field(field, value), options)

    @timed_operation("updater.update_one_by_filter")
    async def update_one_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> bool:
        """Apply ``update`` to the first document matching ``filter``."""
        result = await self.handle_partitioned(document_type, options).update_one(
            filter, update, **self.session_kwargs(options)
        )
        return result.modified_count == 1

    async def update_field_by_filter(
        self,
        document_type: type,
        filter: dict[str, Any],
        field: str,
        value: Any,
        options: OperationOptions | None = None,
    ) -> bool:
        return await self.update_one_by_filter(
            document_type, filter, set_field(field, value), options
        )

    @timed_operation("updater.update_many")
    async def update_many(
        self,
        document_type: type,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: OperationOptions | None = None,
    ) -> int:
        """Apply ``update`` to every matching document; returns the modified count."""
        result = await self.handle_partitioned(document_type, options).update_many(
            filter, update, **self.session_kwargs(options)
        )
        return result.modified_count

    async def update_many_field(
        self,
        document_type: type,
        filter: dict[str, Any],
        field: str,
        value: Any,
        options: OperationOptions | None = None,
    ) -> int:
        return await self.update_many(document_type, filter, set_field(field, value), options)

    @timed_operation("updater.get_and_update_one")
    async def get_and_update_one(
        self,
        document_type: type,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: OperationOptions | None = None,
        return_document: ReturnDocument = ReturnDocument.AFTER,
    ) -> Any:
        """
        Atomically update the first matching document and return it.

        By default the updated document is returned; pass
        ``ReturnDocument.BEFORE`` to get the document as it was.
        Returns None when nothing matches.
        """
        raw = await self.handle_partitioned(document_type, options).find_one_and_update(
            filter, update, return_document=return_document, **self.session_kwargs(options)
        )
        return document_type.from_dict(raw)
