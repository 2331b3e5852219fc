"""
Document models and option objects.
"""

from .document import (
    Document,
    KeyedDocument,
    PartitionedDocument,
    build_dataclass,
    collection_name,
    get_collection_name_attribute,
    get_partition_key,
    to_projection,
)
from .index_options import IndexCreationOptions
from .options import DEFAULT_OPTIONS, OperationOptions, resolve_options

__all__ = [
    "Document",
    "KeyedDocument",
    "PartitionedDocument",
    "collection_name",
    "get_collection_name_attribute",
    "get_partition_key",
    "build_dataclass",
    "to_projection",
    "IndexCreationOptions",
    "OperationOptions",
    "DEFAULT_OPTIONS",
    "resolve_options",
]
