"""
Utility helpers: id generation and collection-name inflection.
"""

from .id_generator import generate_id, is_default_id
from .pluralization import camelize, default_collection_name, pluralize, singularize

__all__ = [
    "generate_id",
    "is_default_id",
    "camelize",
    "pluralize",
    "singularize",
    "default_collection_name",
]
