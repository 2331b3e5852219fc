"""
Repositories.

ReadOnlyMongoRepository exposes reads, BaseMongoRepository adds writes and
index management, DefaultMongoRepository binds both to one document type.
"""

from .base import BaseMongoRepository
from .default import DefaultMongoRepository
from .read_only import ReadOnlyMongoRepository

__all__ = [
    "ReadOnlyMongoRepository",
    "BaseMongoRepository",
    "DefaultMongoRepository",
]
