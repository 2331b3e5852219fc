"""
Data-access helpers used by the repositories.

Each helper wraps one family of driver calls and resolves its target
collection (optionally partitioned) through the MongoDbContext.
"""

from .base import DataAccessBase
from .create import MongoDbCreator
from .delete import MongoDbEraser
from .index import MongoDbIndexHandler
from .read import MongoDbReader
from .update import MongoDbUpdater

__all__ = [
    "DataAccessBase",
    "MongoDbCreator",
    "MongoDbReader",
    "MongoDbUpdater",
    "MongoDbEraser",
    "MongoDbIndexHandler",
]
