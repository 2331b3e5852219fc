"""
MDB_REPOSITORY - MongoDB Repository

Partition-key-aware repositories for dataclass documents on top of motor.
"""

# Configuration
from .config import RepositoryConfig
# Context
from .context import MongoDbContext
# Data access helpers
from .data_access import (MongoDbCreator, MongoDbEraser, MongoDbIndexHandler,
                          MongoDbReader, MongoDbUpdater)
# Exceptions
from .exceptions import (ConfigurationError, MongoRepositoryError,
                         UnsupportedIdTypeError)
# Documents and options
from .models import (Document, IndexCreationOptions, KeyedDocument,
                     OperationOptions, PartitionedDocument, collection_name)
# Repositories
from .repositories import (BaseMongoRepository, DefaultMongoRepository,
                           ReadOnlyMongoRepository)

__version__ = "0.1.0"

__all__ = [
    # Repositories
    "ReadOnlyMongoRepository",
    "BaseMongoRepository",
    "DefaultMongoRepository",
    # Context
    "MongoDbContext",
    # Data access
    "MongoDbCreator",
    "MongoDbReader",
    "MongoDbUpdater",
    "MongoDbEraser",
    "MongoDbIndexHandler",
    # Documents
    "Document",
    "KeyedDocument",
    "PartitionedDocument",
    "collection_name",
    "IndexCreationOptions",
    "OperationOptions",
    # Configuration
    "RepositoryConfig",
    # Exceptions
    "MongoRepositoryError",
    "ConfigurationError",
    "UnsupportedIdTypeError",
]
