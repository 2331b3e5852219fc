"""
MongoDB context.

Resolves document types (and optional partition keys) to driver collections.
This is the single place where collection names are decided:

- a ``@collection_name("...")`` override, otherwise the camelized plural of
  the class name (``TestDocument`` -> ``testDocuments``);
- with a partition key, ``"<partition_key>-<name>"``.
"""

from datetime import timezone
from typing import Any

from bson.binary import UuidRepresentation
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from .config import RepositoryConfig, database_name_from_uri
from .constants import PARTITION_SEPARATOR
from .database.connection import get_shared_mongo_client
from .exceptions import ConfigurationError
from .models.document import get_collection_name_attribute
from .observability.logging import get_logger
from .utils.pluralization import default_collection_name

logger = get_logger(__name__)


class MongoDbContext:
    """
    Holds the database handle and maps document types to collections.

    Example:
        context = MongoDbContext(motor_client["shop"])
        orders = context.get_collection(Order)                 # "orders"
        archived = context.get_collection(Order, "archive")    # "archive-orders"
    """

    def __init__(
        self,
        database: AsyncIOMotorDatabase,
        uuid_representation: int = UuidRepresentation.STANDARD,
    ):
        """
        Initialize the context.

        Args:
            database: Motor database handle
            uuid_representation: bson UuidRepresentation applied to every
                collection handed out (defaults to STANDARD, binary subtype 4)
        """
        self._database = database
        self._uuid_representation = uuid_representation

    @classmethod
    def from_connection_string(
        cls,
        connection_string: str,
        database_name: str | None = None,
        **client_options: Any,
    ) -> "MongoDbContext":
        """
        Build a context on the shared client for ``connection_string``.

        Args:
            connection_string: MongoDB connection URI
            database_name: Database name; defaults to the database named in the URI
            **client_options: Forwarded to ``get_shared_mongo_client``

        Raises:
            ConfigurationError: If no database name can be determined
        """
        database_name = database_name or database_name_from_uri(connection_string)
        if not database_name:
            raise ConfigurationError(
                "A database name is required (pass it or name it in the connection string)",
                config_key="database_name",
            )
        client = get_shared_mongo_client(connection_string, **client_options)
        return cls(client[database_name])

    @classmethod
    def from_config(cls, config: RepositoryConfig) -> "MongoDbContext":
        """Build a context from a validated RepositoryConfig."""
        config.validate()
        client = get_shared_mongo_client(
            config.mongo_uri,
            max_pool_size=config.max_pool_size,
            min_pool_size=config.min_pool_size,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
            uuid_representation=config.uuid_representation,
        )
        return cls(client[config.db_name], uuid_representation=config.uuid_representation_code)

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._database.client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._database

    @property
    def uuid_representation(self) -> int:
        return self._uuid_representation

    def set_guid_representation(self, uuid_representation: int) -> None:
        """Change the UUID representation used for collections handed out from now on."""
        self._uuid_representation = uuid_representation

    def get_collection_name(self, document_type: type, partition_key: str | None = None) -> str:
        """Collection name for a document type, prefixed by the partition key if given."""
        name = get_collection_name_attribute(document_type) or default_collection_name(
            document_type.__name__
        )
        if partition_key:
            return f"{partition_key}{PARTITION_SEPARATOR}{name}"
        return name

    def get_collection(
        self, document_type: type, partition_key: str | None = None
    ) -> AsyncIOMotorCollection:
        """Driver collection for a document type and optional partition key."""
        codec_options = self._database.codec_options.with_options(
            uuid_representation=self._uuid_representation,
            tz_aware=True,
            tzinfo=timezone.utc,
        )
        return self._database.get_collection(
            self.get_collection_name(document_type, partition_key),
            codec_options=codec_options,
        )

    async def drop_collection(
        self,
        document_type: type,
        partition_key: str | None = None,
        session: Any = None,
    ) -> None:
        """Drop the collection of a document type (and partition)."""
        name = self.get_collection_name(document_type, partition_key)
        logger.info(f"Dropping collection '{name}'")
        await self._database.drop_collection(name, session=session)
