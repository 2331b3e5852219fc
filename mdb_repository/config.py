"""
Configuration management for MDB_REPOSITORY.

Repositories can be built from explicit parameters; RepositoryConfig offers
the same values read from environment variables, explicit arguments taking
precedence.
"""

import os

from bson.binary import UuidRepresentation
from pymongo.errors import ConfigurationError as DriverConfigurationError
from pymongo.uri_parser import parse_uri

from .constants import (
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_MIN_POOL_SIZE,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    DEFAULT_UUID_REPRESENTATION,
)
from .exceptions import ConfigurationError

UUID_REPRESENTATIONS: dict[str, int] = {
    "unspecified": UuidRepresentation.UNSPECIFIED,
    "standard": UuidRepresentation.STANDARD,
    "pythonLegacy": UuidRepresentation.PYTHON_LEGACY,
    "javaLegacy": UuidRepresentation.JAVA_LEGACY,
    "csharpLegacy": UuidRepresentation.CSHARP_LEGACY,
}


def database_name_from_uri(mongo_uri: str) -> str | None:
    """
    Extract the default database name from a MongoDB connection string.

    Args:
        mongo_uri: MongoDB connection URI

    Returns:
        Database name, or None when the URI does not name one

    Raises:
        ConfigurationError: If the URI cannot be parsed
    """
    try:
        return parse_uri(mongo_uri)["database"]
    except (DriverConfigurationError, ValueError) as e:
        raise ConfigurationError(
            "Invalid MongoDB connection string", config_key="mongo_uri"
        ) from e


class RepositoryConfig:
    """
    Repository connection configuration.

    Example:
        # Using environment variables
        config = RepositoryConfig()
        config.validate()
        repo = BaseMongoRepository.from_config(config)

        # Or using direct parameters
        config = RepositoryConfig(
            mongo_uri="mongodb://localhost:27017",
            db_name="my_db"
        )
    """

    def __init__(
        self,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        max_pool_size: int | None = None,
        min_pool_size: int | None = None,
        server_selection_timeout_ms: int | None = None,
        uuid_representation: str | None = None,
    ):
        """
        Initialize configuration.

        Args:
            mongo_uri: MongoDB connection URI (defaults to MONGO_URI env var)
            db_name: Database name (defaults to DB_NAME env var, then to the
                database named in the URI)
            max_pool_size: Maximum connection pool size (defaults to 50 or MONGO_MAX_POOL_SIZE)
            min_pool_size: Minimum connection pool size (defaults to 10 or MONGO_MIN_POOL_SIZE)
            server_selection_timeout_ms: Server selection timeout in ms (defaults to 5000)
            uuid_representation: UUID representation name (defaults to "standard"
                or MONGO_UUID_REPRESENTATION)
        """
        self.mongo_uri = mongo_uri or os.getenv("MONGO_URI", "")
        self.db_name = db_name or os.getenv("DB_NAME", "")
        self.max_pool_size = max_pool_size or int(
            os.getenv("MONGO_MAX_POOL_SIZE", str(DEFAULT_MAX_POOL_SIZE))
        )
        self.min_pool_size = min_pool_size or int(
            os.getenv("MONGO_MIN_POOL_SIZE", str(DEFAULT_MIN_POOL_SIZE))
        )
        self.server_selection_timeout_ms = server_selection_timeout_ms or int(
            os.getenv(
                "MONGO_SERVER_SELECTION_TIMEOUT_MS",
                str(DEFAULT_SERVER_SELECTION_TIMEOUT_MS),
            )
        )
        self.uuid_representation = uuid_representation or os.getenv(
            "MONGO_UUID_REPRESENTATION", DEFAULT_UUID_REPRESENTATION
        )

        if not self.db_name and self.mongo_uri:
            self.db_name = database_name_from_uri(self.mongo_uri) or ""

    @property
    def uuid_representation_code(self) -> int:
        """Numeric bson UuidRepresentation for the configured name."""
        return UUID_REPRESENTATIONS[self.uuid_representation]

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        if not self.mongo_uri:
            raise ConfigurationError(
                "mongo_uri is required (set MONGO_URI environment variable or pass directly)",
                config_key="mongo_uri",
            )

        if not self.db_name:
            raise ConfigurationError(
                "db_name is required (set DB_NAME, pass it directly or name it in the URI)",
                config_key="db_name",
            )

        if self.max_pool_size < 1:
            raise ConfigurationError(
                f"max_pool_size must be >= 1, got {self.max_pool_size}",
                config_key="max_pool_size",
                config_value=self.max_pool_size,
            )

        if self.min_pool_size < 1:
            raise ConfigurationError(
                f"min_pool_size must be >= 1, got {self.min_pool_size}",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.min_pool_size > self.max_pool_size:
            raise ConfigurationError(
                f"min_pool_size ({self.min_pool_size}) cannot be greater than "
                f"max_pool_size ({self.max_pool_size})",
                config_key="min_pool_size",
                config_value=self.min_pool_size,
            )

        if self.server_selection_timeout_ms < 1000:
            raise ConfigurationError(
                f"server_selection_timeout_ms must be >= 1000, got "
                f"{self.server_selection_timeout_ms}",
                config_key="server_selection_timeout_ms",
                config_value=self.server_selection_timeout_ms,
            )

        if self.uuid_representation not in UUID_REPRESENTATIONS:
            raise ConfigurationError(
                f"uuid_representation must be one of {sorted(UUID_REPRESENTATIONS)}, "
                f"got {self.uuid_representation!r}",
                config_key="uuid_representation",
                config_value=self.uuid_representation,
            )
