"""
Unit tests for RepositoryConfig.
"""

import pytest
from bson.binary import UuidRepresentation

from mdb_repository.config import RepositoryConfig, database_name_from_uri
from mdb_repository.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove repository environment variables for each test."""
    for name in (
        "MONGO_URI",
        "DB_NAME",
        "MONGO_MAX_POOL_SIZE",
        "MONGO_MIN_POOL_SIZE",
        "MONGO_SERVER_SELECTION_TIMEOUT_MS",
        "MONGO_UUID_REPRESENTATION",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDatabaseNameFromUri:
    def test_uri_with_database(self):
        assert database_name_from_uri("mongodb://localhost:27017/shop") == "shop"

    def test_uri_without_database(self):
        assert database_name_from_uri("mongodb://localhost:27017") is None

    def test_invalid_uri(self):
        with pytest.raises(ConfigurationError) as exc_info:
            database_name_from_uri("not-a-mongo-uri")

        assert exc_info.value.config_key == "mongo_uri"


class TestRepositoryConfigLoading:
    """Test explicit values, environment variables and defaults."""

    def test_defaults(self):
        config = RepositoryConfig(mongo_uri="mongodb://localhost:27017", db_name="shop")

        assert config.max_pool_size == 50
        assert config.min_pool_size == 10
        assert config.server_selection_timeout_ms == 5000
        assert config.uuid_representation == "standard"
        assert config.uuid_representation_code == UuidRepresentation.STANDARD

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
        monkeypatch.setenv("DB_NAME", "env_db")
        monkeypatch.setenv("MONGO_MAX_POOL_SIZE", "20")
        monkeypatch.setenv("MONGO_MIN_POOL_SIZE", "2")
        monkeypatch.setenv("MONGO_UUID_REPRESENTATION", "csharpLegacy")

        config = RepositoryConfig()

        assert config.mongo_uri == "mongodb://db:27017"
        assert config.db_name == "env_db"
        assert config.max_pool_size == 20
        assert config.min_pool_size == 2
        assert config.uuid_representation_code == UuidRepresentation.CSHARP_LEGACY

    def test_explicit_values_take_precedence(self, monkeypatch):
        monkeypatch.setenv("DB_NAME", "env_db")

        config = RepositoryConfig(mongo_uri="mongodb://localhost:27017", db_name="explicit")

        assert config.db_name == "explicit"

    def test_database_name_from_uri_fallback(self):
        config = RepositoryConfig(mongo_uri="mongodb://localhost:27017/from_uri")
        assert config.db_name == "from_uri"


class TestRepositoryConfigValidation:
    """Test validate() error cases."""

    def test_valid_config(self):
        RepositoryConfig(mongo_uri="mongodb://localhost:27017", db_name="shop").validate()

    def test_missing_uri(self):
        with pytest.raises(ConfigurationError) as exc_info:
            RepositoryConfig(db_name="shop").validate()
        assert exc_info.value.config_key == "mongo_uri"

    def test_missing_db_name(self):
        with pytest.raises(ConfigurationError) as exc_info:
            RepositoryConfig(mongo_uri="mongodb://localhost:27017").validate()
        assert exc_info.value.config_key == "db_name"

    def test_min_pool_greater_than_max(self):
        config = RepositoryConfig(
            mongo_uri="mongodb://localhost:27017", db_name="shop", max_pool_size=5, min_pool_size=10
        )
        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()
        assert exc_info.value.config_key == "min_pool_size"

    def test_timeout_too_small(self):
        config = RepositoryConfig(
            mongo_uri="mongodb://localhost:27017",
            db_name="shop",
            server_selection_timeout_ms=500,
        )
        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()
        assert exc_info.value.config_value == 500

    def test_unknown_uuid_representation(self):
        config = RepositoryConfig(
            mongo_uri="mongodb://localhost:27017", db_name="shop", uuid_representation="binary"
        )
        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()
        assert exc_info.value.config_key == "uuid_representation"
