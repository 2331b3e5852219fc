"""
Unit tests for the exception hierarchy.
"""

import pytest

from mdb_repository.exceptions import (ConfigurationError,
                                       MongoRepositoryError,
                                       UnsupportedIdTypeError)


class TestMongoRepositoryError:
    """Test the base exception."""

    def test_message_without_context(self):
        error = MongoRepositoryError("Something failed")

        assert error.message == "Something failed"
        assert error.context == {}
        assert str(error) == "Something failed"

    def test_message_with_context(self):
        error = MongoRepositoryError("Something failed", context={"collection": "orders"})

        assert str(error) == "Something failed (context: collection=orders)"

    def test_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            raise MongoRepositoryError("boom")


class TestConfigurationError:
    """Test configuration errors."""

    def test_config_key_and_value_in_context(self):
        error = ConfigurationError("Invalid pool size", config_key="max_pool_size", config_value=0)

        assert error.config_key == "max_pool_size"
        assert error.config_value == 0
        assert error.context == {"config_key": "max_pool_size", "config_value": 0}
        assert isinstance(error, MongoRepositoryError)

    def test_without_key(self):
        error = ConfigurationError("Missing configuration")
        assert error.context == {}
        assert error.config_key is None


class TestUnsupportedIdTypeError:
    """Test unsupported id type errors."""

    def test_message_names_type(self):
        error = UnsupportedIdTypeError(float)

        assert error.message == "float is not a supported id type, the id of the document cannot be set."
        assert error.context == {"id_type": "float"}

    def test_is_repository_and_value_error(self):
        error = UnsupportedIdTypeError(bytes)

        assert isinstance(error, MongoRepositoryError)
        assert isinstance(error, ValueError)
