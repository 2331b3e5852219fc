"""
Errors raised by the repository layer.

Driver failures (``pymongo.errors``) are never wrapped in these types; they
reach the caller as the driver raised them.
"""

from typing import Any


class MongoRepositoryError(RuntimeError):
    """
    Root of the repository error hierarchy.

    ``context`` holds structured details (document type, collection, ...)
    that are appended to ``str(error)``.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (context: {details})"


class ConfigurationError(MongoRepositoryError):
    """A connection setting is missing or out of range."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        details = dict(context or {})
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = config_value
        super().__init__(message, context=details)
        self.config_key = config_key
        self.config_value = config_value


class UnsupportedIdTypeError(MongoRepositoryError, ValueError):
    """No id generator exists for a document's declared key type."""

    def __init__(self, id_type: Any, context: dict[str, Any] | None = None) -> None:
        type_name = getattr(id_type, "__name__", repr(id_type))
        super().__init__(
            f"{type_name} is not a supported id type, the id of the document cannot be set.",
            context={**(context or {}), "id_type": type_name},
        )
        self.id_type = id_type
