"""
Contextual logging for repository operations.

Every record emitted through :func:`get_logger` carries the current
correlation id and whatever repository fields (database, collection,
partition key) the caller has pinned with :func:`set_repository_context`.
Both live in context variables, so concurrent tasks never see each other's
values.
"""

import contextvars
import logging
import uuid
from collections.abc import Mapping
from datetime import datetime
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "mdb_repository_correlation_id", default=None
)
_repository_fields: contextvars.ContextVar[Mapping[str, Any]] = contextvars.ContextVar(
    "mdb_repository_fields", default={}
)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Pin a correlation id for the current task, generating a uuid4 when omitted."""
    value = correlation_id or uuid.uuid4().hex
    _correlation_id.set(value)
    return value


def clear_correlation_id() -> None:
    _correlation_id.set(None)


def set_repository_context(database: str | None = None, **fields: Any) -> None:
    """
    Pin repository fields onto every following log record of this task.

    Args:
        database: Database name
        **fields: Extra fields such as ``collection_name`` or ``partition_key``
    """
    _repository_fields.set({"database": database, **fields})


def clear_repository_context() -> None:
    _repository_fields.set({})


def get_logging_context() -> dict[str, Any]:
    """Snapshot of the fields attached to records logged right now."""
    snapshot: dict[str, Any] = {"timestamp": datetime.now().isoformat()}
    correlation_id = _correlation_id.get()
    if correlation_id is not None:
        snapshot["correlation_id"] = correlation_id
    snapshot.update(_repository_fields.get())
    return snapshot


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """Merges the task's logging context under any explicit ``extra``."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        kwargs["extra"] = {**get_logging_context(), **self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, **bound: Any) -> ContextualLoggerAdapter:
    """
    Contextual logger for ``name``.

    Keyword arguments are bound to every record from the returned adapter.
    """
    return ContextualLoggerAdapter(logging.getLogger(name), bound)


def log_operation(
    logger: logging.Logger | logging.LoggerAdapter,
    operation: str,
    level: int = logging.DEBUG,
    success: bool = True,
    duration_ms: float | None = None,
    **fields: Any,
) -> None:
    """
    Emit one structured record for a finished data-access call.

    The message reads ``Operation: <name>`` or ``Operation failed: <name>``,
    followed by the duration when one was measured.
    """
    extra = get_logging_context()
    extra["operation"] = operation
    extra["success"] = success

    prefix = "Operation" if success else "Operation failed"
    message = f"{prefix}: {operation}"
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
        message = f"{message} (duration: {duration_ms:.2f}ms)"

    extra.update(fields)
    logger.log(level, message, extra=extra)
