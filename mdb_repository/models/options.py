"""
Per-operation options.
"""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class OperationOptions:
    """
    Options shared by every repository operation.

    Attributes:
        partition_key: Selects the ``<partition_key>-<collection>`` collection
        session: Client session forwarded to the driver call
            (``AsyncIOMotorClientSession``), e.g. inside a transaction
    """

    partition_key: str | None = None
    session: Any = None

    def with_partition_key(self, partition_key: str | None) -> "OperationOptions":
        """Copy of these options targeting another partition."""
        return replace(self, partition_key=partition_key)


DEFAULT_OPTIONS = OperationOptions()


def resolve_options(options: OperationOptions | None) -> OperationOptions:
    """``options`` or the defaults when omitted."""
    return options if options is not None else DEFAULT_OPTIONS
