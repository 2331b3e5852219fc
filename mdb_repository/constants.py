"""
Shared constants for MDB_REPOSITORY.
"""

from typing import Final

# ============================================================================
# DOCUMENTS AND COLLECTIONS
# ============================================================================

ID_FIELD: Final[str] = "_id"

COLLECTION_NAME_ATTRIBUTE: Final[str] = "__collection_name__"
"""Set by ``@collection_name`` to override the pluralized class name."""

PARTITION_SEPARATOR: Final[str] = "-"
"""Joins partition key and collection name: ``"<key>-<collection>"``."""

MAX_GENERATED_INT_ID: Final[int] = 2**31 - 1
"""Exclusive upper bound for random ``int`` ids."""

DEFAULT_PAGE_SIZE: Final[int] = 50

# ============================================================================
# CLIENT
# ============================================================================

DEFAULT_MAX_POOL_SIZE: Final[int] = 50
DEFAULT_MIN_POOL_SIZE: Final[int] = 10
DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
DEFAULT_MAX_IDLE_TIME_MS: Final[int] = 45000

DEFAULT_UUID_REPRESENTATION: Final[str] = "standard"
"""BSON binary subtype 4."""

SHARED_CLIENT_APP_NAME: Final[str] = "mdb-repository"

# ============================================================================
# METRICS
# ============================================================================

MAX_METRICS: Final[int] = 10000
"""Series kept by the metrics collector before evicting the stalest."""
