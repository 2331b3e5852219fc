"""
Database connection layer.

Provides the shared, per-URI MongoDB client used by repositories that are
built from a connection string.
"""

from .connection import close_shared_client, get_shared_mongo_client, verify_shared_client

__all__ = [
    "get_shared_mongo_client",
    "verify_shared_client",
    "close_shared_client",
]
