"""
Process-wide motor clients, one per connection string.

Every repository built from the same URI draws from the same connection
pool. Clients are created lazily and closed explicitly at shutdown with
:func:`close_shared_client`.
"""

import logging
import os
import threading

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConnectionFailure, InvalidOperation, OperationFailure

from ..constants import (
    DEFAULT_MAX_IDLE_TIME_MS,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_MIN_POOL_SIZE,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    DEFAULT_UUID_REPRESENTATION,
    SHARED_CLIENT_APP_NAME,
)

logger = logging.getLogger(__name__)

_shared_clients: dict[str, AsyncIOMotorClient] = {}
# Guards creation and closing; callers may come from several threads
_clients_lock = threading.Lock()


def _pool_size(explicit: int | None, env_var: str, default: int) -> int:
    if explicit is not None:
        return explicit
    return int(os.getenv(env_var, str(default)))


def get_shared_mongo_client(
    mongo_uri: str,
    max_pool_size: int | None = None,
    min_pool_size: int | None = None,
    server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    max_idle_time_ms: int = DEFAULT_MAX_IDLE_TIME_MS,
    uuid_representation: str = DEFAULT_UUID_REPRESENTATION,
) -> AsyncIOMotorClient:
    """
    Return the client for ``mongo_uri``, creating it on first request.

    Pool sizes fall back to ``MONGO_MAX_POOL_SIZE`` / ``MONGO_MIN_POOL_SIZE``
    and then to the package defaults. Options only apply when the client is
    created; later calls for the same URI get the existing client as is.

    Driver errors raised while building the client propagate and nothing is
    cached for the URI.
    """
    client = _shared_clients.get(mongo_uri)
    if client is not None:
        return client

    max_pool_size = _pool_size(max_pool_size, "MONGO_MAX_POOL_SIZE", DEFAULT_MAX_POOL_SIZE)
    min_pool_size = _pool_size(min_pool_size, "MONGO_MIN_POOL_SIZE", DEFAULT_MIN_POOL_SIZE)

    with _clients_lock:
        client = _shared_clients.get(mongo_uri)
        if client is None:
            logger.info(
                f"Opening shared MongoDB client (pool {min_pool_size}..{max_pool_size})"
            )
            client = AsyncIOMotorClient(
                mongo_uri,
                serverSelectionTimeoutMS=server_selection_timeout_ms,
                appname=SHARED_CLIENT_APP_NAME,
                maxPoolSize=max_pool_size,
                minPoolSize=min_pool_size,
                maxIdleTimeMS=max_idle_time_ms,
                uuidRepresentation=uuid_representation,
            )
            _shared_clients[mongo_uri] = client
        return client


async def verify_shared_client(mongo_uri: str) -> bool:
    """Ping the shared client for ``mongo_uri``; False when missing or unreachable."""
    client = _shared_clients.get(mongo_uri)
    if client is None:
        logger.warning("No shared MongoDB client to verify for this URI")
        return False

    try:
        await client.admin.command("ping")
    except (ConnectionFailure, OperationFailure, InvalidOperation) as e:
        logger.warning(f"Shared MongoDB client did not answer ping: {e}")
        return False
    return True


def close_shared_client(mongo_uri: str | None = None) -> None:
    """Close the client for ``mongo_uri``, or every shared client when omitted."""
    with _clients_lock:
        if mongo_uri is None:
            closing = list(_shared_clients.values())
            _shared_clients.clear()
        else:
            client = _shared_clients.pop(mongo_uri, None)
            closing = [client] if client is not None else []

    for client in closing:
        client.close()
    if closing:
        logger.info(f"Closed {len(closing)} shared MongoDB client(s)")
