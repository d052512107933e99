"""
MongoDB integration.

This module owns the single process-wide link to the document store.
``DatabaseConnector`` wraps an asynchronous ``pymongo`` client and
tracks its lifecycle through ``ConnectionState``.  The connector is
created once at startup, stored on ``app.state`` and handed to route
handlers through the ``get_database`` dependency, so tests can inject
a fake in its place.

A connection attempt is made exactly once.  Failure is fatal: the
connector logs the reason and raises ``DatabaseConnectionError``, and
the process entry point exits with status ``1``.  There is no retry
or reconnection logic.
"""

import enum
import logging
import re
from typing import Any, Optional

from bson import ObjectId
from fastapi import HTTPException, Request, status
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.errors import PyMongoError


USERS_COLLECTION = "users"
BOOKINGS_COLLECTION = "bookings"

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


class ConnectionState(str, enum.Enum):
    """Lifecycle of the database link."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class DatabaseConnectionError(RuntimeError):
    """Raised when the initial connection to MongoDB cannot be established."""


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a hex identifier, returning ``None`` when it is malformed."""
    # ObjectId also accepts arbitrary 12-byte strings; only hex ids are valid here.
    if not _OBJECT_ID_RE.fullmatch(value):
        return None
    return ObjectId(value)


def redact_url(url: str) -> str:
    """Hide the password component of a MongoDB connection string."""
    return re.sub(r"//([^:/@]+):[^@/]*@", r"//\1:****@", url)


class DatabaseConnector:
    """Owns the MongoDB client and the state of the connection.

    Parameters
    ----------
    url : str
        MongoDB connection string.
    default_db : str
        Database name used when ``url`` does not name one.
    server_selection_timeout_ms : int
        Passed to the driver; bounds how long the initial ``ping`` may
        wait for a reachable server.
    logger : Optional[logging.Logger]
        Logger receiving connection events.  Defaults to this module's
        logger.
    """

    def __init__(
        self,
        url: str,
        *,
        default_db: str = "bookingDB",
        server_selection_timeout_ms: int = 5000,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.url = url
        self.default_db = default_db
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.logger = logger or logging.getLogger(__name__)
        self.state = ConnectionState.DISCONNECTED
        self._client: Optional[AsyncMongoClient] = None
        self._database: Any = None

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    @property
    def database(self) -> Any:
        """The connected database handle.

        Raises
        ------
        DatabaseConnectionError
            If the connector is not in the ``connected`` state.
        """
        if not self.is_connected:
            raise DatabaseConnectionError(f"Database is not connected (state: {self.state.value})")
        return self._database

    async def connect(self) -> Any:
        """Open the client and confirm the server answers a ``ping``.

        Only one attempt is allowed per connector.  On success the
        state becomes ``connected`` and the database handle is
        returned.  On failure the state becomes ``failed``, the error
        is logged and ``DatabaseConnectionError`` is raised.
        """
        if self.state is not ConnectionState.DISCONNECTED:
            raise DatabaseConnectionError(
                f"Connection already attempted (state: {self.state.value})"
            )
        self.state = ConnectionState.CONNECTING
        # A malformed URL, e.g. a non-numeric port, raises ValueError from the client.
        try:
            self._client = AsyncMongoClient(
                self.url,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            )
            await self._client.admin.command("ping")
            self._database = self._client.get_default_database(default=self.default_db)
        except (PyMongoError, ValueError) as exc:
            self.state = ConnectionState.FAILED
            self.logger.error("MongoDB Connection Error: %s", exc)
            raise DatabaseConnectionError(str(exc)) from exc
        self.state = ConnectionState.CONNECTED
        self.logger.info(
            "Connected to MongoDB at %s (database %s)",
            redact_url(self.url),
            self._database.name,
        )
        return self._database

    async def close(self) -> None:
        """Close the underlying client if one was opened."""
        if self._client is not None:
            await self._client.close()
            self._client = None
        self._database = None
        if self.state is ConnectionState.CONNECTED:
            self.state = ConnectionState.DISCONNECTED
            self.logger.info("MongoDB connection closed")


async def init_db(database: Any) -> None:
    """Create the indexes the services rely on.

    ``create_index`` is idempotent, so this runs on every startup.
    The unique index on ``users.email`` is what turns a duplicate
    registration into a ``DuplicateKeyError``.
    """
    await database[USERS_COLLECTION].create_index([("email", ASCENDING)], unique=True)
    await database[BOOKINGS_COLLECTION].create_index([("user_id", ASCENDING)])


def get_connector(request: Request) -> DatabaseConnector:
    return request.app.state.connector


def get_database(request: Request) -> Any:
    """FastAPI dependency returning the connected database.

    Requests that need the database are rejected with 503 until the
    connector reports ``connected``.
    """
    connector = get_connector(request)
    if not connector.is_connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not available",
        )
    return connector.database
