"""MongoConnectionManager — single shared Motor client, lazily connected."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from .exceptions import MongoConnectionError

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger("fhdb.connection")


class MongoConnectionManager:
    """Hold one Motor client and its database for the whole process.

    ``connect()`` is idempotent and single-flight: concurrent first callers
    wait on one in-flight connect instead of each creating a client.
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017/db",
        *,
        default_database: str = "db",
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
        **kwargs: Any,
    ) -> None:
        self._url = url
        self._default_database = default_database
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._connect_timeout_ms = connect_timeout_ms
        self._kwargs = kwargs
        self._client: AsyncIOMotorClient[Any] | None = None
        self._database: AsyncIOMotorDatabase[Any] | None = None
        self._lock = asyncio.Lock()

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    async def connect(self) -> AsyncIOMotorDatabase[Any]:
        """Create and cache the client; return the database handle. Idempotent."""
        if self._database is not None:
            return self._database
        async with self._lock:
            if self._database is not None:
                return self._database
            try:
                from motor.motor_asyncio import AsyncIOMotorClient
            except ImportError as e:
                raise MongoConnectionError(
                    "motor is required; install with motor>=3.3.0"
                ) from e
            try:
                client = AsyncIOMotorClient(
                    self._url,
                    serverSelectionTimeoutMS=self._server_selection_timeout_ms,
                    connectTimeoutMS=self._connect_timeout_ms,
                    **self._kwargs,
                )
                # Database from the URL path, else the configured default
                database = client.get_default_database(self._default_database)
            except Exception as e:
                logger.error("Error connecting to MongoDB: %s", e)
                raise MongoConnectionError(str(e)) from e
            self._client = client
            self._database = database
            logger.info("Connected to MongoDB database '%s'", self._database.name)
            return self._database

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        """Return the Motor client; raises if not connected."""
        if self._client is None:
            raise MongoConnectionError("Not connected; call connect() first")
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase[Any]:
        """Return the database handle; raises if not connected."""
        if self._database is None:
            raise MongoConnectionError("Not connected; call connect() first")
        return self._database

    def close(self) -> None:
        """Close the client (synchronous; Motor client.close() is sync)."""
        if self._client is not None:
            self._client.close()
            logger.info("Closed MongoDB connection")
        self._client = None
        self._database = None

    async def health_check(self) -> bool:
        """Ping the server; return True if reachable."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception:  # noqa: BLE001
            return False
