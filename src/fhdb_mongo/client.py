"""MongoDbClient — drop-in replacement for the legacy fh.db call.

Usage::

    client = get_client()
    result = await client.perform({"act": "read", "type": "users", "guid": guid})

    # or callback style, from inside a running event loop
    client.perform(descriptor, lambda err, result: ...)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from functools import lru_cache, partial
from typing import TYPE_CHECKING, Any

from .actions import TYPELESS_ACTS, parse_action
from .config import FhDbSettings, get_settings
from .connection import MongoConnectionManager
from .exceptions import (
    CollectionNameTooLongError,
    DescriptorValidationError,
    FhDbError,
)
from .handlers import execute

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger("fhdb.client")

Callback = Callable[[BaseException | None, Any], None]


class MongoDbClient:
    """Translate fh.db action descriptors into MongoDB operations."""

    def __init__(
        self,
        connection: MongoConnectionManager | None = None,
        *,
        settings: FhDbSettings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._connection = connection or MongoConnectionManager(
            settings.mongodb_conn_url,
            default_database=settings.default_database,
            server_selection_timeout_ms=settings.server_selection_timeout_ms,
            connect_timeout_ms=settings.connect_timeout_ms,
        )
        self._max_collection_name = settings.max_collection_name

    @property
    def connection(self) -> MongoConnectionManager:
        return self._connection

    async def connect(self) -> AsyncIOMotorDatabase[Any]:
        """Open the shared connection (or reuse it) and return the database."""
        return await self._connection.connect()

    def close(self) -> None:
        """Release the shared connection; a no-op when none is held."""
        self._connection.close()

    def validate_options(self, descriptor: Mapping[str, Any]) -> None:
        """Reject descriptors without ``act``, or without a required ``type``."""
        if not isinstance(descriptor, Mapping):
            raise DescriptorValidationError("params must be a mapping")
        act = descriptor.get("act")
        if not act:
            raise DescriptorValidationError("'act' undefined in params")
        if not descriptor.get("type") and not (
            isinstance(act, str) and act in TYPELESS_ACTS
        ):
            raise DescriptorValidationError("'type' undefined in params")

    def perform(
        self,
        descriptor: Mapping[str, Any],
        callback: Callback | None = None,
    ) -> Awaitable[Any]:
        """Run one fh.db action.

        Validation of ``act``/``type`` happens here, before anything is
        scheduled, and raises :class:`DescriptorValidationError` directly.
        Every later failure reaches the caller through the result channel:

        * without ``callback`` the returned awaitable raises it;
        * with ``callback`` a task is scheduled on the running loop and
          ``callback(error, result)`` is called exactly once when it ends.
        """
        self.validate_options(descriptor)
        if callback is None:
            return self._process(descriptor)
        # Raises RuntimeError outside a running loop, before a coroutine exists
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._process(descriptor))
        task.add_done_callback(partial(_deliver, callback))
        return task

    # The legacy module exposed this entry point as ``db``.
    db = perform

    async def _process(self, descriptor: Mapping[str, Any]) -> Any:
        act = descriptor.get("act")
        type_name = descriptor.get("type")
        start = time.perf_counter()
        try:
            self._check_collection_name(type_name)
            action = parse_action(descriptor)
            db = await self._connection.connect()
            result = await execute(db, action)
        except FhDbError as e:
            logger.warning("fh.db %s on '%s' rejected: %s", act, type_name, e)
            raise
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception(
                "Error in MongoDB %s on '%s' after %.2fms", act, type_name, elapsed
            )
            raise
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("fh.db %s on '%s' completed in %.2fms", act, type_name, elapsed)
        return result

    def _check_collection_name(self, type_name: Any) -> None:
        if isinstance(type_name, str) and len(type_name) > self._max_collection_name:
            raise CollectionNameTooLongError(type_name, self._max_collection_name)


def _deliver(callback: Callback, task: asyncio.Future[Any]) -> None:
    if task.cancelled():
        callback(asyncio.CancelledError(), None)
        return
    error = task.exception()
    if error is not None:
        callback(error, None)
    else:
        callback(None, task.result())


@lru_cache
def get_client() -> MongoDbClient:
    """Return the process-wide client built from :func:`get_settings`."""
    return MongoDbClient()
