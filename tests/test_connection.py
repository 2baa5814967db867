"""Unit tests for MongoConnectionManager (without real MongoDB)."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from fhdb_mongo.connection import MongoConnectionManager
from fhdb_mongo.exceptions import MongoConnectionError


@pytest.fixture
def motor_factory(monkeypatch):
    """Replace AsyncIOMotorClient with a counting factory."""
    import motor.motor_asyncio

    calls = []

    def _factory(*args, **kwargs):
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        calls.append((args, kwargs, client))
        return client

    monkeypatch.setattr(motor.motor_asyncio, "AsyncIOMotorClient", _factory)
    return calls


def test_client_raises_before_connect() -> None:
    mgr = MongoConnectionManager(url="mongodb://localhost:27017")
    with pytest.raises(MongoConnectionError, match="Not connected"):
        _ = mgr.client
    with pytest.raises(MongoConnectionError, match="Not connected"):
        _ = mgr.database


def test_close_idempotent() -> None:
    mgr = MongoConnectionManager()
    mgr.close()  # sync; idempotent when not connected
    mgr.close()
    assert not mgr.is_connected


class TestConnect:
    """Tests for lazy, memoized connection."""

    @pytest.mark.asyncio
    async def test_connect_returns_default_database(self, motor_factory):
        mgr = MongoConnectionManager(url="mongodb://localhost:27017/db", default_database="fallback")

        db = await mgr.connect()

        (args, kwargs, client) = motor_factory[0]
        assert args == ("mongodb://localhost:27017/db",)
        assert kwargs["serverSelectionTimeoutMS"] == 5000
        assert kwargs["connectTimeoutMS"] == 10000
        client.get_default_database.assert_called_once_with("fallback")
        assert db is client.get_default_database.return_value
        assert mgr.client is client
        assert mgr.database is db
        assert mgr.url == "mongodb://localhost:27017/db"

    @pytest.mark.asyncio
    async def test_multiple_connect_calls(self, motor_factory):
        """Test that multiple connect() calls return the same database."""
        mgr = MongoConnectionManager()

        db1 = await mgr.connect()
        db2 = await mgr.connect()

        assert db1 is db2
        assert len(motor_factory) == 1

    @pytest.mark.asyncio
    async def test_concurrent_first_connects_share_one_client(self, motor_factory):
        mgr = MongoConnectionManager()

        results = await asyncio.gather(*(mgr.connect() for _ in range(5)))

        assert len(motor_factory) == 1
        assert all(db is results[0] for db in results)

    @pytest.mark.asyncio
    async def test_reconnect_after_close(self, motor_factory):
        mgr = MongoConnectionManager()
        await mgr.connect()
        first_client = motor_factory[0][2]

        mgr.close()
        first_client.close.assert_called_once()
        assert not mgr.is_connected

        await mgr.connect()
        assert len(motor_factory) == 2

    @pytest.mark.asyncio
    async def test_connect_failure(self, monkeypatch):
        """Test connection failure raises MongoConnectionError."""
        import motor.motor_asyncio

        def _broken(*args, **kwargs):
            raise ConnectionError("Connection failed")

        monkeypatch.setattr(motor.motor_asyncio, "AsyncIOMotorClient", _broken)
        mgr = MongoConnectionManager(url="mongodb://invalid:99999")

        with pytest.raises(MongoConnectionError, match="Connection failed"):
            await mgr.connect()
        assert not mgr.is_connected


class TestHealthCheck:
    """Tests for health check functionality."""

    @pytest.mark.asyncio
    async def test_health_check_not_connected(self):
        assert await MongoConnectionManager().health_check() is False

    @pytest.mark.asyncio
    async def test_health_check_healthy(self, motor_factory):
        mgr = MongoConnectionManager()
        await mgr.connect()
        assert await mgr.health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_unreachable(self, motor_factory):
        mgr = MongoConnectionManager()
        await mgr.connect()
        mgr.client.admin.command.side_effect = ConnectionError("down")
        assert await mgr.health_check() is False
