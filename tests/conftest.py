"""Test configuration for the fh.db MongoDB shim."""

import pytest

from fhdb_mongo import FhDbSettings, MongoConnectionManager, MongoDbClient

pytest_plugins = ["pytest_asyncio"]

TEST_COLLECTION = "TEST"


@pytest.fixture
def mock_client():
    """Create a mock MongoDB client."""
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")
    return AsyncMongoMockClient(default_database_name="test_db")


@pytest.fixture
def mock_connection(mock_client):
    """A connection manager already holding the mock client."""
    connection = MongoConnectionManager(url="mongodb://mock:27017/test_db")
    connection._client = mock_client
    connection._database = mock_client.get_database("test_db")
    return connection


@pytest.fixture
def fhdb(mock_connection):
    """MongoDbClient wired to the mock database."""
    return MongoDbClient(connection=mock_connection, settings=FhDbSettings())


@pytest.fixture
def collection(mock_client):
    """Raw handle on the test collection, for seeding and checking."""
    return mock_client.get_database("test_db").get_collection(TEST_COLLECTION)


_STRINGS = ["some", "random", "strings", "to", "be", "used", "for", "testing"]


@pytest.fixture
def insert_n_docs(collection):
    """Insert ``n`` documents shaped ``{"<i>": i, "num": i, "str": ...}``."""

    async def _insert(n):
        docs = [
            {str(i): i, "num": i, "str": _STRINGS[i] if i < len(_STRINGS) else None}
            for i in range(n)
        ]
        await collection.insert_many(docs)
        return [doc async for doc in collection.find({}, sort=[("num", 1)])]

    return _insert

