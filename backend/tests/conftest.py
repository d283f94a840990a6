"""
User API — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests never talk to a real MongoDB; they use an in-memory store or
       mocked driver objects.

Fixtures:
    ├── fake_store: In-memory UserStore stand-in (dict keyed by ObjectId)
    ├── mock_collection: MagicMock shaped like a pymongo AsyncCollection
    └── test_client: HTTPX AsyncClient wired to the app with fake_store
"""

import os
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import bson
import pytest
import pytest_asyncio
from bson import ObjectId
from bson.errors import InvalidDocument
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URL"] = "mongodb://localhost:1"
os.environ["MONGODB_DATABASE"] = "userapi_test"
os.environ["LOG_LEVEL"] = "WARNING"

from userapi.exceptions import MalformedRequestError, StoreUnavailableError  # noqa: E402


class FakeUserStore:
    """
    In-memory replacement for UserStore with the same async surface.

    Set `unavailable` to make every operation fail like an unreachable
    server; set `broken` to an exception to make operations raise it as-is.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.unavailable = False
        self.broken: Optional[Exception] = None
        self.closed = False

    def _check(self, operation: str) -> None:
        if self.broken is not None:
            raise self.broken
        if self.unavailable:
            raise StoreUnavailableError(context={"operation": operation})

    async def find_by_id(self, oid):
        self._check("find")
        document = self.documents.get(oid)
        return dict(document) if document is not None else None

    async def insert(self, document):
        self._check("insert")
        record = dict(document)
        record.setdefault("_id", ObjectId())
        # Same encoding limits as the driver (64-bit ints, string keys)
        try:
            bson.encode(record)
        except (OverflowError, InvalidDocument) as e:
            raise MalformedRequestError(context={"original_error": type(e).__name__}) from e
        self.documents[record["_id"]] = record
        return record["_id"]

    async def remove_by_id(self, oid):
        self._check("remove")
        return self.documents.pop(oid, None) is not None

    async def ping(self):
        self._check("ping")

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_store():
    return FakeUserStore()


@pytest.fixture
def mock_collection():
    """
    A MagicMock standing in for an AsyncCollection.

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, ...}
        store = UserStore(mock_collection)
    """
    collection = MagicMock()
    collection.name = "users"
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def sample_user_data():
    return {"name": "Ana", "gender": "F", "age": 30}


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to the app in-process.

    ASGITransport does not run the lifespan, so no MongoDB client is ever
    opened; the store dependency is overridden with fake_store instead.
    """
    from userapi.database import get_user_store
    from userapi.main import app

    app.dependency_overrides[get_user_store] = lambda: fake_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
