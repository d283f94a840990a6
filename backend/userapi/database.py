"""
User API — Document Store Access
=================================

What:  The MongoDB client lifecycle and the collection-scoped operations
       the service needs (find, insert, remove by id).
Why:   Centralizes all driver calls in one place and translates driver
       errors into StoreUnavailableError.
How:   One AsyncMongoClient is opened in the application lifespan, wrapped
       in a UserStore, kept on app.state and handed to route handlers
       through the get_user_store dependency.
When:  Client created once at startup; closed at shutdown.

Connection Pooling:
    The client keeps its own connection pool and is safe for concurrent use
    from many coroutines. This module does no pooling or locking of its own.
"""

import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidDocument
from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from userapi.config import Settings
from userapi.exceptions import MalformedRequestError, StoreUnavailableError

logger = logging.getLogger(__name__)


class UserStore:
    """
    Collection-scoped access to persisted user documents.

    Every method performs exactly one driver operation. Any PyMongoError
    (connection refused, server selection timeout, write error) is logged
    and re-raised as StoreUnavailableError so a failing store only fails
    the request that touched it.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        client: Optional[AsyncMongoClient] = None,
    ):
        self._collection = collection
        self._client = client

    @property
    def collection_name(self) -> str:
        return self._collection.name

    async def find_by_id(self, oid: ObjectId) -> Optional[Dict[str, Any]]:
        """Return the document whose _id is oid, or None."""
        try:
            return await self._collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._unavailable("find", e) from e

    async def insert(self, document: Dict[str, Any]) -> ObjectId:
        """
        Insert a document and return its _id.

        The caller's dict is copied first; the driver sets _id on the dict it
        is given, and the copy keeps that mutation away from the caller.

        A document BSON cannot encode (an integer past 64 bits) raises
        MalformedRequestError; nothing is sent to the server in that case.
        """
        record = dict(document)
        try:
            result = await self._collection.insert_one(record)
        except (OverflowError, InvalidDocument) as e:
            raise MalformedRequestError(
                message="User cannot be stored as a BSON document",
                context={"original_error": type(e).__name__},
            ) from e
        except PyMongoError as e:
            raise self._unavailable("insert", e) from e
        return result.inserted_id

    async def remove_by_id(self, oid: ObjectId) -> bool:
        """Delete the document whose _id is oid. True if one was removed."""
        try:
            result = await self._collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise self._unavailable("remove", e) from e
        return result.deleted_count > 0

    async def ping(self) -> None:
        """Round-trip to the server; raises StoreUnavailableError on failure."""
        if self._client is None:
            return
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            raise self._unavailable("ping", e) from e

    async def close(self) -> None:
        """Close the underlying client and its connection pool."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    def _unavailable(self, operation: str, error: PyMongoError) -> StoreUnavailableError:
        logger.error(
            "Store %s on '%s' failed: %s: %s",
            operation,
            self.collection_name,
            type(error).__name__,
            error,
        )
        return StoreUnavailableError(
            context={
                "operation": operation,
                "collection": self.collection_name,
                "original_error": type(error).__name__,
            }
        )


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
def open_user_store(config: Settings) -> UserStore:
    """
    Build the client and UserStore described by config.

    AsyncMongoClient connects lazily, so this never blocks or fails on an
    unreachable server. The first operation (or ping) is what finds out.
    """
    client = AsyncMongoClient(
        config.mongodb_url,
        serverSelectionTimeoutMS=config.mongodb_timeout_ms,
    )
    collection = client[config.mongodb_database][config.mongodb_collection]
    logger.info(
        "Document store configured: database=%s collection=%s",
        config.mongodb_database,
        config.mongodb_collection,
    )
    return UserStore(collection, client=client)


# ── Store Dependency ──────────────────────────────────────────────────────
def get_user_store(request: Request) -> UserStore:
    """
    FastAPI dependency returning the process-wide UserStore.

    Tests replace it through app.dependency_overrides with an in-memory store.
    """
    return request.app.state.user_store
