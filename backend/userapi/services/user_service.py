"""
User API — User Service (Resource Controller)
==============================================

What:  The three user operations: fetch by id, create, delete by id.
Why:   Keeps the wire ↔ document translation and not-found decisions out
       of the route handlers, so they can be tested without HTTP.
How:   Each method decodes the identifier, performs exactly one store
       operation, and returns a schema object or raises.

Design Decision:
    UserService is stateless — it receives the store for each call. No
    user data is cached between requests; the store owns all state.
"""

import logging

from userapi.database import UserStore
from userapi.exceptions import NotFoundError
from userapi.identifiers import decode_id, encode_id
from userapi.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """
    Controller logic for the user resource.

    Error Handling Strategy:
        Malformed ids raise InvalidIdentifierError (a NotFoundError), before
        the store is touched. Missing documents raise NotFoundError. Store
        failures arrive as StoreUnavailableError and propagate unchanged.
    """

    async def get_user(self, store: UserStore, user_id: str) -> UserResponse:
        """
        Fetch one user by its wire identifier.

        Raises:
            NotFoundError: id is malformed or no document matches
            StoreUnavailableError: the store could not be reached
        """
        oid = decode_id(user_id)
        document = await store.find_by_id(oid)
        if document is None:
            logger.debug("User %s not found", user_id)
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserResponse.from_document(document)

    async def create_user(self, store: UserStore, payload: UserCreate) -> UserResponse:
        """
        Persist a new user and echo it back with its assigned id.

        The store assigns the identifier; payload never carries one.
        """
        document = payload.to_document()
        oid = await store.insert(document)
        logger.info("Created user %s", encode_id(oid))
        return UserResponse(id=encode_id(oid), **document)

    async def delete_user(self, store: UserStore, user_id: str) -> str:
        """
        Remove one user by its wire identifier.

        Returns:
            The canonical string form of the removed id.

        Raises:
            NotFoundError: id is malformed or nothing was removed
            StoreUnavailableError: the store could not be reached
        """
        oid = decode_id(user_id)
        removed = await store.remove_by_id(oid)
        if not removed:
            logger.debug("Delete of user %s matched nothing", user_id)
            raise NotFoundError(resource="user", resource_id=user_id)
        logger.info("Deleted user %s", user_id)
        return encode_id(oid)


user_service = UserService()
