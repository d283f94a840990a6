"""
User API — Identifier Codec
============================

What:  Converts between the wire form of a user id (24 hex characters)
       and the document store's native identifier (BSON ObjectId).
Why:   Keeps the store's id type out of routes and schemas. The service
       only ever hands strings to clients and ObjectIds to the store.
"""

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from userapi.exceptions import InvalidIdentifierError


def encode_id(oid: ObjectId) -> str:
    """Render a store identifier as its 24-character hex string."""
    return str(oid)


def decode_id(value: Any) -> ObjectId:
    """
    Parse a wire identifier into an ObjectId.

    Only 24-character hex strings are accepted. ObjectId itself also takes
    12-byte values, which never appear in a URL path, so anything that is
    not a str is rejected up front.

    Raises:
        InvalidIdentifierError: value is not a well-formed identifier
    """
    if not isinstance(value, str):
        raise InvalidIdentifierError(value)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise InvalidIdentifierError(value) from None
