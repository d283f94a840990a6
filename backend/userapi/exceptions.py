"""
User API — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the failure modes of a request.
Why:   Services raise by meaning; global handlers (registered in main.py)
       decide the HTTP status and body. Routes never build error responses.
How:   Each exception carries a message and an optional context dict.
       Context is logged server-side and never returned to the client.

Exception Hierarchy:
    UserAPIError (base)
    ├── NotFoundError              → 404, empty body
    │   └── InvalidIdentifierError → 404, empty body (malformed id)
    ├── MalformedRequestError      → 400, empty body
    └── StoreUnavailableError      → 503, JSON error body
"""

from typing import Any, Dict, Optional


class UserAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(UserAPIError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found

    The store returns None (or a zero delete count) for missing documents;
    the service layer converts that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class InvalidIdentifierError(NotFoundError):
    """
    Raised when an identifier string cannot be decoded into a store id.

    A malformed id can never name an existing document, so it is reported
    exactly like a missing one.
    """

    def __init__(
        self,
        value: Any,
        resource: str = "user",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["malformed_id"] = True
        super().__init__(resource=resource, resource_id=str(value), context=ctx)
        self.value = value


class MalformedRequestError(UserAPIError):
    """
    Raised when a request body cannot be parsed into a User-shaped value.

    HTTP:    400 Bad Request, no body.
    When:    Invalid JSON, a missing required field, or a field of the wrong type.
    """

    def __init__(
        self,
        message: str = "Request body is not a valid user",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(UserAPIError):
    """
    Raised when the document store cannot complete an operation.

    HTTP:    503 Service Unavailable

    Security Note:
        The driver's error text may include host names or credentials from
        the connection string. It goes into context for the log only.
    """

    def __init__(
        self,
        message: str = "The document store is temporarily unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
