"""
User API — Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the JSON contract for the /user endpoints.
Why:   Automatic body parsing, type checking and OpenAPI doc generation.
How:   FastAPI validates request bodies against UserCreate and serializes
       handler results through UserResponse.

Design Decision:
    No business constraints (age range, non-empty name). Any well-typed body
    is accepted; only shape, exact JSON types and the storable integer range
    are checked.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from userapi.identifiers import encode_id

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """
    What:  Body of POST /user.
    Why:   All three fields are required; a missing one is a 400.

    Strict types: JSON true, "30" or 30.0 for age are rejected, not coerced.
    age is bounded to what BSON stores as a 64-bit integer.

    Unknown keys are ignored, including a client-supplied "id": the store
    always assigns a fresh identifier on insert.
    """
    model_config = ConfigDict(strict=True)

    name: str = Field(description="Display name")
    gender: str = Field(description="Free-form gender text")
    age: int = Field(ge=INT64_MIN, le=INT64_MAX, description="Age in years")

    def to_document(self) -> Dict[str, Any]:
        """The persisted form, without _id (assigned by the store)."""
        return {"name": self.name, "gender": self.gender, "age": self.age}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """
    What:  Wire representation of a persisted user.
    Who:   Returned by GET /user/{id} and POST /user.
    """
    id: str = Field(description="Store-assigned identifier (24 hex characters)")
    name: str
    gender: str
    age: int

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserResponse":
        """Build the response from a stored document, encoding its _id."""
        return cls(
            id=encode_id(document["_id"]),
            name=document["name"],
            gender=document["gender"],
            age=document["age"],
        )


class ErrorResponse(BaseModel):
    """
    What:  Error body for server-side failures (5xx).

    Client errors (400, 404) carry no body at all.
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
