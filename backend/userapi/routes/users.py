"""
User API — User Route Handlers
===============================

What:  GET /user/{id}, POST /user and DELETE /user/{id}.
How:   Extracts the path parameter or body, delegates to UserService,
       returns the result. Errors are raised, never formatted here; the
       global handlers in main.py turn them into responses.

Response Formats:
    GET     200 JSON user    | 404 empty
    POST    201 JSON user    | 400 empty
    DELETE  200 plain text   | 404 empty
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from userapi.database import UserStore, get_user_store
from userapi.schemas.user import ErrorResponse, UserCreate, UserResponse
from userapi.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])

_store_errors = {
    503: {"description": "Document store unavailable", "model": ErrorResponse},
}


@router.get(
    "/user/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "No such user (empty body)"}, **_store_errors},
    summary="Fetch a user by ID",
)
async def get_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    return await user_service.get_user(store, user_id)


@router.post(
    "/user",
    status_code=201,
    response_model=UserResponse,
    responses={400: {"description": "Malformed body (empty body)"}, **_store_errors},
    summary="Create a user",
    description="Stores a new user and returns it with its generated ID.",
)
async def create_user(
    payload: UserCreate,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    return await user_service.create_user(store, payload)


@router.delete(
    "/user/{user_id}",
    response_class=PlainTextResponse,
    responses={404: {"description": "No such user (empty body)"}, **_store_errors},
    summary="Delete a user by ID",
    description="Removes the user and answers with a plain-text confirmation.",
)
async def delete_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> PlainTextResponse:
    """
    Plain text, not JSON: existing clients read this confirmation line as-is.
    """
    deleted_id = await user_service.delete_user(store, user_id)
    return PlainTextResponse(f"Deleted user {deleted_id}\n")
