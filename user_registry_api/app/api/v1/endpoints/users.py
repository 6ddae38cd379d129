"""
User endpoints for API v1.

Provide listing, lookup, registration and partial update of users.
All routes are public.  Registration answers with a signed token
asserting the new user's id rather than the user record.
"""

from typing import List, Optional

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from user_registry_api.app.schemas.user import TokenResponse, UserCreate, UserRead, UserUpdate
from user_registry_api.app.services.user_service import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserService,
)

router = APIRouter()


def _user_not_found() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"msg": "User not found"})


def _user_exists() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [{"msg": "User already exists"}]},
    )


@router.get("/", response_model=List[UserRead])
async def list_users() -> List[UserRead]:
    """Return every user without password hashes."""
    return await UserService.list_users()


@router.get(
    "/{user_id}",
    response_model=UserRead,
    responses={status.HTTP_404_NOT_FOUND: {"description": "User not found"}},
)
async def get_user(user_id: str):
    """Retrieve a single user by id.

    A malformed id is answered like an unknown one.
    """
    user = await UserService.get_user_by_id(user_id)
    if user is None:
        return _user_not_found()
    return user


@router.post(
    "/",
    response_model=TokenResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"description": "Invalid input or duplicate email"}},
)
async def register_user(user: UserCreate):
    """Register a new user and return a token for it.

    Input problems are reported by the application's validation handler
    as ``{"errors": [{"msg": ..., "param": ...}]}`` with status 400.
    """
    try:
        token = await UserService.register_user(user)
    except UserAlreadyExistsError:
        return _user_exists()
    return TokenResponse(token=token)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Email used by another user"},
        status.HTTP_404_NOT_FOUND: {"description": "User not found"},
    },
)
async def update_user(user_id: str, body: Optional[UserUpdate] = None):
    """Update a user's name, email or admin flag.

    Only non‑empty values are applied.  The password cannot be changed
    through this route.  A request without a body changes nothing and
    returns the user.
    """
    try:
        return await UserService.update_user(user_id, body or UserUpdate())
    except UserNotFoundError:
        return _user_not_found()
    except UserAlreadyExistsError:
        return _user_exists()

