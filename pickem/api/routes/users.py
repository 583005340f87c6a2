"""
User routes.

Defines the signup endpoint and the bearer-protected read endpoints.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from pickem.api.dependencies import get_directory, get_registrar, require_identity
from pickem.api.models import (
    ErrorResponse,
    SignupRequest,
    UserResponse,
    ValidationErrorResponse,
)
from pickem.domain.directory import UserDirectory
from pickem.domain.ports import VerifiedIdentity
from pickem.domain.registration import UserRegistrar

router = APIRouter(tags=["users"])

_unauthorized = {401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"}}
_internal = {500: {"model": ErrorResponse, "description": "Internal server error"}}


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"model": ValidationErrorResponse, "description": "Validation error"},
        **_internal,
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SignupRequest.model_json_schema()}},
        }
    },
    summary="Register a new user",
)
async def signup(
    payload: Any = Body(default=None),
    registrar: UserRegistrar = Depends(get_registrar),
) -> UserResponse:
    """
    Register a new user.

    - **username**: 1-17 characters, unique
    - **password**: 5-72 characters
    - **name**: display name, at most 17 characters

    Returns the new user without any password material.
    """
    user = await registrar.register(payload)
    return UserResponse.model_validate(user)


@router.get(
    "/all",
    response_model=list[UserResponse],
    responses={**_unauthorized, **_internal},
    summary="List users by points",
)
async def list_users(
    identity: VerifiedIdentity = Depends(require_identity),
    directory: UserDirectory = Depends(get_directory),
) -> list[UserResponse]:
    """All users, highest points first."""
    users = await directory.leaderboard()
    return [UserResponse.model_validate(user) for user in users]


@router.get(
    "/{username}",
    response_model=UserResponse,
    responses={**_unauthorized, **_internal},
    summary="Get one user",
)
async def get_user(
    username: str,
    identity: VerifiedIdentity = Depends(require_identity),
    directory: UserDirectory = Depends(get_directory),
) -> UserResponse:
    """Public profile of ``username``. Unknown users answer 500."""
    user = await directory.get(username)
    return UserResponse.model_validate(user)
