"""
Auth routes.

- POST /auth/login - exchange HTTP BASIC credentials for a bearer token
- POST /auth/refresh - exchange a valid bearer token for a fresh one
"""

from fastapi import APIRouter, Depends

from pickem.api.dependencies import (
    get_basic_auth_credentials,
    get_directory,
    get_token_issuer,
    require_identity,
)
from pickem.api.models import ErrorResponse, TokenResponse
from pickem.domain.directory import UserDirectory
from pickem.domain.ports import VerifiedIdentity
from pickem.domain.tokens import TokenIssuer

router = APIRouter(tags=["auth"])


def _token_response(issuer: TokenIssuer, identity: VerifiedIdentity) -> TokenResponse:
    return TokenResponse(
        access_token=issuer.issue(identity),
        expires_in=int(issuer.lifetime.total_seconds()),
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
    summary="Log in with username and password",
)
async def login(
    credentials: tuple[str, str] = Depends(get_basic_auth_credentials),
    directory: UserDirectory = Depends(get_directory),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenResponse:
    """
    Issue a bearer token.

    Credentials (username:password) are provided via HTTP BASIC AUTH header.
    Unknown users and wrong passwords get the same 401.
    """
    username, password = credentials
    identity = await directory.authenticate(username, password)
    return _token_response(issuer, identity)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"}},
    summary="Refresh a bearer token",
)
async def refresh(
    identity: VerifiedIdentity = Depends(require_identity),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenResponse:
    """Issue a new 7-day token for the caller's verified identity."""
    return _token_response(issuer, identity)
