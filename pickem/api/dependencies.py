"""
FastAPI dependencies - Dependency injection factories.

Services are built per request from the long-lived collaborators that the
lifespan stores on ``app.state``: the repository, the credential hasher and
the token issuer/verifier.
"""

import logging

from fastapi import Depends, Request
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)

from pickem.domain.credentials import CredentialHasher
from pickem.domain.directory import UserDirectory
from pickem.domain.exceptions import AuthenticationFailed, InvalidCredentials
from pickem.domain.ports import UserRepository, VerifiedIdentity
from pickem.domain.registration import UserRegistrar
from pickem.domain.tokens import TokenIssuer, TokenVerifier

logger = logging.getLogger(__name__)


def get_repository(request: Request) -> UserRepository:
    """Get the user repository from app state."""
    return request.app.state.repository


def get_hasher(request: Request) -> CredentialHasher:
    """Get the credential hasher from app state."""
    return request.app.state.hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    """Get the token issuer from app state."""
    return request.app.state.token_issuer


def get_token_verifier(request: Request) -> TokenVerifier:
    """Get the token verifier from app state."""
    return request.app.state.token_verifier


def get_registrar(request: Request) -> UserRegistrar:
    """Create the registration service with injected dependencies."""
    return UserRegistrar(repository=get_repository(request), hasher=get_hasher(request))


def get_directory(request: Request) -> UserDirectory:
    """Create the user directory with injected dependencies."""
    return UserDirectory(repository=get_repository(request), hasher=get_hasher(request))


# Security schemes; auto_error is off so a missing header reaches our own 401 path.
# Malformed headers raise inside the scheme and are rewritten in pickem.api.main.
http_bearer = HTTPBearer(auto_error=False)
http_basic = HTTPBasic(auto_error=False)


def require_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> VerifiedIdentity:
    """
    Authorize a request from its ``Authorization: Bearer <token>`` header.

    A missing header (or another scheme) fails without touching the
    verifier. Every failure raises the bare AuthenticationFailed so callers
    cannot tell an expired token from a forged one.

    On success the identity is also stored on ``request.state.identity``.
    """
    if credentials is None:
        raise AuthenticationFailed()

    try:
        identity = verifier.verify(credentials.credentials)
    except AuthenticationFailed:
        raise AuthenticationFailed() from None

    request.state.identity = identity
    return identity


def get_basic_auth_credentials(
    credentials: HTTPBasicCredentials | None = Depends(http_basic),
) -> tuple[str, str]:
    """
    Extract credentials from an HTTP BASIC AUTH header.

    Returns:
        Tuple of (username, password)

    Raises:
        InvalidCredentials: Header missing or malformed
    """
    if credentials is None:
        raise InvalidCredentials()
    return credentials.username, credentials.password
