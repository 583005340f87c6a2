"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Settings with a known secret and a cheap bcrypt cost
- Domain collaborators (hasher, token issuer/verifier)
- An in-memory repository and an app/test client wired to it
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pickem.adapters.repository.memory import InMemoryUserRepository
from pickem.api.main import create_app
from pickem.config.settings import Settings
from pickem.domain.credentials import CredentialHasher
from pickem.domain.ports import VerifiedIdentity
from pickem.domain.tokens import TokenIssuer, TokenVerifier
from tests.helpers import TEST_SECRET


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any .env file."""
    return Settings(_env_file=None, jwt_secret=TEST_SECRET, bcrypt_cost=4)


@pytest.fixture
def hasher(settings: Settings) -> CredentialHasher:
    return CredentialHasher(settings)


@pytest.fixture
def issuer(settings: Settings) -> TokenIssuer:
    return TokenIssuer(settings)


@pytest.fixture
def verifier(settings: Settings) -> TokenVerifier:
    return TokenVerifier(settings)


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def app(
    repository: InMemoryUserRepository,
    hasher: CredentialHasher,
    issuer: TokenIssuer,
    verifier: TokenVerifier,
) -> FastAPI:
    """Application with state wired by hand (the lifespan is not run)."""
    test_app = create_app()
    test_app.state.repository = repository
    test_app.state.hasher = hasher
    test_app.state.token_issuer = issuer
    test_app.state.token_verifier = verifier
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


@pytest.fixture
def auth_header(issuer: TokenIssuer) -> dict[str, str]:
    """Authorization header carrying a valid token."""
    token = issuer.issue(VerifiedIdentity(username="exampleUser", name="exampleName"))
    return {"Authorization": f"Bearer {token}"}
