"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance, wires the lifespan
that builds the long-lived collaborators, and translates domain errors to
HTTP responses. That translation happens here and nowhere else:

- ValidationFailed and unparseable bodies -> 422 ``{code, reason, message, location}``
- AuthenticationFailed and framework 401s -> 401, one body for every cause
- anything else -> 500 ``{code: 500, message: "Internal server error"}``
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from psycopg_pool import AsyncConnectionPool
from starlette.exceptions import HTTPException as StarletteHTTPException

from pickem.adapters.repository.postgres import PostgresUserRepository, run_migrations
from pickem.api.routes import auth_router, users_router
from pickem.config.settings import get_settings
from pickem.domain.credentials import CredentialHasher
from pickem.domain.exceptions import AuthenticationFailed, InternalFailure, ValidationFailed
from pickem.domain.tokens import TokenIssuer, TokenVerifier

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {"name": "users", "description": "Signup, leaderboard and user profiles"},
    {"name": "auth", "description": "Bearer token login and refresh"},
]

INTERNAL_ERROR_BODY = {"code": 500, "message": "Internal server error"}
UNAUTHORIZED_BODY = {"code": 401, "message": "Unauthorized"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Loads settings once
    - Creates the database connection pool and runs migrations
    - Builds the hasher and token issuer/verifier from the settings
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    pool = AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,
    )
    await pool.open()

    logger.info("Running database migrations...")
    await run_migrations(pool)

    app.state.pool = pool
    app.state.repository = PostgresUserRepository(pool)
    app.state.hasher = CredentialHasher(settings)
    app.state.token_issuer = TokenIssuer(settings)
    app.state.token_verifier = TokenVerifier(settings)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    await pool.close()
    logger.info("Database connection pool closed")


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "code": 422,
            "reason": exc.reason,
            "message": exc.message,
            "location": exc.location,
        },
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Parser detail stays in the log
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content={
            "code": 422,
            "reason": ValidationFailed.reason,
            "message": "Invalid JSON",
            "location": "body",
        },
    )


async def authentication_failed_handler(
    request: Request, exc: AuthenticationFailed
) -> JSONResponse:
    # Same body and headers for every cause
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=UNAUTHORIZED_BODY,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Security schemes raise their own 401s (e.g. a malformed Basic header)
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        return await authentication_failed_handler(request, AuthenticationFailed())
    return await http_exception_handler(request, exc)


async def internal_failure_handler(request: Request, exc: InternalFailure) -> JSONResponse:
    logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR_BODY
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR_BODY
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register the domain error to HTTP response translation."""
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(AuthenticationFailed, authentication_failed_handler)
    app.add_exception_handler(InternalFailure, internal_failure_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def create_app() -> FastAPI:
    """Build the application with routers and error handlers."""
    application = FastAPI(
        title="pickem",
        description="Account and access-control API for a prediction-scoring app",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    install_exception_handlers(application)
    application.include_router(users_router, prefix="/users")
    application.include_router(auth_router, prefix="/auth")

    @application.get("/health")
    async def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with storage validation.

        Returns 200 OK if the application and its storage are healthy.
        """
        await request.app.state.repository.ping()
        return {"status": "healthy"}

    return application


app = create_app()
