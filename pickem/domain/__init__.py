"""
Domain layer - Account and access-control logic with no web framework imports.

Defines the user entity, the persistence port, signup validation, password
hashing, bearer tokens, and the registration and directory services.
"""

from .credentials import CredentialHasher
from .directory import UserDirectory
from .exceptions import (
    AccountError,
    AuthenticationFailed,
    InternalFailure,
    InvalidCredentials,
    TokenExpired,
    TokenInvalid,
    UserNotFound,
    UsernameTaken,
    ValidationFailed,
)
from .ports import PublicUser, User, UserRepository, VerifiedIdentity
from .registration import UserRegistrar
from .tokens import TokenIssuer, TokenVerifier
from .validation import SignupData, validate_signup

__all__ = [
    "AccountError",
    "AuthenticationFailed",
    "CredentialHasher",
    "InternalFailure",
    "InvalidCredentials",
    "PublicUser",
    "SignupData",
    "TokenExpired",
    "TokenInvalid",
    "TokenIssuer",
    "TokenVerifier",
    "User",
    "UserDirectory",
    "UserNotFound",
    "UserRegistrar",
    "UserRepository",
    "UsernameTaken",
    "ValidationFailed",
    "VerifiedIdentity",
    "validate_signup",
]
