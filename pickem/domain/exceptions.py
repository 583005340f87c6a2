"""
Domain exceptions - Semantic error types for accounts and access control.

Three kinds exist and nothing else is raised on purpose by the domain:

- ValidationFailed: client input broke a field contract (carries the field
  and a human message).
- AuthenticationFailed: any authentication failure. Subclasses exist so the
  process can log what happened, but they carry no payload and are all
  answered identically.
- InternalFailure: anything the client cannot fix.

Mapping to HTTP status codes happens in the API layer only.
"""


class AccountError(Exception):
    """Base class for account domain errors."""

    pass


class ValidationFailed(AccountError):
    """Input violates a field contract."""

    reason = "ValidationError"

    def __init__(self, location: str, message: str) -> None:
        super().__init__(f"{location}: {message}")
        self.location = location
        self.message = message


class UsernameTaken(ValidationFailed):
    """Another user already holds this username."""

    def __init__(self) -> None:
        super().__init__("username", "Username already taken")


class AuthenticationFailed(AccountError):
    """Caller could not be authenticated."""

    pass


class TokenExpired(AuthenticationFailed):
    """Token signature is valid but its exp claim is in the past."""

    pass


class TokenInvalid(AuthenticationFailed):
    """Token is malformed, forged, or signed with another algorithm."""

    pass


class InvalidCredentials(AuthenticationFailed):
    """Username/password pair does not match a stored user."""

    pass


class InternalFailure(AccountError):
    """Failure the client cannot act on."""

    pass


class UserNotFound(InternalFailure):
    """No user with the requested username."""

    pass
