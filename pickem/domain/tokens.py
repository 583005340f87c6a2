"""
Bearer tokens - JWT issuance and verification.

Tokens are HS256 JWTs signed with the process-wide secret from Settings.
Claims: ``username``, ``name``, ``sub`` (= username), ``iat`` and ``exp``
(issue time + 7 days). Only HS256 is accepted on the way back in.

The verifier raises TokenExpired or TokenInvalid. Both are
AuthenticationFailed and are answered identically at the HTTP boundary.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from pickem.config.settings import Settings

from .exceptions import TokenExpired, TokenInvalid
from .ports import VerifiedIdentity

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(days=7)


class TokenIssuer:
    """Creates signed bearer tokens."""

    lifetime = TOKEN_LIFETIME

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.jwt_secret.get_secret_value()

    def issue(self, identity: VerifiedIdentity) -> str:
        """Sign a token for ``identity`` valid for TOKEN_LIFETIME."""
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "username": identity.username,
            "name": identity.name,
            "sub": identity.username,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)


class TokenVerifier:
    """Validates inbound bearer tokens against the shared secret."""

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.jwt_secret.get_secret_value()

    def verify(self, token: str) -> VerifiedIdentity:
        """
        Decode ``token`` and return the identity it carries.

        Raises:
            TokenExpired: Signature valid, exp in the past
            TokenInvalid: Bad signature, wrong algorithm, malformed token or
                missing claims
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected bearer token: expired")
            raise TokenExpired() from None
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected bearer token: %s", type(exc).__name__)
            raise TokenInvalid() from None

        subject = claims["sub"]
        name = claims.get("name", "")
        if not isinstance(subject, str) or not subject or not isinstance(name, str):
            logger.debug("Rejected bearer token: bad identity claims")
            raise TokenInvalid()

        return VerifiedIdentity(username=subject, name=name)
