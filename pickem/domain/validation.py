"""
Signup validation pipeline.

Checks run in a fixed order and stop at the first violation, so a given
payload always reports the same field:

1. required fields present
2. required fields are strings
3. username and password have no surrounding whitespace
4. sizes (any too-short field is reported before any too-long field)

Lengths count Unicode code points and stripping uses Python's whitespace
set, so one emoji is one character and U+FEFF is not trimmed.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple

from .exceptions import ValidationFailed

REQUIRED_FIELDS = ("username", "password", "name")
EXPLICITLY_TRIMMED_FIELDS = ("username", "password")

# bcrypt only looks at the first 72 bytes of a password
SIZED_FIELDS: dict[str, dict[str, int]] = {
    "username": {"min": 1, "max": 17},
    "password": {"min": 5, "max": 72},
    "name": {"max": 17},
}


class SignupData(NamedTuple):
    """Normalized signup input."""

    username: str
    password: str
    name: str


def validate_signup(payload: Any) -> SignupData:
    """
    Validate a raw signup payload.

    Args:
        payload: Decoded request body. Anything that is not a mapping is
            treated as an empty one.

    Returns:
        SignupData with ``name`` stripped

    Raises:
        ValidationFailed: On the first violated check
    """
    body: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}

    missing = next((f for f in REQUIRED_FIELDS if f not in body), None)
    if missing is not None:
        raise ValidationFailed(missing, "Missing field")

    non_string = next((f for f in REQUIRED_FIELDS if not isinstance(body[f], str)), None)
    if non_string is not None:
        raise ValidationFailed(non_string, "Incorrect field type: expected string")

    untrimmed = next(
        (f for f in EXPLICITLY_TRIMMED_FIELDS if body[f].strip() != body[f]), None
    )
    if untrimmed is not None:
        raise ValidationFailed(untrimmed, "Cannot start or end with whitespace")

    _check_sizes(body)

    return SignupData(
        username=body["username"],
        password=body["password"],
        name=body["name"].strip(),
    )


def _check_sizes(body: Mapping[str, str]) -> None:
    too_small = next(
        (
            f
            for f, bounds in SIZED_FIELDS.items()
            if "min" in bounds and len(body[f].strip()) < bounds["min"]
        ),
        None,
    )
    if too_small is not None:
        minimum = SIZED_FIELDS[too_small]["min"]
        raise ValidationFailed(too_small, f"Must be at least {minimum} characters long")

    too_large = next(
        (
            f
            for f, bounds in SIZED_FIELDS.items()
            if "max" in bounds and len(body[f].strip()) > bounds["max"]
        ),
        None,
    )
    if too_large is not None:
        maximum = SIZED_FIELDS[too_large]["max"]
        raise ValidationFailed(too_large, f"Must be at most {maximum} characters long")
