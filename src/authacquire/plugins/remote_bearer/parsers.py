"""Token and expiration parsers for the remote bearer acquirer.

Both parsers of a pair receive the identical raw response body. A token
parser returns the bare token (without ``Bearer``); an expiration parser
returns the absolute instant at which the token expires, as an aware
:class:`~datetime.datetime`.

Two pairs ship with the package:

* **simple** -- :func:`default_token_parser` and
  :func:`default_expiration_parser` read a JSON object of the form
  ``{"expires_in": 60, "serviceAccessToken": "..."}``, with
  ``expires_in`` in seconds relative to the moment of parsing.
* **raw** -- :func:`raw_token_parser` takes the body itself as the token
  and :func:`raw_token_expiration_parser` reads the ``exp`` claim of that
  JWT without verifying its signature.

Parsers signal failure by raising
:class:`~authacquire.exceptions.ParseError`; any other exception raised by a
custom parser is wrapped into one by the acquirer.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from authacquire.exceptions import ParseError

TokenParser = Callable[[bytes], str]
ExpirationParser = Callable[[bytes], datetime]
Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SimpleBearer(BaseModel):
    """Default token endpoint response schema."""

    model_config = ConfigDict(populate_by_name=True)

    expires_in: float = Field(allow_inf_nan=False)
    token: str = Field(alias="serviceAccessToken")


def _load_simple_bearer(data: bytes) -> SimpleBearer:
    try:
        return SimpleBearer.model_validate_json(data)
    except ValidationError as exc:
        raise ParseError(f"unable to parse bearer token response: {exc}") from exc


def default_token_parser(data: bytes) -> str:
    """Return ``serviceAccessToken`` from a JSON token response."""
    return _load_simple_bearer(data).token


def expires_in_parser(clock: Clock = utcnow) -> ExpirationParser:
    """Build an expiration parser reading ``expires_in`` relative to *clock*.

    The remote bearer acquirer builds one bound to its own clock when no
    expiration parser is configured, so the expiry shares the time base
    used for the freshness check.
    """

    def parse_expiration(data: bytes) -> datetime:
        bearer = _load_simple_bearer(data)
        try:
            return clock() + timedelta(seconds=bearer.expires_in)
        except OverflowError as exc:
            raise ParseError(f"expires_in out of range: {bearer.expires_in}") from exc

    return parse_expiration


default_expiration_parser: ExpirationParser = expires_in_parser()
"""``expires_in`` parser bound to the wall clock."""


def raw_token_parser(data: bytes) -> str:
    """Use the whole response body, stripped of surrounding whitespace, as the token."""
    try:
        token = data.decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        raise ParseError(f"token response is not valid UTF-8: {exc}") from exc
    if not token:
        raise ParseError("token response body is empty")
    return token


def raw_token_expiration_parser(data: bytes) -> datetime:
    """Read the ``exp`` claim of the JWT in the response body.

    The signature and time-based claims are not verified; the token is
    only inspected to learn when to fetch a new one.
    """
    token = raw_token_parser(data)
    try:
        claims = jwt.decode(
            token,
            options={
                "verify_signature": False,
                "verify_exp": False,
                "verify_nbf": False,
                "verify_iat": False,
                "verify_aud": False,
                "verify_iss": False,
            },
        )
    except jwt.PyJWTError as exc:
        raise ParseError(f"unable to decode jwt: {exc}") from exc

    if "exp" not in claims:
        raise ParseError("missing exp claim in jwt")
    exp = claims["exp"]
    if isinstance(exp, bool):
        raise ParseError(f"exp claim is not numeric: {exp!r}")
    try:
        return datetime.fromtimestamp(int(float(exp)), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise ParseError(f"exp claim is not a valid timestamp: {exp!r}") from exc


PARSER_PAIRS: dict[str, tuple[TokenParser, ExpirationParser | None]] = {
    "simple": (default_token_parser, None),
    "raw": (raw_token_parser, raw_token_expiration_parser),
}
"""Parser pairs selectable through ``AuthConfig.token_parser``.

``None`` means the acquirer's clock-bound ``expires_in`` parser.
"""
