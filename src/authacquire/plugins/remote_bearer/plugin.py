"""Remote bearer token acquirer with expiry-aware caching.

This module provides :class:`RemoteBearerTokenAcquirer`, which implements
the ``remote_bearer`` auth type (alias ``jwt``). On a cache miss it sends a
single ``GET`` with an empty JSON body to the configured token endpoint,
parses the token and its expiration from the response, and returns
``"Bearer <token>"``. The value is reused until ``now + buffer`` reaches
the expiration; the buffer keeps a token from expiring while the request
it authenticates is still in flight, so set it above typical latency.

Configuration (:class:`RemoteBearerOptions`) is immutable. The cache is a
separate :class:`_CacheState` replaced under a lock, so concurrent callers
sharing one acquirer trigger at most one fetch per staleness window.

Failures are raised to the caller and leave the cache stale; an expired
token is never served as a fallback and nothing is retried internally.

See Also:
    :mod:`authacquire.plugins.remote_bearer.parsers` for the response parsers.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from authacquire.auth.base import Acquirer
from authacquire.exceptions import (
    AcquireError,
    ConfigError,
    FetchError,
    ParseError,
    ReadError,
    RequestBuildError,
    UnexpectedStatusError,
)
from authacquire.models import AuthConfig
from authacquire.plugins.remote_bearer.parsers import (
    PARSER_PAIRS,
    Clock,
    ExpirationParser,
    TokenParser,
    default_token_parser,
    expires_in_parser,
    utcnow,
)

logger = logging.getLogger(__name__)

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


class RemoteBearerOptions(BaseModel):
    """Immutable configuration of a :class:`RemoteBearerTokenAcquirer`.

    The parser fields are excluded from serialisation; when left ``None``
    the acquirer uses the ``expires_in`` / ``serviceAccessToken`` pair.

    Example::

        RemoteBearerOptions(
            auth_url="https://issuer.example.com/token",
            timeout=5,
            buffer=30,
            request_headers={"X-Client-Id": "billing"},
        )
    """

    model_config = ConfigDict(frozen=True)

    auth_url: str
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    buffer: float = Field(
        default=0.0, ge=0, description="Refresh this many seconds before expiry"
    )
    request_headers: dict[str, str] = Field(default_factory=dict)
    parse_token: Optional[TokenParser] = Field(default=None, exclude=True)
    parse_expiration: Optional[ExpirationParser] = Field(default=None, exclude=True)


@dataclass(frozen=True)
class _CacheState:
    """Last fetched credential and the instant it expires."""

    auth_value: str = ""
    expires: datetime = field(default=_EPOCH)

    def is_fresh(self, now: datetime, buffer: timedelta) -> bool:
        return now + buffer < self.expires


class RemoteBearerTokenAcquirer(Acquirer):
    """Fetch a bearer token from a remote endpoint and cache it until near expiry.

    Args:
        options: Endpoint, timeout, buffer, headers and parsers.
        client: Optional :class:`httpx.Client` used for the token request.
            When omitted, the acquirer creates and owns one; call
            :meth:`close` (or use the acquirer as a context manager) to
            release it.
        clock: Returns the current time as an aware datetime. Defaults to
            UTC wall-clock time.
    """

    auth_type = "remote_bearer"
    aliases = ("jwt",)

    def __init__(
        self,
        options: RemoteBearerOptions,
        client: Optional[httpx.Client] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._options = options
        self._clock: Clock = clock or utcnow
        self._buffer = timedelta(seconds=options.buffer)
        self._parse_token: TokenParser = options.parse_token or default_token_parser
        self._parse_expiration: ExpirationParser = (
            options.parse_expiration or expires_in_parser(self._clock)
        )
        self._client = client
        self._owns_client = client is None
        self._cache = _CacheState()
        self._lock = threading.Lock()

    @property
    def options(self) -> RemoteBearerOptions:
        return self._options

    @property
    def expires(self) -> datetime:
        """Expiration of the cached credential (the epoch when nothing is cached)."""
        return self._cache.expires

    def acquire(self) -> str:
        """Return the cached ``Bearer`` value, fetching a new one if stale.

        Raises:
            RequestBuildError: If the token request cannot be built.
            FetchError: On transport failures and timeouts.
            UnexpectedStatusError: If the endpoint does not answer 200.
            ReadError: If the response body cannot be read.
            ParseError: If either parser rejects the body.
        """
        with self._lock:
            if self._cache.is_fresh(self._clock(), self._buffer):
                logger.debug("Using cached bearer token from %s", self._options.auth_url)
                return self._cache.auth_value

            try:
                auth_value, expires = self._fetch()
            except AcquireError as exc:
                logger.warning(
                    "Bearer token fetch from %s failed: %s", self._options.auth_url, exc
                )
                raise

            self._cache = _CacheState(auth_value=auth_value, expires=expires)
            logger.info(
                "Fetched bearer token from %s, expires %s",
                self._options.auth_url,
                expires.isoformat(),
            )
            return auth_value

    def invalidate(self) -> None:
        """Drop the cached credential so the next :meth:`acquire` fetches."""
        with self._lock:
            self._cache = _CacheState()

    def close(self) -> None:
        """Close the HTTP client if this acquirer created it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __repr__(self) -> str:
        return f"RemoteBearerTokenAcquirer(auth_url={self._options.auth_url!r})"

    # ------------------------------------------------------------------ #
    # Fetch pipeline
    # ------------------------------------------------------------------ #

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._options.timeout)
        return self._client

    def _fetch(self) -> tuple[str, datetime]:
        """Run one request-read-parse cycle; the cache is not touched here."""
        url = self._options.auth_url
        client = self._get_client()

        headers = httpx.Headers({"Content-Type": "application/json"})
        headers.update(self._options.request_headers)
        try:
            request = client.build_request(
                "GET",
                url,
                headers=headers,
                content=b"{}",
                timeout=self._options.timeout,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise RequestBuildError(
                f"failed to create new request for bearer token: {exc}"
            ) from exc

        try:
            response = client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise FetchError(
                f"error making request to '{url}' to acquire bearer token: {exc}"
            ) from exc

        try:
            if response.status_code != httpx.codes.OK:
                raise UnexpectedStatusError(response.status_code)
            try:
                body = response.read()
            except (httpx.HTTPError, httpx.StreamError) as exc:
                raise ReadError(f"error reading HTTP response body: {exc}") from exc
        finally:
            response.close()

        return self._parse(body)

    def _parse(self, body: bytes) -> tuple[str, datetime]:
        try:
            token = self._parse_token(body)
            expires = self._parse_expiration(body)
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(
                f"error parsing bearer token from http response body: {exc}"
            ) from exc

        if not isinstance(expires, datetime):
            raise ParseError(
                f"expiration parser returned {type(expires).__name__}, expected datetime"
            )
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return f"Bearer {token}", expires

    # ------------------------------------------------------------------ #
    # Config
    # ------------------------------------------------------------------ #

    @classmethod
    def from_config(cls, auth_config: AuthConfig) -> RemoteBearerTokenAcquirer:
        """Build from ``auth_url``, ``timeout``, ``buffer``, ``request_headers``
        and the ``token_parser`` pair name."""
        assert auth_config.auth_url is not None  # validate_config guarantees this
        parse_token, parse_expiration = PARSER_PAIRS[auth_config.token_parser]
        kwargs: dict[str, Any] = {
            "auth_url": auth_config.auth_url,
            "timeout": auth_config.timeout,
            "buffer": auth_config.buffer,
            "request_headers": auth_config.request_headers,
            "parse_token": parse_token,
            "parse_expiration": parse_expiration,
        }
        try:
            options = RemoteBearerOptions(**kwargs)
        except ValueError as exc:
            raise ConfigError(f"Invalid remote bearer options: {exc}") from exc
        return cls(options)

    @classmethod
    def validate_config(cls, auth_config: AuthConfig) -> list[str]:
        errors: list[str] = []
        if not auth_config.auth_url:
            errors.append("Remote bearer auth requires 'auth_url'")
        if auth_config.token_parser not in PARSER_PAIRS:
            known = ", ".join(sorted(PARSER_PAIRS))
            errors.append(
                f"Unknown token_parser '{auth_config.token_parser}' (known: {known})"
            )
        return errors
