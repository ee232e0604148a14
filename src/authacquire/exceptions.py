"""Exception hierarchy for authacquire.

All exceptions inherit from :class:`AuthAcquireError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`authacquire.exit_codes`. The CLI entry point catches
``AuthAcquireError`` and exits with the matching code; library callers
catch the narrower classes to tell the failing stage apart.

Subclass hierarchy::

    AuthAcquireError (exit 1)
    +-- ConfigError                 (exit 1)
    +-- InvalidUsageError           (exit 2)
    +-- AcquireError                (exit 3)
    |   +-- EmptyCredentialsError
    |   +-- MissingCredentialsError
    |   +-- RequestBuildError
    |   +-- FetchError              (exit 6)
    |   +-- UnexpectedStatusError
    |   +-- ReadError
    |   +-- ParseError
    +-- InjectionError              (exit 3)
        +-- NilRequestError
        +-- UndefinedAcquirerError
        +-- FailedAcquisitionError
"""

from __future__ import annotations

from authacquire.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class AuthAcquireError(Exception):
    """Base exception for all authacquire errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(AuthAcquireError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(AuthAcquireError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


# --- Acquisition ---


class AcquireError(AuthAcquireError):
    """Base class for failures raised by :meth:`Acquirer.acquire`."""

    exit_code = EXIT_AUTH_FAILURE


class EmptyCredentialsError(AcquireError):
    """Raised when an acquirer is built from an empty credential.

    Use :class:`~authacquire.plugins.noop.DefaultAcquirer` when no
    credential is wanted.
    """


class MissingCredentialsError(AcquireError):
    """Raised by the Basic acquirer when it holds no encoded credential."""


class RequestBuildError(AcquireError):
    """Raised when the token request cannot be constructed."""


class FetchError(AcquireError):
    """Raised on network-level failures while fetching a token (timeout, DNS, refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class UnexpectedStatusError(AcquireError):
    """Raised when the token endpoint answers with a status other than 200.

    Args:
        status_code: The HTTP status returned by the endpoint.
        message: Optional override for the default message.
    """

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(
            message or f"received non 200 code acquiring bearer token: {status_code}"
        )
        self.status_code = status_code


class ReadError(AcquireError):
    """Raised when the token response body cannot be read."""


class ParseError(AcquireError):
    """Raised when the token or its expiration cannot be parsed from the response body."""


# --- Injection ---


class InjectionError(AuthAcquireError):
    """Base class for failures raised by :func:`~authacquire.auth.injector.add_auth`."""

    exit_code = EXIT_AUTH_FAILURE


class NilRequestError(InjectionError):
    """Raised when ``add_auth`` is given no request."""


class UndefinedAcquirerError(InjectionError):
    """Raised when ``add_auth`` is given no acquirer."""


class FailedAcquisitionError(InjectionError):
    """Raised when the acquirer fails; the original error is kept as :attr:`cause`.

    The exit code is taken from *cause* when it is an
    :class:`AuthAcquireError`, otherwise it is :data:`EXIT_AUTH_FAILURE`.

    Args:
        cause: The exception raised by the acquirer.
    """

    def __init__(self, cause: Exception):
        super().__init__(f"failed to acquire auth for request: {cause}")
        self.cause = cause
        self.exit_code = getattr(cause, "exit_code", EXIT_AUTH_FAILURE)
