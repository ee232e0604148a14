"""HTTP Basic authentication acquirer.

This module provides :class:`BasicAcquirer`, which implements the ``basic``
auth type. The credential is Base64-encoded once when the acquirer is
built, so :meth:`~BasicAcquirer.acquire` only concatenates the scheme.

See Also:
    :class:`authacquire.auth.base.Acquirer` for the base interface.
"""

from __future__ import annotations

import base64

from authacquire.auth.base import Acquirer
from authacquire.config import resolve_credential
from authacquire.exceptions import MissingCredentialsError
from authacquire.models import AuthConfig


def encode_basic_credentials(username: str, password: str) -> str:
    """Return standard Base64 of ``"<username>:<password>"`` (UTF-8)."""
    raw = f"{username}:{password}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


class BasicAcquirer(Acquirer):
    """Return ``"Basic <encoded>"`` for a stored, already-encoded credential.

    The stored value is used verbatim; build from a plaintext pair with
    :meth:`from_plain_text`. An empty credential is accepted at
    construction and reported on every :meth:`acquire` call.

    Args:
        encoded_credentials: The Base64 token placed after ``Basic``.

    Example::

        BasicAcquirer.from_plain_text("gopher", "hello").acquire()
        # 'Basic Z29waGVyOmhlbGxv'
    """

    auth_type = "basic"

    def __init__(self, encoded_credentials: str) -> None:
        self._encoded_credentials = encoded_credentials

    @classmethod
    def from_plain_text(cls, username: str, password: str) -> BasicAcquirer:
        """Encode *username* and *password* once and wrap the result."""
        return cls(encode_basic_credentials(username, password))

    def acquire(self) -> str:
        """Return the Basic header value.

        Raises:
            MissingCredentialsError: If no encoded credential is stored.
        """
        if not self._encoded_credentials:
            raise MissingCredentialsError("no credentials found")
        return f"Basic {self._encoded_credentials}"

    @classmethod
    def from_config(cls, auth_config: AuthConfig) -> BasicAcquirer:
        """Build from ``username`` + ``password_source`` or from ``source``.

        ``source`` must resolve to the encoded token. When ``username`` is
        set, ``password_source`` is resolved and the pair is encoded.

        Raises:
            ConfigError: If a credential source cannot be resolved.
        """
        if auth_config.username is not None:
            assert auth_config.password_source is not None
            password = resolve_credential(auth_config.password_source)
            return cls.from_plain_text(auth_config.username, password)
        assert auth_config.source is not None
        return cls(resolve_credential(auth_config.source))

    @classmethod
    def validate_config(cls, auth_config: AuthConfig) -> list[str]:
        """Require either ``source`` or a ``username``/``password_source`` pair."""
        errors: list[str] = []
        if auth_config.username is not None:
            if not auth_config.password_source:
                errors.append("Basic auth with 'username' requires 'password_source'")
        elif not auth_config.source:
            errors.append(
                "Basic auth requires a 'source' for the encoded credential, "
                "or 'username' and 'password_source'"
            )
        return errors

    def __repr__(self) -> str:
        state = "set" if self._encoded_credentials else "empty"
        return f"BasicAcquirer(credentials={state})"
