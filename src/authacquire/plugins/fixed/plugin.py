"""Fixed-value acquirer.

:class:`FixedValueAcquirer` returns one constant header value, including
its scheme (``"Basic abc=="``, ``"Bearer xyz"``, ``"Token t"``). Use it
when the complete header value is already known.
"""

from __future__ import annotations

from authacquire.auth.base import Acquirer
from authacquire.config import resolve_credential
from authacquire.exceptions import EmptyCredentialsError
from authacquire.models import AuthConfig


class FixedValueAcquirer(Acquirer):
    """Return a constant ``Authorization`` value.

    Args:
        auth_value: The full header value.

    Raises:
        EmptyCredentialsError: If *auth_value* is empty. Use
            :class:`~authacquire.plugins.noop.DefaultAcquirer` instead.
    """

    auth_type = "fixed"

    def __init__(self, auth_value: str) -> None:
        if not auth_value:
            raise EmptyCredentialsError("Empty credentials are not valid")
        self._auth_value = auth_value

    def acquire(self) -> str:
        return self._auth_value

    @classmethod
    def from_config(cls, auth_config: AuthConfig) -> FixedValueAcquirer:
        """Resolve ``source`` into the header value.

        Raises:
            ConfigError: If the credential source cannot be resolved.
            EmptyCredentialsError: If it resolves to an empty string.
        """
        assert auth_config.source is not None  # validate_config guarantees this
        return cls(resolve_credential(auth_config.source))

    @classmethod
    def validate_config(cls, auth_config: AuthConfig) -> list[str]:
        errors: list[str] = []
        if not auth_config.source:
            errors.append("Fixed auth requires a 'source' for the header value")
        return errors
