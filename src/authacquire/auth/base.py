"""Abstract base class for credential acquirers.

An :class:`Acquirer` turns some credential strategy into the literal value
of an HTTP ``Authorization`` header (``"Basic abc=="``, ``"Bearer xyz"``).
An empty string is a valid result meaning "send no header".

To implement a new strategy, subclass :class:`Acquirer`, set
:attr:`~Acquirer.auth_type`, and implement :meth:`~Acquirer.acquire`. To
make it buildable from a profile, also implement
:meth:`~Acquirer.from_config` and register the class on an
:class:`~authacquire.auth.manager.AcquirerManager`.

See Also:
    :mod:`authacquire.auth.injector` for putting the value on a request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from authacquire.models import AuthConfig


class Acquirer(ABC):
    """Abstract base class for credential acquirers.

    Implementations must never mutate state visible outside the instance;
    caching acquirers keep their cache private.
    """

    auth_type: ClassVar[str]
    """Registry key matched against :attr:`AuthConfig.type`."""

    aliases: ClassVar[tuple[str, ...]] = ()
    """Extra registry keys accepted for this acquirer."""

    @abstractmethod
    def acquire(self) -> str:
        """Return the ``Authorization`` header value.

        Returns:
            The literal header value, or ``""`` when no header should be set.

        Raises:
            AcquireError: If the credential cannot be produced. No partial
                value is ever returned alongside a failure.
        """
        ...

    @classmethod
    def from_config(cls, auth_config: AuthConfig) -> Acquirer:
        """Build an instance from a profile's auth section.

        Raises:
            ConfigError: If the configuration is incomplete or the
                acquirer cannot be built from configuration at all.
        """
        from authacquire.exceptions import ConfigError

        raise ConfigError(f"Acquirer type '{cls.auth_type}' cannot be built from config")

    @classmethod
    def validate_config(cls, auth_config: AuthConfig) -> list[str]:
        """Return human-readable problems with *auth_config*; empty means valid."""
        return []

    def close(self) -> None:
        """Release resources held by the acquirer. The default does nothing."""

    def __enter__(self) -> Acquirer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
