"""Acquirer manager -- registry and factory for acquirer classes.

The :class:`AcquirerManager` maps auth-type strings (``"basic"``,
``"remote_bearer"``, ...) to :class:`~authacquire.auth.base.Acquirer`
subclasses and builds an instance from a profile's
:class:`~authacquire.models.AuthConfig`.

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with every built-in acquirer.
"""

from __future__ import annotations

import logging
from typing import Optional

from authacquire.auth.base import Acquirer
from authacquire.exceptions import ConfigError
from authacquire.models import AuthConfig, Profile

logger = logging.getLogger(__name__)


class AcquirerManager:
    """Registry of acquirer classes keyed by auth type.

    Example::

        from authacquire.auth import AcquirerManager
        from authacquire.plugins.basic import BasicAcquirer

        manager = AcquirerManager()
        manager.register(BasicAcquirer)
        acquirer = manager.create(AuthConfig(type="basic", source="env:TOKEN"))
    """

    def __init__(self) -> None:
        self._acquirers: dict[str, type[Acquirer]] = {}

    def register(self, acquirer_cls: type[Acquirer]) -> None:
        """Register *acquirer_cls* under its ``auth_type`` and any ``aliases``.

        An existing registration for the same key is silently replaced.
        """
        for key in (acquirer_cls.auth_type, *acquirer_cls.aliases):
            self._acquirers[key] = acquirer_cls

    def get_acquirer_class(self, auth_type: str) -> type[Acquirer]:
        """Look up a registered class.

        Raises:
            ConfigError: If no acquirer is registered for *auth_type*.
        """
        acquirer_cls = self._acquirers.get(auth_type)
        if acquirer_cls is None:
            available = ", ".join(self.list_types()) or "(none)"
            raise ConfigError(
                f"No acquirer registered for type '{auth_type}'. "
                f"Available types: {available}"
            )
        return acquirer_cls

    def create(self, auth_config: Optional[AuthConfig]) -> Acquirer:
        """Build the acquirer described by *auth_config*.

        A missing auth section yields the no-op acquirer.

        Raises:
            ConfigError: If the type is unknown or the configuration is
                invalid.
        """
        if auth_config is None:
            from authacquire.plugins.noop import DefaultAcquirer

            return DefaultAcquirer()

        acquirer_cls = self.get_acquirer_class(auth_config.type)
        problems = acquirer_cls.validate_config(auth_config)
        if problems:
            raise ConfigError(
                f"Invalid '{auth_config.type}' auth config: " + "; ".join(problems)
            )
        acquirer = acquirer_cls.from_config(auth_config)
        logger.debug("Built %r for auth type '%s'", acquirer, auth_config.type)
        return acquirer

    def create_for_profile(self, profile: Profile) -> Acquirer:
        return self.create(profile.auth)

    def list_types(self) -> list[str]:
        """Return every registered key, aliases included, sorted."""
        return sorted(self._acquirers)


def create_default_manager() -> AcquirerManager:
    """Create an :class:`AcquirerManager` pre-loaded with all built-in acquirers.

    - ``none`` -- no header.
    - ``fixed`` -- a constant header value.
    - ``basic`` -- HTTP Basic credentials.
    - ``remote_bearer`` / ``jwt`` -- bearer token fetched and cached.
    """
    from authacquire.plugins.basic import BasicAcquirer
    from authacquire.plugins.fixed import FixedValueAcquirer
    from authacquire.plugins.noop import DefaultAcquirer
    from authacquire.plugins.remote_bearer import RemoteBearerTokenAcquirer

    manager = AcquirerManager()
    manager.register(DefaultAcquirer)
    manager.register(FixedValueAcquirer)
    manager.register(BasicAcquirer)
    manager.register(RemoteBearerTokenAcquirer)
    return manager
