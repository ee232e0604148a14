"""No-op acquirer.

:class:`DefaultAcquirer` always returns an empty credential, which
:func:`~authacquire.auth.injector.add_auth` treats as "no header".
"""

from __future__ import annotations

from authacquire.auth.base import Acquirer
from authacquire.models import AuthConfig


class DefaultAcquirer(Acquirer):
    """Acquirer that never produces a credential."""

    auth_type = "none"

    def acquire(self) -> str:
        return ""

    @classmethod
    def from_config(cls, auth_config: AuthConfig) -> DefaultAcquirer:
        return cls()
