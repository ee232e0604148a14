"""Credential acquisition core.

- :class:`Acquirer` -- abstract base class every strategy implements.
- :func:`add_auth` -- sets the acquired value on a request's
  ``Authorization`` header.
- :class:`AcquirerAuth` -- :class:`httpx.Auth` adapter around :func:`add_auth`.
- :class:`AcquirerManager` / :func:`create_default_manager` -- build an
  acquirer from a profile's auth configuration.

Typical usage::

    from authacquire.auth import add_auth, create_default_manager

    acquirer = create_default_manager().create_for_profile(profile)
    add_auth(request, acquirer)
"""

from authacquire.auth.base import Acquirer
from authacquire.auth.injector import AcquirerAuth, add_auth
from authacquire.auth.manager import AcquirerManager, create_default_manager

__all__ = [
    "Acquirer",
    "AcquirerAuth",
    "AcquirerManager",
    "add_auth",
    "create_default_manager",
]
