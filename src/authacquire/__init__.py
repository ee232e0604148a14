"""authacquire -- pluggable ``Authorization`` header acquisition for HTTP clients.

An *acquirer* produces the literal value of an ``Authorization`` header.
Callers pick one strategy (usually from a configured profile), then hand it
to :func:`~authacquire.auth.injector.add_auth` together with an outbound
request, or install it on an :class:`httpx.Client` through
:class:`~authacquire.auth.injector.AcquirerAuth`.

Built-in strategies:

* ``none`` -- :class:`~authacquire.plugins.noop.DefaultAcquirer`, never
  sets a header.
* ``fixed`` -- :class:`~authacquire.plugins.fixed.FixedValueAcquirer`, a
  constant header value.
* ``basic`` -- :class:`~authacquire.plugins.basic.BasicAcquirer`, HTTP
  Basic credentials encoded once at construction.
* ``remote_bearer`` --
  :class:`~authacquire.plugins.remote_bearer.RemoteBearerTokenAcquirer`,
  fetches a bearer token over HTTP and caches it until shortly before
  it expires.

Typical usage::

    import httpx

    from authacquire import AcquirerAuth
    from authacquire.plugins.remote_bearer import (
        RemoteBearerOptions,
        RemoteBearerTokenAcquirer,
    )

    acquirer = RemoteBearerTokenAcquirer(
        RemoteBearerOptions(auth_url="https://issuer.example.com/token", buffer=30)
    )
    with httpx.Client(auth=AcquirerAuth(acquirer)) as client:
        client.get("https://api.example.com/things")

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic configuration models.
    config: XDG-aware profile storage and credential source resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

from authacquire.auth.base import Acquirer
from authacquire.auth.injector import AcquirerAuth, add_auth
from authacquire.auth.manager import AcquirerManager, create_default_manager

__version__ = "0.1.0"

__all__ = [
    "Acquirer",
    "AcquirerAuth",
    "AcquirerManager",
    "add_auth",
    "create_default_manager",
]
