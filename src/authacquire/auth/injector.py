"""Header injection -- put an acquired credential on an outbound request.

:func:`add_auth` is the single place where an acquirer's result touches a
request. :class:`AcquirerAuth` wraps it as an :class:`httpx.Auth` so that
every request sent through an :class:`httpx.Client` (or
:class:`httpx.AsyncClient`) gets the header.

The only field ever touched is ``Authorization``, and only after the
acquirer has fully succeeded.
"""

from __future__ import annotations

import logging
from typing import Generator, Optional

import httpx

from authacquire.auth.base import Acquirer
from authacquire.exceptions import (
    FailedAcquisitionError,
    NilRequestError,
    UndefinedAcquirerError,
)

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"


def add_auth(request: Optional[httpx.Request], acquirer: Optional[Acquirer]) -> None:
    """Acquire a credential and set it as the request's ``Authorization`` header.

    A non-empty credential overwrites any existing ``Authorization`` value.
    An empty credential leaves the headers untouched; this is how the
    no-op acquirer opts a request out of authentication.

    Args:
        request: The outbound request. Any object with a mutable
            ``headers`` mapping works.
        acquirer: The strategy providing the header value.

    Raises:
        NilRequestError: If *request* is ``None``. The acquirer is not called.
        UndefinedAcquirerError: If *acquirer* is ``None``.
        FailedAcquisitionError: If the acquirer raised; the original error
            is available as ``.cause`` and ``__cause__``.
    """
    if request is None:
        raise NilRequestError("can't add authorization to nil request")
    if acquirer is None:
        raise UndefinedAcquirerError("acquirer is undefined")

    try:
        auth = acquirer.acquire()
    except Exception as exc:
        raise FailedAcquisitionError(exc) from exc

    if auth:
        request.headers[AUTHORIZATION_HEADER] = auth
    else:
        logger.debug("%r returned no credential; leaving headers untouched", acquirer)


class AcquirerAuth(httpx.Auth):
    """:class:`httpx.Auth` adapter running :func:`add_auth` on each request.

    Example::

        with httpx.Client(auth=AcquirerAuth(acquirer)) as client:
            client.get("https://api.example.com/things")

    The acquirer is synchronous; with :class:`httpx.AsyncClient` a stale
    remote bearer acquirer blocks the event loop for the duration of its
    token fetch.
    """

    def __init__(self, acquirer: Acquirer) -> None:
        self._acquirer = acquirer

    @property
    def acquirer(self) -> Acquirer:
        return self._acquirer

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        add_auth(request, self._acquirer)
        yield request
