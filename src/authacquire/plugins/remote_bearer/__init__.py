"""Remote bearer token acquirer.

Fetches a bearer token from an HTTP endpoint, caches it, and refreshes it
only once the cache is within the configured buffer of expiring.

See Also:
    :class:`~authacquire.plugins.remote_bearer.plugin.RemoteBearerTokenAcquirer`
    :mod:`~authacquire.plugins.remote_bearer.parsers`
"""

from authacquire.plugins.remote_bearer.parsers import (
    SimpleBearer,
    default_expiration_parser,
    default_token_parser,
    expires_in_parser,
    raw_token_expiration_parser,
    raw_token_parser,
)
from authacquire.plugins.remote_bearer.plugin import (
    RemoteBearerOptions,
    RemoteBearerTokenAcquirer,
)

__all__ = [
    "RemoteBearerOptions",
    "RemoteBearerTokenAcquirer",
    "SimpleBearer",
    "default_expiration_parser",
    "default_token_parser",
    "expires_in_parser",
    "raw_token_expiration_parser",
    "raw_token_parser",
]
