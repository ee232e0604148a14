"""HTTP Basic authentication acquirer.

Encodes a ``username:password`` pair with Base64 and returns it as
``Basic <encoded>`` per :rfc:`7617`, or wraps a token that is already
encoded.

See Also:
    :class:`~authacquire.plugins.basic.plugin.BasicAcquirer`
"""

from authacquire.plugins.basic.plugin import BasicAcquirer, encode_basic_credentials

__all__ = ["BasicAcquirer", "encode_basic_credentials"]
