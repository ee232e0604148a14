"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~authacquire.exceptions.AuthAcquireError` subclass.
Shell wrappers can inspect the exit code to tell a rejected configuration
from an unreachable token endpoint without parsing stderr.

Example::

    $ authacquire token --profile billing
    $ echo $?
    6   # EXIT_CONNECTION_ERROR -- token endpoint unreachable
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""A credential could not be acquired or injected."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred while contacting the token endpoint."""
