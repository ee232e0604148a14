"""No-op acquirer: the default when no authentication is configured."""

from authacquire.plugins.noop.plugin import DefaultAcquirer

__all__ = ["DefaultAcquirer"]
