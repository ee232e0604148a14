"""Fixed-value acquirer for a pre-built ``Authorization`` header value."""

from authacquire.plugins.fixed.plugin import FixedValueAcquirer

__all__ = ["FixedValueAcquirer"]
