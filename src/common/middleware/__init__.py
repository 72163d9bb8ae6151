"""Common middleware for EventPulse."""

from .observability import StructlogContextMiddleware

__all__ = ["StructlogContextMiddleware"]
