"""CEL domain layer."""

from .records import CelEventRecord

__all__ = ["CelEventRecord"]
