"""Route group exports."""

from . import health, pos

__all__ = ["health", "pos"]
