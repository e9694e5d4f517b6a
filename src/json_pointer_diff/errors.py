"""Exception types raised by json-pointer-diff."""

from __future__ import annotations

__all__ = ["DiffConfigError"]


class DiffConfigError(ValueError):
    """A diff configuration rule was rejected at registration time."""
