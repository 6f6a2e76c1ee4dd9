"""Exceptions raised while flattening nested mappings."""

from __future__ import annotations


class FlattenError(Exception):
    """Base class for flattening failures.

    ``path`` is the composite key at which the failure was detected, or an
    empty string for the root mapping.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class FlattenDepthError(FlattenError):
    """Nesting exceeded the configured ``max_depth``."""


class CyclicDataError(FlattenError):
    """A mapping contains itself on its own ancestor chain."""


class InvalidKeyError(FlattenError, TypeError):
    """A mapping key is not a string."""


class DelimiterCollisionError(FlattenError, ValueError):
    """A key contains the delimiter under the ``reject`` policy."""
