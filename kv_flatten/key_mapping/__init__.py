"""Composite key handling and nested reconstruction utilities."""

from .mapper import DelimiterPolicy, KeyComposer
from .nested import VALUE_KEY, unflatten


__all__ = ["VALUE_KEY", "DelimiterPolicy", "KeyComposer", "unflatten"]
