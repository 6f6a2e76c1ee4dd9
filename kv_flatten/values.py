"""
Value types accepted and produced by the flattener.

A nested value is either a mapping with string keys or a leaf. ``Scalar``
lists the usual event payload scalars; ``Leaf`` adds the containers that are
kept whole instead of being descended into. At runtime any non-mapping object
is treated as a leaf and passed through untouched, the aliases only describe
what payloads normally carry.

Examples
--------
Nested:
    {"context": {"device": {"type": "mobile"}}, "tags": ["a", "b"]}

Flat:
    {"context.device.type": "mobile", "tags": ["a", "b"]}
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from datetime import date
from typing import Any, TypeAlias, TypeGuard


# ``datetime`` is a subclass of ``date``.
Scalar: TypeAlias = str | int | float | bool | bytes | date | None
Leaf: TypeAlias = Scalar | Sequence[Any] | Set[Any]
NestedValue: TypeAlias = Leaf | Mapping[str, "NestedValue"]
FlatMap: TypeAlias = dict[str, Leaf]


def is_nested(value: object) -> TypeGuard[Mapping[str, NestedValue]]:
    """Return True when ``value`` is a mapping that must be descended into."""
    return isinstance(value, Mapping)


__all__ = ["FlatMap", "Leaf", "NestedValue", "Scalar", "is_nested"]
