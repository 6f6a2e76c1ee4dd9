"""Nested structure reconstruction from flattened composite keys."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .mapper import DelimiterPolicy, KeyComposer


if TYPE_CHECKING:
    from collections.abc import Mapping


logger = logging.getLogger(__name__)

VALUE_KEY = "_value"


def unflatten(
    flat: Mapping[str, Any],
    delimiter: str = ".",
    *,
    policy: DelimiterPolicy | str = DelimiterPolicy.ACCEPT,
) -> dict[str, Any]:
    """Rebuild nested dicts from a flat composite-key mapping.

    A key that is both a leaf and the prefix of other keys keeps its leaf
    under ``"_value"``, so ``{"a": 1, "a.b": 2}`` becomes
    ``{"a": {"_value": 1, "b": 2}}`` whichever of the two comes first.

    ``"_value"`` is not escaped: a real ``"a._value"`` key lands in the same
    slot, and whichever of the two is stored last wins.
    """
    composer = KeyComposer(delimiter=delimiter, policy=policy)
    result: dict[str, Any] = {}
    # Ids of the dicts created here, to tell them apart from dict-valued leaves.
    branches = {id(result)}

    for composite, value in flat.items():
        *parents, leaf = composer.split(composite)
        node = result
        for part in parents:
            child = node.get(part)
            if child is None and part not in node:
                child = node[part] = {}
                branches.add(id(child))
            elif id(child) not in branches:
                logger.debug("key %r is both a leaf and a prefix; keeping leaf under %r", part, VALUE_KEY)
                child = node[part] = {VALUE_KEY: child}
                branches.add(id(child))
            node = child

        existing = node.get(leaf)
        if existing is not None and id(existing) in branches:
            logger.debug("key %r is both a leaf and a prefix; keeping leaf under %r", composite, VALUE_KEY)
            existing[VALUE_KEY] = value
        else:
            node[leaf] = value
    return result
