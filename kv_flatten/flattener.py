"""Flatten nested mappings into single-level composite-key mappings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, override

from kv_flatten.errors import CyclicDataError, FlattenDepthError
from kv_flatten.key_mapping import DelimiterPolicy, KeyComposer
from kv_flatten.values import FlatMap, Leaf, NestedValue, is_nested


if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


logger = logging.getLogger(__name__)


def merge_into(target: FlatMap, source: Mapping[str, Leaf]) -> FlatMap:
    """Insert every entry of ``source`` into ``target``; later values win."""
    for key, value in source.items():
        _store(target, key, value)
    return target


def _store(target: FlatMap, key: str, value: Leaf) -> None:
    if key in target:
        logger.debug("overwriting flattened key %r", key)
    target[key] = value


class Flattener:
    """Reusable flattening configuration.

    Parameters
    ----------
    delimiter
        Separator placed between ancestor keys and the leaf key.
    policy
        What to do with keys that already contain ``delimiter``; see
        :class:`~kv_flatten.key_mapping.DelimiterPolicy`.
    max_depth
        Maximum number of mapping levels below the root. ``None`` means no
        limit; deeper input raises :class:`~kv_flatten.errors.FlattenDepthError`.
    """

    def __init__(
        self,
        delimiter: str = ".",
        *,
        policy: DelimiterPolicy | str = DelimiterPolicy.ACCEPT,
        max_depth: int | None = None,
    ) -> None:
        super().__init__()
        if max_depth is not None and (isinstance(max_depth, bool) or not isinstance(max_depth, int)):
            msg = f"max_depth must be an integer or None, got {type(max_depth).__name__}"
            raise TypeError(msg)
        if max_depth is not None and max_depth < 0:
            msg = "max_depth must not be negative"
            raise ValueError(msg)

        self._composer = KeyComposer(delimiter=delimiter, policy=policy)
        self._max_depth = max_depth

    @property
    def delimiter(self) -> str:
        return self._composer.delimiter

    @property
    def policy(self) -> DelimiterPolicy:
        return self._composer.policy

    @property
    def max_depth(self) -> int | None:
        return self._max_depth

    def flatten(self, data: Mapping[str, NestedValue]) -> FlatMap:
        """Return a new mapping with one entry per leaf reachable from ``data``."""
        if not is_nested(data):
            msg = f"data must be a mapping, got {type(data).__name__}"
            raise TypeError(msg)

        result: FlatMap = {}
        for key, value in data.items():
            composite = self._composer.join(None, key)
            if is_nested(value):
                _ = merge_into(result, self._flatten_prefixed(composite, value, data))
            else:
                _store(result, composite, value)
        return result

    def __call__(self, data: Mapping[str, NestedValue]) -> FlatMap:
        return self.flatten(data)

    def _flatten_prefixed(
        self,
        prefix: str,
        mapping: Mapping[str, NestedValue],
        root: Mapping[str, NestedValue],
    ) -> FlatMap:
        # Frames are (prefix, item iterator, mapping id); popping a frame only
        # after its iterator is exhausted keeps the emission order depth-first.
        result: FlatMap = {}
        self._check_depth(1, prefix)
        if mapping is root:
            msg = "mapping contains itself"
            raise CyclicDataError(msg, prefix)

        active = {id(root), id(mapping)}
        stack: list[tuple[str, Iterator[tuple[str, NestedValue]], int]] = [
            (prefix, iter(mapping.items()), id(mapping)),
        ]
        while stack:
            current_prefix, items, mapping_id = stack[-1]
            item = next(items, None)
            if item is None:
                _ = stack.pop()
                active.discard(mapping_id)
                continue

            key, value = item
            composite = self._composer.join(current_prefix, key)
            if not is_nested(value):
                _store(result, composite, value)
                continue

            self._check_depth(len(stack) + 1, composite)
            if id(value) in active:
                msg = "mapping contains itself"
                raise CyclicDataError(msg, composite)
            active.add(id(value))
            stack.append((composite, iter(value.items()), id(value)))
        return result

    def _check_depth(self, depth: int, path: str) -> None:
        if self._max_depth is not None and depth > self._max_depth:
            msg = f"nesting exceeds max_depth={self._max_depth}"
            raise FlattenDepthError(msg, path)

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(delimiter={self.delimiter!r}, policy={self.policy.value!r}, max_depth={self.max_depth!r})"


def flatten(
    data: Mapping[str, NestedValue],
    delimiter: str = ".",
    *,
    policy: DelimiterPolicy | str = DelimiterPolicy.ACCEPT,
    max_depth: int | None = None,
) -> FlatMap:
    """Flatten ``data`` so that no value in the result is a mapping.

    ``{"a": {"b": 1, "c": 2}}`` becomes ``{"a.b": 1, "a.c": 2}``. When two
    paths produce the same composite key, the one reached later in
    depth-first order wins.
    """
    return Flattener(delimiter, policy=policy, max_depth=max_depth).flatten(data)
