"""Composite key building for flattened mappings."""

from __future__ import annotations

from enum import StrEnum

from kv_flatten.errors import DelimiterCollisionError, InvalidKeyError


_ESCAPE_CHAR = "~"
_RESERVED_CHARS = "~01"


class DelimiterPolicy(StrEnum):
    """How keys that contain the delimiter are handled."""

    ACCEPT = "accept"
    ESCAPE = "escape"
    REJECT = "reject"


class KeyComposer:
    """Join and split composite keys under a delimiter policy.

    ``accept`` keeps keys as they are, so ``{"a.b": 1}`` and ``{"a": {"b": 2}}``
    both land on ``"a.b"``. ``escape`` rewrites ``~`` to ``~0`` and the
    delimiter to ``~1`` inside each key, which keeps composite keys unique.
    ``reject`` raises on the first key that contains the delimiter.
    """

    def __init__(self, delimiter: str = ".", policy: DelimiterPolicy | str = DelimiterPolicy.ACCEPT) -> None:
        super().__init__()
        if not isinstance(delimiter, str):
            msg = f"delimiter must be a string, got {type(delimiter).__name__}"
            raise TypeError(msg)
        if not delimiter:
            msg = "delimiter must not be empty"
            raise ValueError(msg)
        try:
            policy = DelimiterPolicy(policy)
        except ValueError:
            msg = f"unknown delimiter policy: {policy!r}"
            raise ValueError(msg) from None
        if policy is DelimiterPolicy.ESCAPE and any(char in delimiter for char in _RESERVED_CHARS):
            msg = f"delimiter must not contain any of {_RESERVED_CHARS!r} when escaping"
            raise ValueError(msg)
        if policy is DelimiterPolicy.ESCAPE and len(delimiter) != 1:
            # A longer delimiter can be completed by a partial match at a key boundary.
            msg = "delimiter must be a single character when escaping"
            raise ValueError(msg)

        self.delimiter = delimiter
        self.policy = policy

    def segment(self, key: object, path: str = "") -> str:
        """Validate one mapping key and apply the delimiter policy to it."""
        if not isinstance(key, str):
            msg = f"mapping keys must be strings, got {type(key).__name__}: {key!r}"
            raise InvalidKeyError(msg, path)

        if self.policy is DelimiterPolicy.ESCAPE:
            return key.replace(_ESCAPE_CHAR, "~0").replace(self.delimiter, "~1")
        if self.policy is DelimiterPolicy.REJECT and self.delimiter in key:
            msg = f"key contains delimiter {self.delimiter!r}: {key!r}"
            raise DelimiterCollisionError(msg, path)
        return key

    def join(self, prefix: str | None, key: object) -> str:
        """Append ``key`` to ``prefix``; a ``None`` prefix means the root."""
        if prefix is None:
            return self.segment(key)
        return prefix + self.delimiter + self.segment(key, prefix)

    def split(self, composite: str) -> tuple[str, ...]:
        """Convert a composite key back into its path parts."""
        parts = composite.split(self.delimiter)
        if self.policy is DelimiterPolicy.ESCAPE:
            return tuple(part.replace("~1", self.delimiter).replace("~0", _ESCAPE_CHAR) for part in parts)
        return tuple(parts)
