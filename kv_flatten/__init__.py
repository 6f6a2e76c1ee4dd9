"""kv-flatten - flatten nested event payloads into composite-key mappings"""

from ._version import version as __version__
from .errors import CyclicDataError, DelimiterCollisionError, FlattenDepthError, FlattenError, InvalidKeyError
from .flattener import Flattener, flatten, merge_into
from .key_mapping import DelimiterPolicy, KeyComposer, unflatten
from .values import FlatMap, Leaf, NestedValue, Scalar, is_nested


__all__ = [
    "CyclicDataError",
    "DelimiterCollisionError",
    "DelimiterPolicy",
    "FlatMap",
    "FlattenDepthError",
    "FlattenError",
    "Flattener",
    "InvalidKeyError",
    "KeyComposer",
    "Leaf",
    "NestedValue",
    "Scalar",
    "__version__",
    "flatten",
    "is_nested",
    "merge_into",
    "unflatten",
]
