"""Interface for ``python -m kv_flatten``."""

from __future__ import annotations

import json
import logging
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ._version import version
from .errors import FlattenError
from .flattener import Flattener, merge_into
from .key_mapping import DelimiterPolicy, unflatten


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = ["main"]


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="kv_flatten",
        description="Flatten JSON objects into single-level objects with composite keys.",
    )
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="JSON files to read; stdin when omitted. Later files win on key collisions.",
    )
    _ = parser.add_argument("-d", "--delimiter", default=".", help="separator between key parts (default: %(default)r)")
    _ = parser.add_argument(
        "--policy",
        choices=[policy.value for policy in DelimiterPolicy],
        default=DelimiterPolicy.ACCEPT.value,
        help="handling of keys that contain the delimiter (default: %(default)s)",
    )
    _ = parser.add_argument("--max-depth", type=int, default=None, help="fail when nesting is deeper than this")
    _ = parser.add_argument("--unflatten", action="store_true", help="rebuild nested objects from flat input")
    _ = parser.add_argument("--indent", type=int, default=None, help="indent the JSON output")
    _ = parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level for diagnostics on stderr (default: %(default)s)",
    )
    return parser


def _load(source: Path | None) -> Any:
    if source is None:
        return json.load(sys.stdin)
    with source.open(encoding="utf-8") as handle:
        return json.load(handle)


def main(args: Sequence[str] | None = None) -> None:
    """Argument parser for the CLI."""
    parser = _build_parser()
    options = parser.parse_args(args)
    logging.basicConfig(level=options.log_level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    try:
        flattener = Flattener(options.delimiter, policy=options.policy, max_depth=options.max_depth)
    except (TypeError, ValueError) as error:
        parser.error(str(error))

    combined: dict[str, Any] = {}
    for source in options.files or [None]:
        name = "<stdin>" if source is None else str(source)
        try:
            data = _load(source)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            parser.error(f"{name}: {error}")
        if not isinstance(data, dict):
            parser.error(f"{name}: expected a JSON object, got {type(data).__name__}")

        try:
            flat = data if options.unflatten else flattener.flatten(data)
        except FlattenError as error:
            parser.error(f"{name}: {error} (at {error.path or '<root>'})")
        _ = merge_into(combined, flat)

    output: dict[str, Any] = combined
    if options.unflatten:
        output = unflatten(combined, options.delimiter, policy=options.policy)

    json.dump(output, sys.stdout, indent=options.indent)
    _ = sys.stdout.write("\n")


if __name__ == "__main__":
    main()
