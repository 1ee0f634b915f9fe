"""Command-line interface for JSON to CSV conversion."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Sequence

from .config import build_flatten_config, load_config, read_delimiter
from .csv_io import convert_file
from .errors import Json2CsvError
from .flattener import Plain, Surrounded


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-objects-csv",
        description="Flatten JSON objects into CSV rows, one row per object.",
    )
    parser.add_argument("input", help="JSON input path, or - for stdin")
    parser.add_argument("output", help="CSV output path, or - for stdout")
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML config")
    parser.add_argument(
        "--mode",
        default="stream",
        choices=["stream", "array"],
        help="stream: JSON objects one after the other; array: a single JSON array of objects",
    )
    parser.add_argument("--sep", default=None, help="Key separator (default: .)")
    parser.add_argument("--array-start", default=None, help="Marker before array indices, e.g. [")
    parser.add_argument("--array-end", default=None, help="Marker after array indices, e.g. ]")
    parser.add_argument("--plain-arrays", action="store_true", help="Join array indices with the key separator")
    parser.add_argument(
        "--drop-empty-arrays",
        dest="preserve_empty_arrays",
        action="store_const",
        const=False,
        default=None,
        help="Drop [] values instead of keeping an empty column",
    )
    parser.add_argument(
        "--drop-empty-objects",
        dest="preserve_empty_objects",
        action="store_const",
        const=False,
        default=None,
        help="Drop {} values instead of keeping an empty column",
    )
    parser.add_argument("--delimiter", default=None, help="CSV field delimiter (default: ,)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    array_formatting: Any = None
    if args.plain_arrays:
        array_formatting = Plain()
    elif args.array_start is not None or args.array_end is not None:
        array_formatting = Surrounded(
            start="[" if args.array_start is None else args.array_start,
            end="]" if args.array_end is None else args.array_end,
        )
    return {
        "key_separator": args.sep,
        "array_formatting": array_formatting,
        "preserve_empty_arrays": args.preserve_empty_arrays,
        "preserve_empty_objects": args.preserve_empty_objects,
    }


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config) if args.config else {}
    try:
        config = build_flatten_config(cfg, _overrides(args))
        delimiter = read_delimiter(cfg, args.delimiter)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        count = convert_file(args.input, args.output, config=config, delimiter=delimiter, mode=args.mode)
    except (Json2CsvError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    print(f"wrote {count} row(s) to {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
