"""CSV helpers for converted records.

This module provides the CSV writer used by the converter, a file-to-file
conversion that only replaces the destination once the conversion succeeded,
and a reader for checking the produced files.
"""

from __future__ import annotations

import csv
import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List, TextIO

from .converter import Json2Csv
from .errors import JsonParseError
from .flattener import FlattenConfig

logger = logging.getLogger(__name__)

STDIO = "-"


def make_csv_writer(sink: TextIO, delimiter: str = ",") -> Any:
    """Return a ``csv.writer`` with ``\\n`` line endings and minimal quoting.

    Parameters
    ----------
    sink : TextIO
        Text stream opened with ``newline=""``.
    delimiter : str, optional
        Single character field delimiter (default: ",").

    Raises
    ------
    ValueError
        If ``delimiter`` is not a single character.
    """
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    return csv.writer(sink, delimiter=delimiter, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)


def _convert(converter: Json2Csv, source: Any, sink: TextIO, delimiter: str, mode: str) -> int:
    writer = make_csv_writer(sink, delimiter)
    if mode == "array":
        try:
            objects = json.load(source)
        except json.JSONDecodeError as exc:
            raise JsonParseError(f"Parsing JSON failed: {exc}") from exc
        if not isinstance(objects, list):
            raise ValueError(f"array mode expects a JSON array, got {type(objects).__name__}")
        return converter.convert_from_array(objects, writer)
    return converter.convert_from_reader(source, writer)


def convert_file(
    input_path: Path | str,
    output_path: Path | str,
    config: FlattenConfig | None = None,
    delimiter: str = ",",
    mode: str = "stream",
    encoding: str = "utf-8",
) -> int:
    """Convert a JSON file into a CSV file.

    The CSV is written to a temporary file next to ``output_path`` and moved
    into place only on success, so a failed conversion never leaves a
    truncated CSV behind.

    Parameters
    ----------
    input_path : Path | str
        JSON input, or ``"-"`` for standard input.
    output_path : Path | str
        CSV output, or ``"-"`` for standard output.
    config : FlattenConfig | None, optional
        Flattening configuration (default: ``FlattenConfig()``).
    delimiter : str, optional
        CSV delimiter (default: ",").
    mode : str, optional
        ``"stream"`` for concatenated JSON documents, ``"array"`` for a
        single JSON array of objects (default: "stream").
    encoding : str, optional
        Output file encoding (default: "utf-8").

    Returns
    -------
    int
        Number of data rows written.

    Raises
    ------
    FileNotFoundError
        If the input file doesn't exist.
    ValueError
        If ``mode`` is unknown or the input doesn't fit it.
    """
    if mode not in ("stream", "array"):
        raise ValueError(f"mode must be 'stream' or 'array', got {mode!r}")
    converter = Json2Csv(config)

    if str(input_path) == STDIO:
        return _write_output(converter, sys.stdin.buffer, output_path, delimiter, mode, encoding)

    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"JSON file not found: {input_path}")
    with input_path.open("rb") as source:
        return _write_output(converter, source, output_path, delimiter, mode, encoding)


def _write_output(
    converter: Json2Csv,
    source: Any,
    output_path: Path | str,
    delimiter: str,
    mode: str,
    encoding: str,
) -> int:
    if str(output_path) == STDIO:
        return _convert(converter, source, sys.stdout, delimiter, mode)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent)
    try:
        with os.fdopen(fd, "w", newline="", encoding=encoding) as handle:
            count = _convert(converter, source, handle, delimiter, mode)
        os.replace(tmp_name, output_path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    logger.info("Wrote %d row(s) to %s", count, output_path)
    return count


def read_csv(
    input_path: Path | str,
    delimiter: str = ",",
    encoding: str = "utf-8",
) -> List[Dict[str, Any]]:
    """Read CSV file into list of dictionaries.

    Parameters
    ----------
    input_path : Path | str
        Path to input CSV file.
    delimiter : str, optional
        CSV delimiter (default: ",").
    encoding : str, optional
        File encoding (default: "utf-8").

    Returns
    -------
    List[Dict[str, Any]]
        List of dictionaries, one per row.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    """
    if isinstance(input_path, str):
        input_path = Path(input_path)

    if not input_path.exists():
        raise FileNotFoundError(f"CSV file not found: {input_path}")

    with input_path.open("r", newline="", encoding=encoding) as handle:
        reader = csv.DictReader(handle, delimiter=delimiter)
        return list(reader)
