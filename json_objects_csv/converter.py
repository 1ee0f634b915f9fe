"""Convert JSON objects into CSV rows.

Each top-level object becomes one row. Objects are flattened first
(``{"a": {"b": [1, 2]}}`` gives columns ``a.b.0`` and ``a.b.1``), the header
row is the sorted union of the flattened keys of every object, and fields an
object lacks are left empty.

Two entry points share the same pipeline and produce identical output for
the same input:

- :meth:`Json2Csv.convert_from_array` for values already in memory.
- :meth:`Json2Csv.convert_from_reader` for a byte stream of concatenated
  JSON documents. Flattened objects are spilled to a temporary file while
  headers are collected, then read back to write the rows.
"""

from __future__ import annotations

import csv
import json
import logging
import tempfile
from typing import Any, Dict, Iterable, List, Sequence, TextIO

from .errors import CsvWriteError
from .flattener import FlattenConfig, Path
from .headers import HeaderAccumulator
from .json_stream import iter_json_values
from .keys import KeyTransform
from .rows import build_record

logger = logging.getLogger(__name__)


class Json2Csv:
    """JSON objects to CSV converter.

    Parameters
    ----------
    config : FlattenConfig | None, optional
        How nested keys are flattened (default: ``FlattenConfig()``).

    Examples
    --------
    >>> import io
    >>> from json_objects_csv.csv_io import make_csv_writer
    >>> out = io.StringIO()
    >>> Json2Csv().convert_from_reader(b'{"a": {"b": 1}} {"c": [2]}', make_csv_writer(out))
    2
    >>> out.getvalue()
    'a.b,c.0\\n1,\\n,2\\n'
    """

    def __init__(self, config: FlattenConfig | None = None) -> None:
        self.config = config or FlattenConfig()

    def _public_map(self, keys: KeyTransform, flat_object: Dict[Path, Any]) -> Dict[str, Any]:
        return {keys.to_public(key): value for key, value in flat_object.items()}

    def _write_rows(
        self,
        csv_writer: Any,
        headers: Sequence[str],
        keys: KeyTransform,
        flat_objects: Iterable[Dict[Path, Any]],
    ) -> int:
        count = 0
        try:
            csv_writer.writerow(headers)
            for flat_object in flat_objects:
                csv_writer.writerow(build_record(headers, self._public_map(keys, flat_object)))
                count += 1
        except csv.Error as exc:
            raise CsvWriteError(f"Writing a CSV record failed: {exc}") from exc
        return count

    def convert_from_array(self, objects: Sequence[Any], csv_writer: Any) -> int:
        """Flatten each object in ``objects`` and write one CSV row per object.

        Parameters
        ----------
        objects : Sequence[Any]
            JSON objects (dicts).
        csv_writer : Any
            Object with a ``writerow`` method, typically ``csv.writer``.

        Returns
        -------
        int
            Number of data rows written. Nothing at all is written (and 0 is
            returned) when flattening produced no keys.

        Raises
        ------
        FlatteningError
            If an element is not a JSON object.
        KeyCollisionError
            If distinct keys end up with the same header.
        CsvWriteError
            If the CSV writer fails.
        """
        keys = KeyTransform(self.config)
        flat_objects: List[Dict[Path, Any]] = [keys.flatten_safe(obj) for obj in objects]

        accumulator = HeaderAccumulator(keys)
        for flat_object in flat_objects:
            accumulator.observe(flat_object)

        headers = accumulator.check()
        if headers is None:
            logger.debug("No headers found in %d object(s), nothing to write", len(flat_objects))
            return 0

        logger.debug("Writing %d object(s) with %d header(s)", len(flat_objects), len(headers))
        return self._write_rows(csv_writer, headers, keys, flat_objects)

    def convert_from_reader(self, source: Any, csv_writer: Any) -> int:
        """Flatten the JSON objects read from ``source``, one CSV row each.

        ``source`` holds JSON objects one after the other, separated by
        whitespace or nothing at all. It is read once; the flattened objects
        go to a temporary file that is removed before returning, whatever
        the outcome.

        Parameters
        ----------
        source : Any
            Binary file-like object, or ``bytes``.
        csv_writer : Any
            Object with a ``writerow`` method, typically ``csv.writer``.

        Returns
        -------
        int
            Number of data rows written.

        Raises
        ------
        JsonParseError
            If the input is not well-formed JSON.
        FlatteningError
            If a top-level value is not a JSON object.
        KeyCollisionError
            If distinct keys end up with the same header.
        CsvWriteError
            If the CSV writer fails.
        OSError
            If reading the input or using the temporary file fails.
        """
        keys = KeyTransform(self.config)
        accumulator = HeaderAccumulator(keys)

        with tempfile.TemporaryFile("w+", encoding="utf-8", newline="\n") as spill:
            spilled = 0
            for value in iter_json_values(source):
                flat_object = keys.flatten_safe(value)
                accumulator.observe(flat_object)
                spill.write(json.dumps([[list(key), val] for key, val in flat_object.items()]))
                spill.write("\n")
                spilled += 1
            logger.debug("Spilled %d flattened object(s)", spilled)

            headers = accumulator.check()
            if headers is None:
                logger.debug("No headers found in %d object(s), nothing to write", spilled)
                return 0

            spill.seek(0)
            logger.debug("Writing %d object(s) with %d header(s)", spilled, len(headers))
            return self._write_rows(csv_writer, headers, keys, _read_spill(spill))


def _read_spill(spill: TextIO) -> Iterable[Dict[Path, Any]]:
    for line in spill:
        yield {tuple(key): value for key, value in json.loads(line)}
