"""Convert JSON objects into CSV rows.

Nested objects and arrays are flattened into dotted/indexed column names,
the header row is the sorted union of the keys of every object, and keys
that collide once flattened are reported instead of being merged.
"""

from .converter import Json2Csv
from .csv_io import convert_file, make_csv_writer, read_csv
from .errors import (
    CsvWriteError,
    FlatteningError,
    Json2CsvError,
    JsonParseError,
    KeyCollisionError,
)
from .flattener import FlattenConfig, Plain, Surrounded, flatten_json
from .json_stream import iter_json_values

__all__ = [
    "Json2Csv",
    "FlattenConfig",
    "Plain",
    "Surrounded",
    "flatten_json",
    "iter_json_values",
    "make_csv_writer",
    "convert_file",
    "read_csv",
    "Json2CsvError",
    "FlatteningError",
    "JsonParseError",
    "KeyCollisionError",
    "CsvWriteError",
]
