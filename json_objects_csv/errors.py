"""Exceptions raised while converting JSON objects to CSV.

Every error is terminal for the conversion that raised it. Failures of the
underlying libraries are re-raised as one of these types with the original
exception chained, except for ``OSError`` which propagates unchanged.
"""

from __future__ import annotations

from typing import Dict, List, Sequence


class Json2CsvError(Exception):
    """Base class for all conversion errors."""


class FlatteningError(Json2CsvError, ValueError):
    """A value could not be flattened (e.g. it is not a JSON object)."""


class JsonParseError(Json2CsvError, ValueError):
    """The input stream does not contain well-formed JSON."""


class CsvWriteError(Json2CsvError):
    """The CSV writer rejected a record."""


class KeyCollisionError(Json2CsvError):
    """Distinct keys look the same once flattened.

    Parameters
    ----------
    collisions : Dict[str, List[Sequence]]
        Public header mapped to the distinct key paths rendering to it.
    """

    def __init__(self, collisions: Dict[str, List[Sequence]]) -> None:
        self.collisions = collisions
        details = "; ".join(
            f"{header!r} <- {', '.join(repr(list(path)) for path in paths)}"
            for header, paths in sorted(collisions.items())
        )
        super().__init__(
            "Two objects have keys that should be different but end looking "
            f"the same after flattening: {details}"
        )
