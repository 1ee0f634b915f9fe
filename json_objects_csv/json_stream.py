"""Lazy decoding of concatenated JSON documents from a byte stream."""

from __future__ import annotations

import io
from typing import Any, BinaryIO, Iterator, Optional, Union

import ijson

from .errors import JsonParseError

CHUNK_SIZE = 64 * 1024
_WHITESPACE = b" \t\n\r"

# yajl2_c overflows on integers wider than 64 bits
_backend = ijson.get_backend("python")


class _PrefixedReader:
    """File-like reader returning ``prefix`` before the rest of ``stream``."""

    def __init__(self, prefix: bytes, stream: BinaryIO) -> None:
        self._prefix = prefix
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        if not self._prefix:
            return self._stream.read(size)
        if size is None or size < 0:
            data, self._prefix = self._prefix + self._stream.read(), b""
            return data
        data, self._prefix = self._prefix[:size], self._prefix[size:]
        return data


def _skip_whitespace(stream: BinaryIO) -> Optional[bytes]:
    """Consume leading whitespace, returning the first non-blank chunk or None at EOF."""
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            return None
        chunk = chunk.lstrip(_WHITESPACE)
        if chunk:
            return chunk


def iter_json_values(source: Union[BinaryIO, bytes, bytearray]) -> Iterator[Any]:
    """Yield top-level JSON values one at a time.

    Values may be separated by whitespace or directly adjacent
    (``{"a": 1}{"b": 2}``). Only one value is held in memory at a time.

    Parameters
    ----------
    source : BinaryIO | bytes
        Object with a ``read(size)`` method returning bytes, or raw bytes.

    Yields
    ------
    Any
        Decoded values; numbers with a fraction or exponent are floats.

    Raises
    ------
    JsonParseError
        If the stream is not well-formed JSON.
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))

    first = _skip_whitespace(source)
    if first is None:
        return

    reader = _PrefixedReader(first, source)
    try:
        for value in _backend.items(reader, "", multiple_values=True, use_float=True):
            yield value
    except (ijson.JSONError, UnicodeDecodeError) as exc:
        raise JsonParseError(f"Parsing JSON failed: {exc}") from exc
