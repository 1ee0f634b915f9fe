"""Core JSON flattening utilities.

This module turns a JSON object with nested objects and arrays into a flat
mapping. Keys are produced in two forms: a structural *path* (a tuple of
field names and array indices) and a textual key rendered with a configurable
separator and array formatting, e.g. ``{"a": {"b": [1, 2]}}`` becomes
``{"a.b.0": 1, "a.b.1": 2}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Tuple, Union

from .errors import FlatteningError

Segment = Union[str, int]
Path = Tuple[Segment, ...]


@dataclass(frozen=True)
class Plain:
    """Array indices are joined with the key separator (``a.0``)."""


@dataclass(frozen=True)
class Surrounded:
    """Array indices are wrapped in markers (``a[0]``).

    Attributes
    ----------
    start : str
        Marker written before the index.
    end : str
        Marker written after the index.
    """

    start: str = "["
    end: str = "]"

    def __post_init__(self) -> None:
        if not isinstance(self.start, str):
            raise ValueError(f"array start marker must be a string, got {self.start!r}")
        if not isinstance(self.end, str):
            raise ValueError(f"array end marker must be a string, got {self.end!r}")


ArrayFormatting = Union[Plain, Surrounded]


@dataclass(frozen=True)
class FlattenConfig:
    """How nested keys are rendered and which empty containers survive.

    Attributes
    ----------
    key_separator : str, optional
        Separator placed between object keys (default: ".").
    array_formatting : ArrayFormatting, optional
        :class:`Plain` or :class:`Surrounded` (default: ``Plain()``).
    preserve_empty_arrays : bool, optional
        Keep ``[]`` values under their key instead of dropping them
        (default: True).
    preserve_empty_objects : bool, optional
        Keep nested ``{}`` values under their key instead of dropping them
        (default: True).
    """

    key_separator: str = "."
    array_formatting: ArrayFormatting = field(default_factory=Plain)
    preserve_empty_arrays: bool = True
    preserve_empty_objects: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.key_separator, str):
            raise ValueError(f"key_separator must be a string, got {self.key_separator!r}")
        if not isinstance(self.array_formatting, (Plain, Surrounded)):
            raise ValueError(
                f"array_formatting must be Plain or Surrounded, got {self.array_formatting!r}"
            )


def iter_paths(data: Any, config: FlattenConfig) -> Iterator[Tuple[Path, Any]]:
    """Yield ``(path, value)`` pairs for every leaf of a JSON object.

    Parameters
    ----------
    data : Any
        JSON object to flatten. Must be a mapping.
    config : FlattenConfig
        Only the ``preserve_empty_*`` flags are used here; paths are
        separator independent.

    Yields
    ------
    Tuple[Path, Any]
        Path segments (``str`` for fields, ``int`` for indices) and the
        scalar, ``[]`` or ``{}`` found there.

    Raises
    ------
    FlatteningError
        If ``data`` is not a JSON object.
    """
    if not isinstance(data, Mapping):
        raise FlatteningError(
            f"Only JSON objects can be flattened, got {type(data).__name__}: {data!r:.80}"
        )

    def _flatten(obj: Any, prefix: Path) -> Iterator[Tuple[Path, Any]]:
        if isinstance(obj, Mapping):
            if not obj:
                if prefix and config.preserve_empty_objects:
                    yield prefix, {}
                return
            for key, value in obj.items():
                yield from _flatten(value, prefix + (str(key),))
            return

        if isinstance(obj, (list, tuple)):
            if not obj:
                if config.preserve_empty_arrays:
                    yield prefix, []
                return
            for idx, value in enumerate(obj):
                yield from _flatten(value, prefix + (idx,))
            return

        yield prefix, obj

    return _flatten(data, ())


def flatten_paths(data: Any, config: FlattenConfig) -> Dict[Path, Any]:
    """Flatten a JSON object into a dict keyed by structural paths.

    Examples
    --------
    >>> flatten_paths({"a": {"b": [1, 2]}}, FlattenConfig())
    {('a', 'b', 0): 1, ('a', 'b', 1): 2}
    """
    return dict(iter_paths(data, config))


def render_key(path: Path, config: FlattenConfig) -> str:
    """Render a structural path with the configured separator and markers.

    Examples
    --------
    >>> render_key(("a", 0, "b"), FlattenConfig())
    'a.0.b'
    >>> render_key(("a", 0, "b"), FlattenConfig(array_formatting=Surrounded("[", "]")))
    'a[0].b'
    """
    sep = config.key_separator
    fmt = config.array_formatting
    parts = []
    for segment in path:
        if isinstance(segment, int):
            if isinstance(fmt, Surrounded):
                parts.append(f"{fmt.start}{segment}{fmt.end}")
                continue
            segment = str(segment)
        parts.append(f"{sep}{segment}" if parts else segment)
    return "".join(parts)


def flatten_json(data: Any, config: FlattenConfig | None = None) -> Dict[str, Any]:
    """Flatten JSON-like data into a single dictionary with textual keys.

    Keys that render identically overwrite each other, last one wins. Use
    :class:`~json_objects_csv.keys.KeyTransform` when collisions must be
    detected.

    Parameters
    ----------
    data : Any
        JSON object (dict).
    config : FlattenConfig | None, optional
        Flattening configuration (default: ``FlattenConfig()``).

    Returns
    -------
    Dict[str, Any]
        Flattened dictionary.

    Examples
    --------
    >>> flatten_json({"a": {"b": 1}, "c": "x"})
    {'a.b': 1, 'c': 'x'}
    """
    config = config or FlattenConfig()
    return {render_key(path, config): value for path, value in iter_paths(data, config)}
