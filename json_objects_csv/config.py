"""YAML configuration for the command-line interface.

Example ``config.yml``::

    flatten:
      key_separator: "."
      array_formatting: plain        # or {start: "[", end: "]"}
      preserve_empty_arrays: true
      preserve_empty_objects: true
    csv:
      delimiter: ","

Values given on the command line override the file, which overrides the
built-in defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .flattener import ArrayFormatting, FlattenConfig, Plain, Surrounded


def load_config(path: Path) -> Dict[str, Any]:
    """Load YAML config file."""
    if not path.exists():
        raise SystemExit(f"ERROR: config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def deep_get(d: Dict[str, Any], keys: List[str], default: Any = None) -> Any:
    """Safely get nested dict value with default."""
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def pick(val_cli: Any, val_cfg: Any, default: Any) -> Any:
    """Pick the CLI value if given, else the config value, else ``default``."""
    if val_cli is not None:
        return val_cli
    if val_cfg is not None:
        return val_cfg
    return default


def parse_array_formatting(value: Any) -> ArrayFormatting:
    """Build an :class:`ArrayFormatting` from its config representation.

    ``"plain"`` gives :class:`Plain`; ``"surrounded"`` gives brackets; a
    mapping with ``start`` and ``end`` gives :class:`Surrounded` with those
    markers.
    """
    if isinstance(value, (Plain, Surrounded)):
        return value
    if isinstance(value, dict):
        return Surrounded(start=value.get("start", "["), end=value.get("end", "]"))
    if isinstance(value, str) and value.lower() == "plain":
        return Plain()
    if isinstance(value, str) and value.lower() == "surrounded":
        return Surrounded()
    raise ValueError(f"array_formatting must be 'plain', 'surrounded' or {{start, end}}, got {value!r}")


def build_flatten_config(cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> FlattenConfig:
    """Build a :class:`FlattenConfig` from config values and CLI overrides.

    Parameters
    ----------
    cfg : Dict[str, Any]
        Parsed YAML config (may be empty).
    overrides : Dict[str, Any] | None, optional
        CLI values keyed like the ``flatten`` section; None means not given.
    """
    overrides = overrides or {}
    defaults = FlattenConfig()
    section = deep_get(cfg, ["flatten"], {}) or {}

    def value(name: str) -> Any:
        return pick(overrides.get(name), section.get(name), getattr(defaults, name))

    return FlattenConfig(
        key_separator=str(value("key_separator")),
        array_formatting=parse_array_formatting(value("array_formatting")),
        preserve_empty_arrays=bool(value("preserve_empty_arrays")),
        preserve_empty_objects=bool(value("preserve_empty_objects")),
    )


def read_delimiter(cfg: Dict[str, Any], val_cli: Optional[str] = None) -> str:
    """Return the CSV delimiter from CLI or config (default: ",")."""
    delimiter = pick(val_cli, deep_get(cfg, ["csv", "delimiter"]), ",")
    if delimiter in ("\\t", "tab"):
        delimiter = "\t"
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    return delimiter
