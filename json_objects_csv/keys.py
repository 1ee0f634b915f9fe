"""Collision-safe flattening keys.

Flattening ``{"a.b": 1}`` and ``{"a": {"b": 1}}`` with a ``.`` separator
gives the same key ``a.b``. Keys are therefore kept as structural paths while
headers are collected, and only rendered with the caller's separator and
array markers afterwards, so the two cases stay distinguishable.
"""

from __future__ import annotations

from typing import Any, Dict

from .flattener import FlattenConfig, Path, flatten_paths, render_key


class KeyTransform:
    """Flatten objects into path-keyed dicts and render paths as headers."""

    def __init__(self, config: FlattenConfig) -> None:
        self.config = config
        self._rendered: Dict[Path, str] = {}

    def flatten_safe(self, value: Any) -> Dict[Path, Any]:
        """Flatten ``value`` keeping unambiguous path keys.

        Raises
        ------
        FlatteningError
            If ``value`` is not a JSON object.
        """
        return flatten_paths(value, self.config)

    def to_public(self, key: Path) -> str:
        """Return the header text the caller sees for ``key``."""
        public = self._rendered.get(key)
        if public is None:
            public = self._rendered[key] = render_key(key, self.config)
        return public
