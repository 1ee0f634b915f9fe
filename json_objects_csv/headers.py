"""Union of flattened keys across all converted objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Set

from .errors import KeyCollisionError
from .flattener import Path
from .keys import KeyTransform


@dataclass(frozen=True)
class Headers:
    """Final header row.

    Attributes
    ----------
    public : List[str]
        Header text, sorted lexicographically. Fixes the column order.
    is_collision : bool
        True if two distinct paths render to the same header.
    """

    public: List[str]
    is_collision: bool


class HeaderAccumulator:
    """Collect path keys and their public form for every observed object."""

    def __init__(self, keys: KeyTransform) -> None:
        self.keys = keys
        self.safe_headers: Set[Path] = set()
        self.public_headers: Set[str] = set()

    def observe(self, flat_object: Mapping[Path, Any]) -> None:
        for key in flat_object:
            if key not in self.safe_headers:
                self.safe_headers.add(key)
                self.public_headers.add(self.keys.to_public(key))

    def finalize(self) -> Optional[Headers]:
        """Return the sorted headers, or None if no key was ever seen."""
        if not self.public_headers:
            return None
        return Headers(
            public=sorted(self.public_headers),
            is_collision=len(self.safe_headers) != len(self.public_headers),
        )

    def collisions(self) -> Dict[str, List[Path]]:
        """Map each ambiguous header to the distinct paths rendering to it."""
        by_public: Dict[str, List[Path]] = {}
        for key in self.safe_headers:
            by_public.setdefault(self.keys.to_public(key), []).append(key)
        return {
            header: sorted(paths, key=lambda path: [(isinstance(s, int), str(s)) for s in path])
            for header, paths in by_public.items()
            if len(paths) > 1
        }

    def check(self) -> Optional[List[str]]:
        """Finalize and raise on collisions.

        Returns
        -------
        Optional[List[str]]
            Sorted public headers, or None when there is nothing to write.

        Raises
        ------
        KeyCollisionError
            If distinct keys end up with the same header.
        """
        headers = self.finalize()
        if headers is None:
            return None
        if headers.is_collision:
            raise KeyCollisionError(self.collisions())
        return headers.public
