"""Render flattened objects as CSV records aligned to the header row."""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Sequence


def render_value(value: Any) -> str:
    """Return the CSV field text for a flattened JSON value.

    Strings are returned verbatim (quoting is left to the CSV writer),
    booleans and numbers use their JSON literal form. ``None``, ``[]`` and
    ``{}`` become the empty string; only empty containers can reach this
    point since non-empty ones have been flattened away.

    Examples
    --------
    >>> render_value(True), render_value(1.5), render_value(None)
    ('true', '1.5', '')
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return render_float(value)
    if isinstance(value, int):
        return str(value)
    if value is None or isinstance(value, (list, tuple, dict)):
        return ""
    # Decimal and friends from callers building values by hand
    return str(value)


def render_float(value: float) -> str:
    """Return the shortest round-tripping text for ``value``.

    Digits are those of ``repr``; the layout is plain for magnitudes from 1e-5
    up to 1e16 and scientific otherwise, with no ``+`` or zero padding in
    the exponent (``1e-7``, ``1.5e300``, ``0.00001``).
    """
    if not math.isfinite(value):
        return json.dumps(value)
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if exp == -5:
        sign = "-" if mantissa.startswith("-") else ""
        return f"{sign}0.0000{mantissa.lstrip('-').replace('.', '')}"
    return f"{mantissa}e{exp}"


def build_record(headers: Sequence[str], flat_object: Dict[str, Any]) -> List[str]:
    """Build one row with a field per header, ``""`` where the key is absent.

    ``flat_object`` is keyed by public header and is consumed.
    """
    return [render_value(flat_object.pop(header)) if header in flat_object else "" for header in headers]
