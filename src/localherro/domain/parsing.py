"""
Query-string parsing helpers.

`GET` endpoints receive coordinates as strings (`?lat=19.07&lng=72.88`), so they are
parsed here instead of through Pydantic models. Strings are read by their leading
numeric prefix, the way browsers' `parseFloat` reads them (`"5km"` is 5):
- a missing or unparseable coordinate is a `ValidationError`,
- a missing radius falls back to the configured default,
- an unparseable radius becomes NaN, which matches nothing (no error).
"""

from __future__ import annotations

import math
import re
from typing import Any

from localherro.core.errors import ValidationError

COORDINATES_REQUIRED = "lat and lng query params are required"

_NUMERIC_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_float_prefix(value: Any) -> float:
    """Return the number at the start of `value`, or NaN when there is none."""
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return math.nan
    m = _NUMERIC_PREFIX.match(value)
    if not m:
        return math.nan
    return float(m.group(1).replace("Infinity", "inf"))


def parse_coordinate(value: Any) -> float:
    """Parse a finite latitude/longitude value or raise `ValidationError`."""
    if value is None:
        raise ValidationError(COORDINATES_REQUIRED)
    f = parse_float_prefix(value)
    if not math.isfinite(f):
        raise ValidationError(COORDINATES_REQUIRED)
    return f


def parse_radius(value: Any, default: float) -> float:
    """Parse a search radius in km; empty means `default`, garbage means NaN."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return float(default)
    return parse_float_prefix(value)


def truncate_text(text: str, limit: int) -> str:
    return text[:limit]
