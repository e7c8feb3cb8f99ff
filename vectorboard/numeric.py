from __future__ import annotations

import math
import re
from typing import Optional, Sequence

COORD_ABS_MAX = 1e8

# Invariant-culture decimal: sign, digits, optional fraction, optional exponent.
_DECIMAL_RE = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


class CoordinateError(ValueError):
    """Raised when a text field is not a usable coordinate."""


def parse_coordinate(text: str, *, limit: float = COORD_ABS_MAX) -> float:
    """
    Parse ``text`` as a plain decimal number and reject anything a malformed
    drawing file tends to contain: NaN/Infinity spellings, locale-specific
    separators and magnitudes beyond ``limit`` (1e8 by default).
    """

    if text is None:
        raise CoordinateError("missing value")
    raw = str(text).strip()
    if not _DECIMAL_RE.match(raw):
        raise CoordinateError(f"not a decimal number: {raw!r}")
    value = float(raw)
    if not math.isfinite(value):
        raise CoordinateError(f"non-finite value: {raw!r}")
    if abs(value) > limit:
        raise CoordinateError(f"value out of range: {raw!r}")
    return value


def try_parse_coordinate(text: Optional[str], *, limit: float = COORD_ABS_MAX) -> Optional[float]:
    if text is None:
        return None
    try:
        return parse_coordinate(text, limit=limit)
    except CoordinateError:
        return None


def is_finite_point(point: Sequence[float]) -> bool:
    return len(point) >= 2 and math.isfinite(point[0]) and math.isfinite(point[1])
