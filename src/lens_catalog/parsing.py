"""Parsers for the free-text numeric fields of catalog records.

Catalog data stores every measurement as text ("24-70mm", "46,5 mm", "-").
These helpers never raise on bad input; anything that does not parse
comes back as ``None``.
"""

import math
import re

_FOCAL_SEPARATORS = re.compile(r"[ \-–]")
_NON_NUMERIC = re.compile(r"[^0-9.]")


def _to_float(text: str) -> float | None:
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_main_focal(focal_length: str | None) -> float | None:
    """Extract the first numeric token of a focal-length string.

    The text is split on spaces, hyphens and en-dashes. Each token is reduced
    to its digits and periods, and the first one that parses wins.

    Examples:
        "50mm" -> 50.0, "24-70mm" -> 24.0, "Variable" -> None
    """
    if not focal_length:
        return None
    for token in _FOCAL_SEPARATORS.split(focal_length):
        value = _to_float(_NON_NUMERIC.sub("", token))
        if value is not None:
            return value
    return None


def parse_millimeters(raw: str | None) -> float | None:
    """Parse a millimeter measurement such as "43,3mm" or "46.5 mm".

    Returns None for empty text, the "-" placeholder, or anything else
    that is not a number once "mm" is removed.
    """
    if raw is None:
        return None
    cleaned = raw.lower().replace("mm", "").replace(",", ".").strip()
    if not cleaned or cleaned == "-":
        return None
    return _to_float(cleaned)


def recording_diagonal(width: str | None, height: str | None) -> float | None:
    """Diagonal of a recording area from its width and height text."""
    width_mm = parse_millimeters(width)
    height_mm = parse_millimeters(height)
    if width_mm is None or height_mm is None:
        return None
    if width_mm <= 0 or height_mm <= 0:
        return None
    return math.sqrt(width_mm * width_mm + height_mm * height_mm)
