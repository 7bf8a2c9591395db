"""Pull numeric and enum hints out of free text the user typed."""

import math
import re

from ..models.vocabulary import BODY_SHAPES, canonical

MIN_HEIGHT_CM = 50
MAX_HEIGHT_CM = 250

# Order matters: metric before imperial so "1.75 m" never reads as feet
CM_PATTERN = re.compile(r'\b(\d{2,3}(?:\.\d+)?)\s*(?:cm|centimet(?:er|re)s?)\b', re.IGNORECASE)
M_PATTERN = re.compile(r'\b([12]\.\d{1,2})\s*m(?:eters?|etres?)?\b', re.IGNORECASE)
FEET_PATTERN = re.compile(
    r"\b([3-7])\s*(?:'|’|ft\.?|feet|foot)\s*"
    r"(?:(\d{1,2})\s*(?:\"|”|''|in\.?|inch(?:es)?)?)?",
    re.IGNORECASE,
)
BARE_NUMBER = re.compile(r'^\s*(\d{2,3}(?:\.\d+)?)\s*$')


def _in_range(cm: float) -> int | None:
    # json.loads accepts NaN and Infinity
    if not math.isfinite(cm):
        return None
    value = round(cm)
    if MIN_HEIGHT_CM <= value <= MAX_HEIGHT_CM:
        return value
    return None


def parse_height_cm(text: str | None, allow_bare_number: bool = False) -> int | None:
    """Find a height in ``text`` and return it in whole centimeters.

    Understands "170 cm", "1.75 m", "5'8\"" and "5 ft 8 in". A bare number
    ("172") is read as centimeters only when ``allow_bare_number`` is set,
    which is the case for the dedicated height field.
    """
    if not text:
        return None

    if allow_bare_number:
        match = BARE_NUMBER.match(text)
        if match:
            return _in_range(float(match.group(1)))

    match = CM_PATTERN.search(text)
    if match:
        return _in_range(float(match.group(1)))

    match = M_PATTERN.search(text)
    if match:
        return _in_range(float(match.group(1)) * 100)

    match = FEET_PATTERN.search(text)
    if match:
        inches = int(match.group(1)) * 12 + int(match.group(2) or 0)
        return _in_range(inches * 2.54)

    return None


def coerce_height(value) -> int | None:
    """Turn whatever the model answered for height into centimeters."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _in_range(value)
    if isinstance(value, str):
        return parse_height_cm(value, allow_bare_number=True)
    return None


def parse_body_shape(hint: str | None) -> str | None:
    """Canonical body shape for a user-selected hint, if it is one."""
    return canonical(hint, BODY_SHAPES)
