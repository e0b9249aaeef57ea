"""
Interview Timeline Core Utilities

Numeric rounding/clamping and text snippet helpers shared by the
segmenter, marker detector and momentum builder.
"""

import math
import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")
_FIRST_SENTENCE = re.compile(r"^[^.!?]+[.!?]")


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with ties going towards positive infinity.

    Python's built-in ``round`` uses banker's rounding; scores are published
    at one-decimal resolution and ties must always round up.

    Example:
        >>> round_half_up(4.25, 1)
        4.3
        >>> round_half_up(2.5)
        3.0
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, lower: float, upper: float) -> float:
    return min(upper, max(lower, value))


def clamp_score(value: float) -> float:
    """Clamp a score to [1, 5] at one-decimal resolution."""
    return clamp(round_half_up(value, 1), 1.0, 5.0)


def normalize_whitespace(value: Optional[str]) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()


def clip_snippet(value: str, max_length: int = 160) -> str:
    """
    Clip normalized text to at most ``max_length`` characters.

    Clipped text ends with an ellipsis (``...``), which counts towards the limit.
    """
    normalized = normalize_whitespace(value)
    if len(normalized) <= max_length:
        return normalized
    return f"{normalized[:max_length - 3].strip()}..."


def first_sentence(value: str, fallback: str, max_length: int = 170) -> str:
    """Return the first sentence of ``value`` (clipped), or ``fallback`` when empty."""
    normalized = normalize_whitespace(value)
    if not normalized:
        return fallback

    match = _FIRST_SENTENCE.match(normalized)
    if not match:
        return clip_snippet(normalized, max_length)
    return clip_snippet(match.group(0), max_length)


def format_js_number(value: Optional[float]) -> str:
    """
    Render a number the way transcript producers serialize it.

    Integral floats drop their fractional part (``1500.0`` -> ``1500``) and
    ``None`` renders as an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)
