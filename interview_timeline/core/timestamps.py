"""
Interview Timeline Timestamp Resolution

Resolves per-turn timestamps from untrusted transcript data. Nothing here
raises on malformed input: unresolvable timestamps become ``None``.
"""

import math
import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from .models import TranscriptTurn

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})[.,](\d+)")


def parse_iso_timestamp(value: Optional[str]) -> Optional[float]:
    """
    Parse an ISO-8601 string to epoch milliseconds.

    A trailing ``Z`` is accepted as UTC and naive values are read as UTC.

    Returns:
        Epoch milliseconds, or None when the value is missing or unparseable
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    text = _FRACTION.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '000000')[:6]}", text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    try:
        return float((parsed - _EPOCH) // _MILLISECOND)
    except OverflowError:
        return None


def resolve_turn_timestamp_ms(turn: TranscriptTurn) -> Optional[float]:
    """Prefer a finite ``timestamp_ms``; otherwise parse ``created_at``."""
    value = turn.timestamp_ms
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    return parse_iso_timestamp(turn.created_at)


def build_relative_turn_seconds(turns: Sequence[TranscriptTurn]) -> List[Optional[float]]:
    """
    Seconds since the first resolvable turn, per turn.

    Unresolvable turns map to None, and so does every turn when none
    resolves. Values before the first timestamp are floored at 0.
    """
    timestamps = [resolve_turn_timestamp_ms(turn) for turn in turns]
    first = next((ts for ts in timestamps if ts is not None), None)

    if first is None:
        return [None for _ in turns]

    return [
        None if ts is None else max(0.0, (ts - first) / 1000)
        for ts in timestamps
    ]


def latency_seconds(question: TranscriptTurn, answer: Optional[TranscriptTurn]) -> Optional[float]:
    """
    Time from a question to its first answer turn.

    Negative deltas (clock skew) are floored at 0, the same policy as
    ``build_relative_turn_seconds``.
    """
    if answer is None:
        return None
    question_ms = resolve_turn_timestamp_ms(question)
    answer_ms = resolve_turn_timestamp_ms(answer)
    if question_ms is None or answer_ms is None:
        return None
    return max(0.0, (answer_ms - question_ms) / 1000)
