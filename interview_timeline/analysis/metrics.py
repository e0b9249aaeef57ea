"""
Interview Timeline Analysis: Transcript Delivery Metrics

Talk ratio, filler usage, speaking rate and response latency per candidate
response. Complements the timeline with simple aggregate numbers.
"""

from dataclasses import dataclass, asdict, field
import re
from typing import Any, Dict, List, Optional, Sequence

from ..core.models import TranscriptTurn, camelize
from ..core.text import count_words
from ..core.timestamps import resolve_turn_timestamp_ms
from ..core.utils import round_half_up

SINGLE_FILLERS = frozenset({"um", "uh", "erm", "ah", "like", "basically", "actually", "right"})
BIGRAM_FILLERS = ("you know", "i mean", "sort of", "kind of")

_BIGRAM_PATTERNS = [re.compile(rf"\b{re.escape(bigram)}\b", re.IGNORECASE) for bigram in BIGRAM_FILLERS]
_NON_LETTER = re.compile(r"[^a-z]")


@dataclass
class ResponseMetric:
    """Delivery metrics for one candidate answer turn."""
    question_index: int
    question_snippet: str
    word_count: int
    duration_sec: Optional[float]
    wpm: Optional[int]
    latency_sec: Optional[int]
    filler_count: int


@dataclass
class TranscriptMetrics:
    """Aggregate delivery metrics for a whole transcript."""
    user_word_count: int = 0
    assistant_word_count: int = 0
    talk_ratio_user: float = 0.0
    talk_ratio_assistant: float = 0.0
    avg_response_words: int = 0
    total_filler_count: int = 0
    filler_rate: float = 0.0  # fillers per 100 user words
    response_count: int = 0
    per_response: List[ResponseMetric] = field(default_factory=list)
    avg_wpm: Optional[int] = None
    avg_duration_sec: Optional[int] = None
    avg_latency_sec: Optional[int] = None
    has_speech_data: bool = False
    is_too_short: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return camelize(asdict(self))


def count_fillers(text: str) -> int:
    """Count filler bigrams plus single filler words."""
    lower = text.lower()
    count = sum(len(pattern.findall(lower)) for pattern in _BIGRAM_PATTERNS)
    for word in lower.split():
        if _NON_LETTER.sub("", word) in SINGLE_FILLERS:
            count += 1
    return count


def _truncate(text: str, max_length: int) -> str:
    trimmed = text.strip()
    if len(trimmed) <= max_length:
        return trimmed
    return f"{trimmed[:max_length - 3].strip()}..."


def _mean_rounded(values: List[float]) -> Optional[int]:
    if not values:
        return None
    return int(round_half_up(sum(values) / len(values)))


def compute_transcript_metrics(turns: Sequence[TranscriptTurn]) -> TranscriptMetrics:
    """
    Compute delivery metrics for every candidate response.

    Each user turn is one response, attributed to the closest preceding
    interviewer turn. Latency is only reported when it is positive.
    """
    user_word_count = sum(count_words(t.content) for t in turns if t.role == "user")
    assistant_word_count = sum(count_words(t.content) for t in turns if t.role == "assistant")
    total_words = user_word_count + assistant_word_count

    per_response: List[ResponseMetric] = []
    last_question: Optional[TranscriptTurn] = None

    for turn in turns:
        if turn.role == "assistant":
            last_question = turn
            continue
        if turn.role != "user":
            continue

        word_count = count_words(turn.content)
        duration = turn.answer_duration_sec
        wpm = None
        if duration is not None and duration > 0:
            wpm = int(round_half_up(word_count / duration * 60))

        latency = None
        if last_question is not None:
            question_ms = resolve_turn_timestamp_ms(last_question)
            answer_ms = resolve_turn_timestamp_ms(turn)
            if question_ms is not None and answer_ms is not None:
                diff = (answer_ms - question_ms) / 1000
                latency = int(round_half_up(diff)) if diff > 0 else None

        per_response.append(ResponseMetric(
            question_index=len(per_response) + 1,
            question_snippet=_truncate(last_question.content, 40) if last_question else "",
            word_count=word_count,
            duration_sec=duration,
            wpm=wpm,
            latency_sec=latency,
            filler_count=count_fillers(turn.content),
        ))

    response_count = len(per_response)
    total_fillers = sum(r.filler_count for r in per_response)
    spoken = [r for r in per_response if r.duration_sec is not None]

    return TranscriptMetrics(
        user_word_count=user_word_count,
        assistant_word_count=assistant_word_count,
        talk_ratio_user=user_word_count / total_words if total_words else 0.0,
        talk_ratio_assistant=assistant_word_count / total_words if total_words else 0.0,
        avg_response_words=int(round_half_up(user_word_count / response_count)) if response_count else 0,
        total_filler_count=total_fillers,
        filler_rate=round_half_up(total_fillers / user_word_count * 100, 1) if user_word_count else 0.0,
        response_count=response_count,
        per_response=per_response,
        avg_wpm=_mean_rounded([r.wpm or 0 for r in spoken]),
        avg_duration_sec=_mean_rounded([r.duration_sec or 0.0 for r in spoken]),
        avg_latency_sec=_mean_rounded([r.latency_sec for r in per_response if r.latency_sec is not None]),
        has_speech_data=bool(spoken),
        is_too_short=response_count < 2,
    )
