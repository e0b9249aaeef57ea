"""
Interview Timeline Analysis: Timeline Assembler

Single entry point of the engine. Runs segmentation, marker detection,
pruning and momentum over a transcript and packages the result together with
a content hash used as the cache key.
"""

from datetime import datetime, timezone
import logging
from typing import List, Optional, Sequence

from ..core.models import Marker, TimelineAnalysisResult, TranscriptTurn
from ..core.text import TextPatterns
from ..core.timestamps import build_relative_turn_seconds
from ..core.utils import format_js_number
from ..utils.config import AnalysisConfig
from .markers import MarkerDetector
from .momentum import build_momentum_points
from .pruner import prune_markers
from .segmenter import segment_transcript

logger = logging.getLogger(__name__)

HASH_PREFIX = "tl_"
_TURN_SEPARATOR = "||"


def _hash_input(turns: Sequence[TranscriptTurn]) -> str:
    return _TURN_SEPARATOR.join(
        "|".join([
            turn.id,
            turn.role,
            turn.content,
            format_js_number(turn.timestamp_ms),
            turn.created_at or "",
            format_js_number(turn.answer_duration_sec),
        ])
        for turn in turns
    )


def build_transcript_hash(turns: Sequence[TranscriptTurn]) -> str:
    """
    Fast, order-sensitive content hash of a transcript (cache key only).

    DJB2 variant (``hash * 33 XOR code unit``, seeded at 5381) over UTF-16
    code units, kept to 32 bits and rendered as 8 hex digits.

    Example:
        >>> build_transcript_hash([])
        'tl_00001505'
    """
    data = _hash_input(turns).encode("utf-16-le", "surrogatepass")
    value = 5381
    for offset in range(0, len(data), 2):
        code_unit = data[offset] | (data[offset + 1] << 8)
        value = ((value * 33) ^ code_unit) & 0xFFFFFFFF
    return f"{HASH_PREFIX}{value:08x}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TimelineAnalyzer:
    """
    Deterministic timeline analysis engine.

    Holds only immutable settings and compiled patterns, so one instance can
    serve concurrent callers.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize the analyzer.

        Args:
            config: Analysis settings; built-in defaults when None
        """
        self.config = config or AnalysisConfig()
        self.patterns = TextPatterns.from_config(self.config.vocabulary)
        self.detector = MarkerDetector(
            config=self.config.markers,
            scoring=self.config.scoring,
            patterns=self.patterns,
        )

    def analyze(self, session_id: str, turns: Sequence[TranscriptTurn]) -> TimelineAnalysisResult:
        """
        Build the complete timeline analysis for a transcript.

        Args:
            session_id: Caller-supplied opaque session key
            turns: Transcript turns in display order

        Returns:
            TimelineAnalysisResult; only ``computed_at`` varies between calls
            with identical turns
        """
        turns = list(turns)
        segments = segment_transcript(turns, self.patterns, self.config.scoring)
        candidates = self.detector.detect(segments)
        kept = prune_markers(candidates, self.config.markers.limits)

        turn_seconds = build_relative_turn_seconds(turns)
        markers: List[Marker] = [
            candidate.to_marker(
                marker_id=f"marker-{position}",
                event_time_sec=(
                    turn_seconds[candidate.event_turn_index]
                    if candidate.event_turn_index < len(turn_seconds) else None
                ),
            )
            for position, candidate in enumerate(kept)
        ]

        result = TimelineAnalysisResult(
            session_id=session_id,
            computed_at=_now_iso(),
            transcript_hash=build_transcript_hash(turns),
            segments=segments,
            markers=markers,
            momentum_points=build_momentum_points(segments),
        )

        logger.info(
            f"Timeline analysis for session {session_id}: {len(turns)} turns, "
            f"{len(segments)} segments, {len(markers)}/{len(candidates)} markers kept"
        )
        return result


# Global analyzer instance
_timeline_analyzer: Optional[TimelineAnalyzer] = None


def get_timeline_analyzer(config: Optional[AnalysisConfig] = None) -> TimelineAnalyzer:
    """Get the global analyzer, or a fresh one when ``config`` is given."""
    global _timeline_analyzer
    if config is not None:
        return TimelineAnalyzer(config)
    if _timeline_analyzer is None:
        _timeline_analyzer = TimelineAnalyzer()
    return _timeline_analyzer


def build_timeline_analysis(session_id: str,
                            turns: Sequence[TranscriptTurn],
                            config: Optional[AnalysisConfig] = None) -> TimelineAnalysisResult:
    """Analyze a transcript with the global (or a configured) analyzer."""
    return get_timeline_analyzer(config).analyze(session_id, turns)
