"""
Interview Timeline Analysis: Marker Detection

Flags notable moments ("markers") in scored segments. Rationale and coaching
text is canned per marker type; only the anchors, evidence snippet, severity
and confidence are derived from the transcript.
"""

from dataclasses import dataclass
import logging
from typing import Dict, List, Optional, Sequence

from ..core.models import Marker, Segment
from ..core.text import DEFAULT_PATTERNS, TextPatterns
from ..core.utils import clamp, clamp_score, clip_snippet, first_sentence
from ..utils.config import MarkerConfig, ScoringConfig

logger = logging.getLogger(__name__)

MARKER_CATEGORIES: Dict[str, str] = {
    "strong_answer": "highlight",
    "standout_quote": "highlight",
    "weak_answer": "weak_point",
    "deep_follow_up": "follow_up",
    "confidence_dip": "confidence",
    "pause_latency": "pacing",
}

MARKER_IMPROVEMENTS: Dict[str, str] = {
    "strong_answer": "Reuse this answer structure in future questions: context, concrete action, measurable result.",
    "weak_answer": "Answer directly first, then add one concrete example with what changed because of your action.",
    "deep_follow_up": "Prepare one layer deeper evidence for this topic so follow-ups do not expose gaps.",
    "confidence_dip": "Replace uncertainty phrases with a clear claim and one concrete supporting detail.",
    "pause_latency": "Use a short opening sentence while you think to reduce dead-air before your core answer.",
    "standout_quote": "Capture this phrasing pattern and adapt it as a reusable interview talking point.",
}

# Views offered by the presentation layer, keyed to marker categories
MARKER_VIEWS: Dict[str, Optional[frozenset]] = {
    "all": None,
    "highlights": frozenset({"highlight"}),
    "weak_points": frozenset({"weak_point"}),
    "follow_ups": frozenset({"follow_up"}),
    "pacing": frozenset({"pacing", "confidence"}),
}


@dataclass(frozen=True)
class MarkerCandidate:
    """A detected marker before pruning; ids and times are attached later."""
    type: str
    segment_index: int
    event_turn_index: int
    severity: float
    confidence: float
    short_label: str
    rationale: str
    why_it_matters: str
    evidence_snippet: str
    turn_start_index: int
    turn_end_index: int

    @property
    def category(self) -> str:
        return marker_category(self.type)

    def to_marker(self, marker_id: str, event_time_sec: Optional[float]) -> Marker:
        return Marker(
            id=marker_id,
            type=self.type,
            category=self.category,
            segment_index=self.segment_index,
            event_turn_index=self.event_turn_index,
            event_time_sec=event_time_sec,
            severity=self.severity,
            confidence=self.confidence,
            short_label=self.short_label,
            rationale=self.rationale,
            why_it_matters=self.why_it_matters,
            evidence_snippet=self.evidence_snippet,
            turn_start_index=self.turn_start_index,
            turn_end_index=self.turn_end_index,
            actionable_improvement=MARKER_IMPROVEMENTS[self.type],
        )


def marker_category(marker_type: str) -> str:
    return MARKER_CATEGORIES[marker_type]


def marker_confidence(marker_type: str, segment: Segment, uncertainty_hits: int) -> float:
    """
    Presentation weight in [0, 1] for a marker on ``segment``.

    Each type has its own floor; confidence grows with the strength of the
    triggering signal.
    """
    scores = segment.scores
    if marker_type == "strong_answer":
        raw = 0.45 + (segment.average_score - 3.8) * 0.28 + (scores.specificity - 3.5) * 0.18
        return clamp(raw, 0.5, 1.0)
    if marker_type == "weak_answer":
        raw = 0.4 + (3 - min(scores.relevance, scores.structure)) * 0.28
        return clamp(raw, 0.45, 1.0)
    if marker_type == "deep_follow_up":
        return clamp(0.45 + segment.follow_up_count * 0.12, 0.5, 1.0)
    if marker_type == "confidence_dip":
        raw = 0.34 + uncertainty_hits * 0.11 + (3 - scores.specificity) * 0.12
        return clamp(raw, 0.4, 1.0)
    if marker_type == "pause_latency":
        return clamp(0.35 + (segment.latency_sec or 0.0) / 18, 0.45, 1.0)
    if marker_type == "standout_quote":
        return 0.72
    return 0.6


class MarkerDetector:
    """
    Emits marker candidates for a list of segments.

    Per-segment rules are evaluated independently, so one segment may emit
    several markers. Standout quotes are chosen once over the whole set.
    """

    def __init__(self,
                 config: Optional[MarkerConfig] = None,
                 scoring: Optional[ScoringConfig] = None,
                 patterns: Optional[TextPatterns] = None):
        self.config = config or MarkerConfig()
        self.scoring = scoring or ScoringConfig()
        self.patterns = patterns or DEFAULT_PATTERNS

    def detect(self, segments: Sequence[Segment]) -> List[MarkerCandidate]:
        candidates: List[MarkerCandidate] = []
        for segment in segments:
            candidates.extend(self._detect_segment(segment))
        candidates.extend(self._detect_standout_quotes(segments))

        logger.debug(f"Detected {len(candidates)} marker candidates across {len(segments)} segments")
        return candidates

    def _answer_evidence(self, segment: Segment) -> str:
        return first_sentence(segment.answer, segment.question, self.scoring.sentence_snippet_length)

    def _question_evidence(self, segment: Segment) -> str:
        return clip_snippet(segment.question, self.scoring.question_snippet_length)

    def _detect_segment(self, segment: Segment) -> List[MarkerCandidate]:
        cfg = self.config
        scores = segment.scores
        uncertainty_hits = self.patterns.uncertainty_hits(segment.answer)
        found: List[MarkerCandidate] = []

        if segment.average_score >= cfg.strong_min_average and scores.specificity >= cfg.strong_min_specificity:
            found.append(MarkerCandidate(
                type="strong_answer",
                segment_index=segment.segment_index,
                event_turn_index=segment.answer_turn_start_index,
                severity=clamp_score((segment.average_score + scores.specificity) / 2),
                confidence=marker_confidence("strong_answer", segment, uncertainty_hits),
                short_label="Strong STAR",
                rationale="The answer stayed structured, specific, and outcome-focused.",
                why_it_matters="Strong STAR-style responses build trust quickly and keep interview momentum on your side.",
                evidence_snippet=self._answer_evidence(segment),
                turn_start_index=segment.answer_turn_start_index,
                turn_end_index=segment.answer_turn_end_index,
            ))

        if scores.relevance <= cfg.weak_max_score or scores.structure <= cfg.weak_max_score:
            found.append(MarkerCandidate(
                type="weak_answer",
                segment_index=segment.segment_index,
                event_turn_index=segment.answer_turn_start_index,
                severity=clamp_score(5 - min(scores.relevance, scores.structure) + 1),
                confidence=marker_confidence("weak_answer", segment, uncertainty_hits),
                short_label="Vague impact",
                rationale="The response drifted from the question or lacked clear sequencing.",
                why_it_matters="When relevance or structure slips, interviewers probe harder and score confidence lower.",
                evidence_snippet=self._answer_evidence(segment),
                turn_start_index=segment.answer_turn_start_index,
                turn_end_index=segment.answer_turn_end_index,
            ))

        if segment.follow_up_count >= cfg.follow_up_min_depth:
            found.append(MarkerCandidate(
                type="deep_follow_up",
                segment_index=segment.segment_index,
                event_turn_index=segment.question_turn_index,
                severity=clamp_score(min(5, 2 + segment.follow_up_count)),
                confidence=marker_confidence("deep_follow_up", segment, uncertainty_hits),
                short_label="Deep probe",
                rationale=f"Interviewer probed this topic {segment.follow_up_count} times, signaling unresolved detail.",
                why_it_matters="Follow-up chains usually indicate the initial answer lacked depth or precision.",
                evidence_snippet=self._question_evidence(segment),
                turn_start_index=segment.question_turn_index,
                turn_end_index=segment.answer_turn_end_index,
            ))

        if uncertainty_hits > 0 and scores.specificity <= cfg.confidence_dip_max_specificity:
            found.append(MarkerCandidate(
                type="confidence_dip",
                segment_index=segment.segment_index,
                event_turn_index=segment.answer_turn_start_index,
                severity=clamp_score(min(5, 2 + uncertainty_hits * 0.7 + (3 - scores.specificity))),
                confidence=marker_confidence("confidence_dip", segment, uncertainty_hits),
                short_label="Hesitation",
                rationale="Uncertainty language appeared alongside low-specificity evidence.",
                why_it_matters="Repeated hesitation can weaken perceived ownership, even when your underlying experience is solid.",
                evidence_snippet=self._answer_evidence(segment),
                turn_start_index=segment.answer_turn_start_index,
                turn_end_index=segment.answer_turn_end_index,
            ))

        latency = segment.latency_sec
        if latency is not None and latency >= cfg.pause_min_latency_sec:
            if latency >= cfg.pause_severe_latency_sec:
                severity = 5.0
            elif latency >= cfg.pause_moderate_latency_sec:
                severity = 4.0
            else:
                severity = 3.0
            found.append(MarkerCandidate(
                type="pause_latency",
                segment_index=segment.segment_index,
                event_turn_index=segment.question_turn_index,
                severity=severity,
                confidence=marker_confidence("pause_latency", segment, uncertainty_hits),
                short_label="Long pause",
                rationale=f"Response latency was {int(latency + 0.5)}s before answering this question.",
                why_it_matters="Long silence can read as uncertainty, so keeping verbal momentum helps interviewer confidence.",
                evidence_snippet=self._question_evidence(segment),
                turn_start_index=segment.question_turn_index,
                turn_end_index=segment.answer_turn_start_index,
            ))

        return found

    def _detect_standout_quotes(self, segments: Sequence[Segment]) -> List[MarkerCandidate]:
        """Quote the two strongest segments and the single weakest one."""
        if not segments:
            return []

        strongest = sorted(segments, key=lambda s: -s.average_score)[:2]
        weakest = sorted(segments, key=lambda s: s.average_score)[:1]
        weakest_indices = {segment.segment_index for segment in weakest}

        seen = set()
        found: List[MarkerCandidate] = []
        for segment in strongest + weakest:
            if segment.segment_index in seen:
                continue
            seen.add(segment.segment_index)

            is_weak_quote = segment.segment_index in weakest_indices
            found.append(MarkerCandidate(
                type="standout_quote",
                segment_index=segment.segment_index,
                event_turn_index=segment.center_turn_index,
                severity=clamp_score(abs(segment.average_score - 3) + 2),
                confidence=marker_confidence(
                    "standout_quote", segment, self.patterns.uncertainty_hits(segment.answer)
                ),
                short_label="Quote to fix" if is_weak_quote else "Key quote",
                rationale=(
                    "This line captures where the answer lost precision."
                    if is_weak_quote else
                    "This line captures a high-signal, persuasive moment."
                ),
                why_it_matters=(
                    "Pinpointing weak phrasing makes it easier to rewrite and rehearse better framing."
                    if is_weak_quote else
                    "Strong phrasing is reusable language you can carry into future interviews."
                ),
                evidence_snippet=self._answer_evidence(segment),
                turn_start_index=segment.answer_turn_start_index,
                turn_end_index=segment.answer_turn_end_index,
            ))

        return found


def detect_markers(segments: Sequence[Segment],
                   config: Optional[MarkerConfig] = None,
                   patterns: Optional[TextPatterns] = None) -> List[MarkerCandidate]:
    """Detect marker candidates with the given (or default) settings."""
    return MarkerDetector(config=config, patterns=patterns).detect(segments)


def filter_markers(markers: Sequence[Marker], view: str = "all") -> List[Marker]:
    """
    Select the markers shown in a presentation view.

    Raises:
        ValueError: If ``view`` is not one of ``MARKER_VIEWS``
    """
    if view not in MARKER_VIEWS:
        raise ValueError(f"Unknown marker view '{view}'. Must be one of: {list(MARKER_VIEWS)}")
    categories = MARKER_VIEWS[view]
    if categories is None:
        return list(markers)
    return [marker for marker in markers if marker.category in categories]
