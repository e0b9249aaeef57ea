"""
Interview Timeline Data Models

Value objects produced by the analysis engine. Attributes are snake_case;
``to_dict`` renders the camelCase wire format consumed by the presentation
layer and the result cache.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {_to_camel(key): camelize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [camelize(item) for item in value]
    return value


def _pick(data: Dict[str, Any], name: str, default: Any = None) -> Any:
    """Read ``name`` from ``data`` in either camelCase or snake_case."""
    camel = _to_camel(name)
    if camel in data:
        return data[camel]
    return data.get(name, default)


@dataclass
class TranscriptTurn:
    """One turn of interview dialogue, as supplied by the session layer."""
    id: str
    role: str  # 'assistant' (interviewer) or 'user' (candidate)
    content: str
    created_at: Optional[str] = None
    timestamp_ms: Optional[float] = None
    answer_duration_sec: Optional[float] = None


@dataclass(frozen=True)
class SegmentScores:
    """Five independent score dimensions, each in [1, 5]."""
    relevance: float
    structure: float
    specificity: float
    impact: float
    clarity: float

    def values(self) -> List[float]:
        return [self.relevance, self.structure, self.specificity, self.impact, self.clarity]


@dataclass(frozen=True)
class Segment:
    """
    One interviewer question paired with the candidate answer turns that
    follow it, up to the next interviewer turn.
    """
    id: str
    segment_index: int
    start_turn_index: int
    end_turn_index: int
    question_turn_index: int
    answer_turn_start_index: int
    answer_turn_end_index: int
    question: str
    answer: str
    follow_up_count: int
    latency_sec: Optional[float]
    scores: SegmentScores
    average_score: float
    evidence_snippet: str

    @property
    def center_turn_index(self) -> int:
        """Rounded midpoint of the question and the last answer turn."""
        return int((self.question_turn_index + self.answer_turn_end_index + 1) // 2)

    def to_dict(self) -> Dict[str, Any]:
        return camelize(asdict(self))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Segment":
        scores = data["scores"]
        return cls(
            id=data["id"],
            segment_index=_pick(data, "segment_index"),
            start_turn_index=_pick(data, "start_turn_index"),
            end_turn_index=_pick(data, "end_turn_index"),
            question_turn_index=_pick(data, "question_turn_index"),
            answer_turn_start_index=_pick(data, "answer_turn_start_index"),
            answer_turn_end_index=_pick(data, "answer_turn_end_index"),
            question=data["question"],
            answer=data["answer"],
            follow_up_count=_pick(data, "follow_up_count"),
            latency_sec=_pick(data, "latency_sec"),
            scores=SegmentScores(**scores),
            average_score=_pick(data, "average_score"),
            evidence_snippet=_pick(data, "evidence_snippet"),
        )


@dataclass(frozen=True)
class Marker:
    """A single notable moment attached to one segment."""
    id: str
    type: str
    category: str
    segment_index: int
    event_turn_index: int
    event_time_sec: Optional[float]
    severity: float
    confidence: float
    short_label: str
    rationale: str
    why_it_matters: str
    evidence_snippet: str
    turn_start_index: int
    turn_end_index: int
    actionable_improvement: str

    def to_dict(self) -> Dict[str, Any]:
        return camelize(asdict(self))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Marker":
        return cls(**{name: _pick(data, name) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class MomentumPoint:
    """One smoothed 0-100 momentum value keyed to a segment."""
    segment_index: int
    event_turn_index: int
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return camelize(asdict(self))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MomentumPoint":
        return cls(**{name: _pick(data, name) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class TimelineAnalysisResult:
    """
    Complete timeline analysis for one transcript.

    The unit of caching: stored keyed by ``(session_id, transcript_hash)``
    and recomputed whenever the hash changes.
    """
    session_id: str
    computed_at: str
    transcript_hash: str
    segments: List[Segment] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    momentum_points: List[MomentumPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return camelize(asdict(self))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimelineAnalysisResult":
        return cls(
            session_id=_pick(data, "session_id"),
            computed_at=_pick(data, "computed_at"),
            transcript_hash=_pick(data, "transcript_hash"),
            segments=[Segment.from_dict(item) for item in data.get("segments", [])],
            markers=[Marker.from_dict(item) for item in data.get("markers", [])],
            momentum_points=[
                MomentumPoint.from_dict(item) for item in _pick(data, "momentum_points", [])
            ],
        )

    def summary(self) -> Dict[str, Any]:
        """Flat counts for logging and CLI display."""
        by_type: Dict[str, int] = {}
        for marker in self.markers:
            by_type[marker.type] = by_type.get(marker.type, 0) + 1
        return {
            'session_id': self.session_id,
            'transcript_hash': self.transcript_hash,
            'segments': len(self.segments),
            'markers': len(self.markers),
            **{f'markers_{key}': value for key, value in sorted(by_type.items())},
            'final_momentum': self.momentum_points[-1].value if self.momentum_points else 0.0,
        }
