"""
Interview Timeline Boundary Schemas

Pydantic models used to validate untrusted data crossing into or out of the
engine: transcripts from the session layer and analysis results read back
from (or about to be written to) the cache.
"""

from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .models import TimelineAnalysisResult, TranscriptTurn

MarkerType = Literal[
    "strong_answer",
    "weak_answer",
    "deep_follow_up",
    "confidence_dip",
    "pause_latency",
    "standout_quote",
]
MarkerCategory = Literal["highlight", "weak_point", "follow_up", "confidence", "pacing"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranscriptTurnSchema(_CamelModel):
    id: str = Field(..., min_length=1)
    role: Literal["assistant", "user"]
    content: str
    timestamp_ms: Optional[float] = None
    created_at: Optional[str] = None
    answer_duration_sec: Optional[float] = Field(default=None, ge=0)

    def to_turn(self) -> TranscriptTurn:
        return TranscriptTurn(
            id=self.id,
            role=self.role,
            content=self.content,
            created_at=self.created_at,
            timestamp_ms=self.timestamp_ms,
            answer_duration_sec=self.answer_duration_sec,
        )


class SegmentScoresSchema(BaseModel):
    relevance: float = Field(..., ge=1, le=5)
    structure: float = Field(..., ge=1, le=5)
    specificity: float = Field(..., ge=1, le=5)
    impact: float = Field(..., ge=1, le=5)
    clarity: float = Field(..., ge=1, le=5)


class SegmentSchema(_CamelModel):
    id: str = Field(..., min_length=1)
    segment_index: int = Field(..., ge=0)
    start_turn_index: int = Field(..., ge=0)
    end_turn_index: int = Field(..., ge=0)
    question_turn_index: int = Field(..., ge=0)
    answer_turn_start_index: int = Field(..., ge=0)
    answer_turn_end_index: int = Field(..., ge=0)
    question: str
    answer: str
    follow_up_count: int = Field(..., ge=0)
    latency_sec: Optional[float]
    scores: SegmentScoresSchema
    average_score: float = Field(..., ge=1, le=5)
    evidence_snippet: str


class MarkerSchema(_CamelModel):
    id: str = Field(..., min_length=1)
    type: MarkerType
    category: MarkerCategory
    segment_index: int = Field(..., ge=0)
    event_turn_index: int = Field(..., ge=0)
    event_time_sec: Optional[float] = Field(..., ge=0)
    severity: float = Field(..., ge=1, le=5)
    confidence: float = Field(..., ge=0, le=1)
    short_label: str = Field(..., min_length=1)
    rationale: str = Field(..., min_length=1)
    why_it_matters: str = Field(..., min_length=1)
    evidence_snippet: str = Field(..., min_length=1)
    turn_start_index: int = Field(..., ge=0)
    turn_end_index: int = Field(..., ge=0)
    actionable_improvement: str = Field(..., min_length=1)


class MomentumPointSchema(_CamelModel):
    segment_index: int = Field(..., ge=0)
    event_turn_index: int = Field(..., ge=0)
    value: float = Field(..., ge=0, le=100)


class TimelineAnalysisResultSchema(_CamelModel):
    session_id: str = Field(..., min_length=1)
    computed_at: str = Field(..., min_length=1)
    transcript_hash: str = Field(..., min_length=1)
    segments: List[SegmentSchema]
    markers: List[MarkerSchema]
    momentum_points: List[MomentumPointSchema]


def parse_transcript(payload: Iterable[Any]) -> List[TranscriptTurn]:
    """
    Validate raw transcript turns and convert them to ``TranscriptTurn``.

    Raises:
        pydantic.ValidationError: If any turn is structurally invalid
    """
    return [TranscriptTurnSchema.model_validate(item).to_turn() for item in payload]


def validate_analysis_result(payload: Any) -> Optional[TimelineAnalysisResult]:
    """
    Validate a serialized analysis result.

    Returns:
        The rebuilt result, or None when ``payload`` fails validation
    """
    if isinstance(payload, TimelineAnalysisResult):
        payload = payload.to_dict()
    try:
        parsed = TimelineAnalysisResultSchema.model_validate(payload)
    except ValidationError:
        return None
    return TimelineAnalysisResult.from_dict(parsed.model_dump(by_alias=True))


def analysis_result_errors(payload: Any) -> List[str]:
    """Human-readable validation errors for ``payload`` (empty when valid)."""
    if isinstance(payload, TimelineAnalysisResult):
        payload = payload.to_dict()
    try:
        TimelineAnalysisResultSchema.model_validate(payload)
    except ValidationError as e:
        return [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
    return []
