from typing import List, Optional

import pytest

from interview_timeline.core.models import Segment, SegmentScores, TranscriptTurn
from interview_timeline.core.utils import clamp_score

STRONG_QUESTION = "Tell me about a time you improved a process."
STRONG_ANSWER = (
    "At my last job the release process kept slipping, so this was the time I stepped in. "
    "First I mapped every handoff and then introduced a lightweight checklist with the QA lead. "
    "Over two sprints we reduced deployment delays by 28% and improved on-time releases "
    "from 6 to 11 per quarter. As a result, incident pages for users dropped by half."
)
VAGUE_QUESTION = "What exactly did you measure?"
VAGUE_ANSWER = "I think it was mostly fine, kind of hard to say"


def make_turns(*pairs, start_ms: Optional[float] = None, step_ms: float = 5000) -> List[TranscriptTurn]:
    """Build alternating assistant/user turns from (question, answer) pairs."""
    turns: List[TranscriptTurn] = []
    for question, answer in pairs:
        for role, content in (("assistant", question), ("user", answer)):
            timestamp = None
            if start_ms is not None:
                timestamp = start_ms + len(turns) * step_ms
            turns.append(TranscriptTurn(
                id=f"t{len(turns) + 1}",
                role=role,
                content=content,
                timestamp_ms=timestamp,
            ))
    return turns


@pytest.fixture
def strong_turns() -> List[TranscriptTurn]:
    return make_turns((STRONG_QUESTION, STRONG_ANSWER))


@pytest.fixture
def mixed_turns() -> List[TranscriptTurn]:
    return make_turns(
        (STRONG_QUESTION, STRONG_ANSWER),
        (VAGUE_QUESTION, VAGUE_ANSWER),
        ("Describe the migration project timeline and budget.", "We planned it over a quarter with a fixed budget."),
        ("Describe the migration project budget constraints.", "Finance capped spend at 40k and we tracked it weekly."),
        ("Describe the migration project budget approvals.", "The director signed off after the first milestone."),
        start_ms=1_700_000_000_000,
    )


@pytest.fixture
def segment_factory():
    """Create a Segment with uniform scores around ``average``."""
    def factory(segment_index: int, average: float, question_turn_index: Optional[int] = None,
                answer: str = "An answer.", latency_sec: Optional[float] = None,
                follow_up_count: int = 0) -> Segment:
        question_index = segment_index * 2 if question_turn_index is None else question_turn_index
        scores = SegmentScores(average, average, average, average, average)
        return Segment(
            id=f"segment-{segment_index}",
            segment_index=segment_index,
            start_turn_index=question_index,
            end_turn_index=question_index + 1,
            question_turn_index=question_index,
            answer_turn_start_index=question_index + 1,
            answer_turn_end_index=question_index + 1,
            question=f"Question {segment_index}?",
            answer=answer,
            follow_up_count=follow_up_count,
            latency_sec=latency_sec,
            scores=scores,
            average_score=clamp_score(average),
            evidence_snippet=answer,
        )
    return factory
