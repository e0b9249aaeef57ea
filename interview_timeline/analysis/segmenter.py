"""
Interview Timeline Analysis: Segmentation

Groups an ordered transcript into question -> answer segments, attaches
response latency and scores, then links consecutive questions into
follow-up chains.
"""

from dataclasses import replace
import logging
from typing import List, Optional, Sequence

from ..core.models import Segment, TranscriptTurn
from ..core.text import DEFAULT_PATTERNS, TextPatterns, jaccard_similarity
from ..core.timestamps import latency_seconds
from ..core.utils import clip_snippet, normalize_whitespace
from ..utils.config import ScoringConfig
from .scoring import average_score, score_answer

logger = logging.getLogger(__name__)


def segment_transcript(turns: Sequence[TranscriptTurn],
                       patterns: Optional[TextPatterns] = None,
                       scoring: Optional[ScoringConfig] = None) -> List[Segment]:
    """
    Split a transcript into scored question/answer segments.

    An assistant turn with non-empty content opens a segment; the ``user``
    turns up to the next assistant turn form its answer. Empty assistant
    turns and turns before the first question belong to no segment.

    Args:
        turns: Transcript turns in display order
        patterns: Compiled vocabulary tables (defaults when None)
        scoring: Scoring settings (defaults when None)

    Returns:
        Segments in transcript order, with ``follow_up_count`` populated

    Example:
        >>> turns = [
        ...     TranscriptTurn("t1", "assistant", "Why did you pick Postgres?"),
        ...     TranscriptTurn("t2", "user", "We needed strong consistency."),
        ... ]
        >>> [s.answer for s in segment_transcript(turns)]
        ['We needed strong consistency.']
    """
    patterns = patterns or DEFAULT_PATTERNS
    scoring = scoring or ScoringConfig()

    segments: List[Segment] = []
    index = 0

    while index < len(turns):
        turn = turns[index]
        question = normalize_whitespace(turn.content)

        if turn.role != "assistant" or not question:
            index += 1
            continue

        answer_indices: List[int] = []
        cursor = index + 1
        while cursor < len(turns) and turns[cursor].role != "assistant":
            if turns[cursor].role == "user":
                answer_indices.append(cursor)
            cursor += 1

        answer = " ".join(
            part for part in (normalize_whitespace(turns[i].content) for i in answer_indices) if part
        )
        answer_start = answer_indices[0] if answer_indices else index
        answer_end = answer_indices[-1] if answer_indices else index
        first_answer = turns[answer_indices[0]] if answer_indices else None

        scores = score_answer(question, answer, patterns)
        segment_index = len(segments)

        segments.append(Segment(
            id=f"segment-{segment_index}",
            segment_index=segment_index,
            start_turn_index=index,
            end_turn_index=answer_end,
            question_turn_index=index,
            answer_turn_start_index=answer_start,
            answer_turn_end_index=answer_end,
            question=question,
            answer=answer,
            follow_up_count=0,
            latency_sec=latency_seconds(turn, first_answer),
            scores=scores,
            average_score=average_score(scores),
            evidence_snippet=clip_snippet(answer or question, scoring.snippet_max_length),
        ))

        index = cursor

    segments = count_follow_ups(segments, patterns, scoring.follow_up_similarity)
    logger.debug(f"Segmented {len(turns)} turns into {len(segments)} segments")
    return segments


def is_follow_up(question: str, previous_question: str,
                 patterns: TextPatterns = DEFAULT_PATTERNS,
                 similarity_threshold: float = 0.30) -> bool:
    """True when ``question`` continues ``previous_question`` by overlap or cue."""
    if patterns.is_follow_up_cue(question):
        return True
    similarity = jaccard_similarity(patterns.token_set(question), patterns.token_set(previous_question))
    return similarity >= similarity_threshold


def count_follow_ups(segments: List[Segment],
                     patterns: TextPatterns = DEFAULT_PATTERNS,
                     similarity_threshold: float = 0.30) -> List[Segment]:
    """
    Populate the follow-up chain counter.

    Segment 0 is never a follow-up. Each later segment either extends the
    previous chain (``previous + 1``) or resets it to 0. The chain is
    uncapped.
    """
    chained: List[Segment] = []
    for position, segment in enumerate(segments):
        if position == 0:
            chained.append(replace(segment, follow_up_count=0))
            continue

        previous = chained[-1]
        if is_follow_up(segment.question, previous.question, patterns, similarity_threshold):
            count = previous.follow_up_count + 1
        else:
            count = 0
        chained.append(replace(segment, follow_up_count=count))

    return chained
