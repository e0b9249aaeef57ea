"""
Interview Timeline Analysis: Answer Scoring

Rule-based scoring of one question/answer pair on five independent
dimensions. Every score is clamped to [1, 5] at one-decimal resolution.
"""

from typing import Optional

from ..core.models import SegmentScores
from ..core.text import (
    DEFAULT_PATTERNS,
    TextPatterns,
    count_capitalized_words,
    count_numbers,
    count_sentences,
    count_words,
    has_number,
)
from ..core.utils import clamp_score, normalize_whitespace


def score_relevance(question: str, answer: str, patterns: TextPatterns = DEFAULT_PATTERNS) -> float:
    """
    Share of meaningful question tokens echoed by the answer, banded 1-5.

    Falls back to answer-length banding when the question has no meaningful
    tokens. An empty answer scores 2.
    """
    if not normalize_whitespace(answer):
        return 2.0

    answer_tokens = patterns.token_set(answer)
    question_tokens = patterns.token_set(question)
    if not question_tokens:
        if len(answer_tokens) > 8:
            return 4.0
        return 3.0 if len(answer_tokens) > 3 else 2.0

    ratio = len(question_tokens & answer_tokens) / len(question_tokens)
    if ratio >= 0.45:
        return 5.0
    if ratio >= 0.30:
        return 4.0
    if ratio >= 0.18:
        return 3.0
    if ratio >= 0.08:
        return 2.0
    return 1.0


def score_structure(answer: str, patterns: TextPatterns = DEFAULT_PATTERNS) -> float:
    normalized = normalize_whitespace(answer)
    if not normalized:
        return 1.0

    length = len(normalized)
    if length > 260:
        length_bonus = 2.0
    elif length > 140:
        length_bonus = 1.5
    elif length > 80:
        length_bonus = 1.0
    else:
        length_bonus = 0.0

    score = 1.5 + length_bonus
    if count_sentences(normalized) >= 3:
        score += 0.8
    if patterns.has_sequence_cue(normalized):
        score += 0.8
    if patterns.has_star_language(normalized):
        score += 0.8

    return clamp_score(score)


def score_specificity(answer: str, patterns: TextPatterns = DEFAULT_PATTERNS) -> float:
    """Numbers, domain detail keywords and named things (capitalized words)."""
    normalized = normalize_whitespace(answer)
    if not normalized:
        return 1.0

    named_entities = count_capitalized_words(normalized)

    score = 1.4
    score += min(2.0, count_numbers(normalized) * 0.7)
    score += min(1.4, patterns.detail_hits(normalized) * 0.45)
    score += min(0.8, max(0, named_entities - 1) * 0.2)

    return clamp_score(score)


def score_impact(answer: str, patterns: TextPatterns = DEFAULT_PATTERNS) -> float:
    normalized = normalize_whitespace(answer)
    if not normalized:
        return 1.0

    score = 1.6
    score += min(2.2, patterns.impact_hits(normalized) * 0.8)
    if has_number(normalized):
        score += 0.8

    return clamp_score(score)


def score_clarity(answer: str, patterns: TextPatterns = DEFAULT_PATTERNS) -> float:
    """Start high and subtract for brevity, hedging and rambling."""
    normalized = normalize_whitespace(answer)
    if not normalized:
        return 1.0

    word_count = count_words(normalized)
    length = len(normalized)

    score = 4.3
    if word_count < 12:
        score -= 1.4
    elif word_count < 24:
        score -= 0.8
    score -= min(1.5, patterns.uncertainty_hits(normalized) * 0.4)
    if length > 520:
        score -= 0.9
    elif length > 340:
        score -= 0.4

    return clamp_score(score)


def score_answer(question: str, answer: str,
                 patterns: Optional[TextPatterns] = None) -> SegmentScores:
    """Score one question/answer pair on all five dimensions."""
    patterns = patterns or DEFAULT_PATTERNS
    return SegmentScores(
        relevance=score_relevance(question, answer, patterns),
        structure=score_structure(answer, patterns),
        specificity=score_specificity(answer, patterns),
        impact=score_impact(answer, patterns),
        clarity=score_clarity(answer, patterns),
    )


def average_score(scores: SegmentScores) -> float:
    values = scores.values()
    return clamp_score(sum(values) / len(values))
