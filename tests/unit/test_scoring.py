import pytest

from interview_timeline.analysis.scoring import (
    average_score,
    score_answer,
    score_clarity,
    score_impact,
    score_relevance,
    score_specificity,
    score_structure,
)
from interview_timeline.core.utils import round_half_up

from conftest import STRONG_ANSWER, STRONG_QUESTION, VAGUE_ANSWER, VAGUE_QUESTION


def test_strong_answer_scores():
    scores = score_answer(STRONG_QUESTION, STRONG_ANSWER)
    assert scores.relevance == 5.0
    assert scores.structure == 5.0
    assert scores.specificity == 4.5
    assert scores.impact == 4.0
    assert scores.clarity == 4.3
    assert average_score(scores) == 4.6


def test_vague_answer_scores():
    scores = score_answer(VAGUE_QUESTION, VAGUE_ANSWER)
    assert scores.relevance == 1.0
    assert scores.structure == 1.5
    assert scores.specificity == 1.4


def test_empty_answer_scores():
    scores = score_answer("What did you ship?", "   ")
    assert scores.relevance == 2.0
    assert [scores.structure, scores.specificity, scores.impact, scores.clarity] == [1.0] * 4


def test_relevance_without_meaningful_question_tokens():
    assert score_relevance("And you?", "I built the billing service in Go with two teammates") == 3.0
    assert score_relevance("And you?", "Yes") == 2.0


def test_individual_dimensions():
    assert score_impact("We cut costs by 30%") == 3.2
    assert score_clarity("Maybe.") == 2.5
    assert score_structure("") == 1.0
    assert score_specificity("") == 1.0


@pytest.mark.parametrize("answer", [
    "",
    "no",
    "um uh maybe I think probably kind of sort of not sure " * 10,
    "First then finally because result situation task action. " * 20,
    "We improved 10% 20% 30% 40% revenue retention KPI metric at Acme Google Stripe. " * 5,
])
def test_scores_stay_within_bounds(answer):
    scores = score_answer("Walk me through your approach to revenue", answer)
    for value in scores.values():
        assert 1.0 <= value <= 5.0
        assert value == round_half_up(value, 1)


def test_round_half_up():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(4.25, 1) == 4.3
    assert round_half_up(-0.5) == 0.0
