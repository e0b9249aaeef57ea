from interview_timeline.core.text import (
    DEFAULT_PATTERNS,
    TextPatterns,
    count_capitalized_words,
    count_numbers,
    count_sentences,
    jaccard_similarity,
)
from interview_timeline.utils.config import VocabularyConfig


def test_tokenize_drops_stop_words_and_single_characters():
    assert DEFAULT_PATTERNS.tokenize("Walk me through the A/B test!") == ["walk", "me", "through", "test"]


def test_tokenize_collapses_whitespace_and_case():
    assert DEFAULT_PATTERNS.tokenize("  Shipped\n\tRELEASE  2  ") == ["shipped", "release"]


def test_jaccard_similarity():
    assert jaccard_similarity(set(), set()) == 0.0
    assert jaccard_similarity({"a", "b"}, {"b", "c"}) == 1 / 3
    assert jaccard_similarity({"x"}, {"x"}) == 1.0


def test_numeric_and_sentence_counts():
    assert count_numbers("Cut 12% in 3.5 weeks") == 2
    assert count_sentences("") == 1
    assert count_sentences("One. Two! Three?") == 3
    assert count_capitalized_words("We moved Billing to Postgres in Q3") == 2


def test_cue_detection():
    assert DEFAULT_PATTERNS.is_follow_up_cue("Can you walk me through that?")
    assert DEFAULT_PATTERNS.is_follow_up_cue("Quick followup on the rollout")
    assert not DEFAULT_PATTERNS.is_follow_up_cue("Describe your last project.")
    assert DEFAULT_PATTERNS.uncertainty_hits("I think maybe, um, it worked") == 3
    assert DEFAULT_PATTERNS.impact_hits("We improved uptime and cut costs") == 2
    assert DEFAULT_PATTERNS.has_star_language("The situation was tense")


def test_patterns_follow_configured_vocabulary():
    patterns = TextPatterns.from_config(VocabularyConfig(stop_words=["Walk"], impact_verbs=["tripled"]))
    assert patterns.tokenize("walk the dog") == ["the", "dog"]
    assert patterns.impact_hits("Revenue tripled after we improved onboarding") == 1
