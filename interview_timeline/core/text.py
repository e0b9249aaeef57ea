"""
Interview Timeline Text Metrics

Tokenization, token-set similarity and regex cue detection over answer and
question text. All vocabularies come from ``VocabularyConfig`` so that the
heuristics can be tuned without touching control flow.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Pattern, Set

from ..utils.config import VocabularyConfig
from .utils import normalize_whitespace

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9\s]")
_NUMBER = re.compile(r"\b\d+(?:\.\d+)?%?\b")
_CAPITALIZED_WORD = re.compile(r"\b[A-Z][a-z]{2,}\b")
_SENTENCE_BREAK = re.compile(r"[.!?]")


def _alternation(fragments: List[str], word_bounded: bool = True) -> Pattern:
    body = "|".join(fragments)
    if word_bounded:
        return re.compile(rf"\b({body})\b", re.IGNORECASE)
    return re.compile(rf"({body})", re.IGNORECASE)


@dataclass(frozen=True)
class TextPatterns:
    """Compiled vocabulary tables."""
    stop_words: FrozenSet[str]
    follow_up_cue: Pattern
    uncertainty: Pattern
    impact: Pattern
    detail: Pattern
    sequence: Pattern
    star: Pattern

    @classmethod
    def from_config(cls, vocabulary: Optional[VocabularyConfig] = None) -> "TextPatterns":
        vocabulary = vocabulary or VocabularyConfig()
        return cls(
            stop_words=frozenset(vocabulary.stop_words),
            # Cues match anywhere in the question, not only on word boundaries
            follow_up_cue=_alternation(vocabulary.follow_up_cues, word_bounded=False),
            uncertainty=_alternation(vocabulary.uncertainty_phrases),
            impact=_alternation(vocabulary.impact_verbs),
            detail=_alternation(vocabulary.detail_keywords),
            sequence=_alternation(vocabulary.sequence_words),
            star=_alternation(vocabulary.star_words),
        )

    def tokenize(self, value: str) -> List[str]:
        """
        Split text into meaningful lowercase tokens.

        Non-alphanumeric characters become separators; single-character
        tokens and stop words are dropped.

        Example:
            >>> DEFAULT_PATTERNS.tokenize("Walk me through the A/B test!")
            ['walk', 'me', 'through', 'test']
        """
        cleaned = _NON_ALPHANUMERIC.sub(" ", normalize_whitespace(value).lower())
        return [
            token for token in cleaned.split()
            if len(token) > 1 and token not in self.stop_words
        ]

    def token_set(self, value: str) -> Set[str]:
        return set(self.tokenize(value))

    def uncertainty_hits(self, value: str) -> int:
        return len(self.uncertainty.findall(value))

    def impact_hits(self, value: str) -> int:
        return len(self.impact.findall(value))

    def detail_hits(self, value: str) -> int:
        return len(self.detail.findall(value))

    def has_sequence_cue(self, value: str) -> bool:
        return self.sequence.search(value) is not None

    def has_star_language(self, value: str) -> bool:
        return self.star.search(value) is not None

    def is_follow_up_cue(self, question: str) -> bool:
        return self.follow_up_cue.search(question) is not None


DEFAULT_PATTERNS = TextPatterns.from_config()


def jaccard_similarity(a: Set[str], b: Set[str]) -> float:
    """Token-set Jaccard similarity; two empty sets score 0."""
    if not a and not b:
        return 0.0
    intersection = len(a & b)
    union = len(a) + len(b) - intersection
    return intersection / union if union else 0.0


def count_numbers(value: str) -> int:
    """Count numeric tokens, including decimals and percentages."""
    return len(_NUMBER.findall(value))


def has_number(value: str) -> bool:
    return _NUMBER.search(value) is not None


def count_capitalized_words(value: str) -> int:
    return len(_CAPITALIZED_WORD.findall(value))


def count_sentences(value: str) -> int:
    """Count non-empty parts between ``.``, ``!`` and ``?``; at least 1."""
    parts = [part for part in _SENTENCE_BREAK.split(value) if part]
    return max(1, len(parts))


def count_words(value: str) -> int:
    return len(value.split())
