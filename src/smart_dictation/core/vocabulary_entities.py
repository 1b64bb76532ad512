"""Vocabulary entities: word entries, quiz results and test records."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

UNCATEGORIZED = "Uncategorized"

MAX_PROFICIENCY = 5


@dataclass
class WordEntry:
    """A single vocabulary item and its spaced-repetition state.

    Attributes:
        id: Opaque identifier, stable for the lifetime of the entry.
        source_text: English side of the pair.
        target_text: Chinese side of the pair.
        category: Denormalized name of the owning category, if known.
        last_reviewed_at: Epoch milliseconds of the last review, None if never reviewed.
        review_interval_days: Days until the word is due again.
        proficiency: Learner proficiency in the range 0-5.
    """

    id: str
    source_text: str
    target_text: str
    category: Optional[str] = None
    last_reviewed_at: Optional[int] = None
    review_interval_days: int = 0
    proficiency: int = 0

    @property
    def is_new(self) -> bool:
        return self.last_reviewed_at is None


# Category name -> ordered words. Every entry lives in exactly one category.
Library = Dict[str, List[WordEntry]]


@dataclass
class QuizResult:
    """Outcome of one dictation question."""

    word_id: str
    is_correct: bool
    user_answer: str
    correct_answer: str
    timestamp: int


@dataclass(frozen=True)
class MissedWord:
    source_text: str
    target_text: str


@dataclass(frozen=True)
class TestRecord:
    """Immutable summary of one completed quiz."""

    id: str
    date: int
    score: int
    total: int
    wrong_words: List[MissedWord] = field(default_factory=list)
