"""Review Scheduler - spaced-repetition updates and the due-word query."""

import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from smart_dictation.core import (
    MAX_PROFICIENCY,
    Library,
    MissedWord,
    QuizResult,
    TestRecord,
    WordEntry,
)

MS_PER_DAY = 24 * 60 * 60 * 1000

REVIEW_SESSION_SIZE = 20


@dataclass(frozen=True)
class ReviewOutcome:
    """New library state plus the record summarizing the quiz."""

    library: Library
    record: TestRecord


def next_interval(current_interval: int, is_correct: bool) -> int:
    """Exponential backoff on success, full reset on failure.

    Growth is deliberately uncapped.
    """
    if not is_correct:
        return 0
    return 1 if current_interval == 0 else current_interval * 2


def next_proficiency(current: int, is_correct: bool) -> int:
    if is_correct:
        return min(current + 1, MAX_PROFICIENCY)
    return max(current - 1, 0)


def review_word(word: WordEntry, is_correct: bool, now: int) -> WordEntry:
    """Return an updated copy of word after one answer."""
    return replace(
        word,
        last_reviewed_at=now,
        review_interval_days=next_interval(word.review_interval_days or 0, is_correct),
        proficiency=next_proficiency(word.proficiency or 0, is_correct),
    )


def apply_results(library: Library, results: Sequence[QuizResult], now: int) -> ReviewOutcome:
    """Apply quiz results to the library and summarize them as a TestRecord.

    The input library is left untouched. Results whose word id is not in the
    library are skipped. An empty results sequence has no defined score and
    raises ZeroDivisionError; callers must not pass one.
    """
    updated: Library = {category: list(words) for category, words in library.items()}
    wrong_words: List[MissedWord] = []
    correct_count = 0

    for result in results:
        if result.is_correct:
            correct_count += 1
        else:
            wrong_words.append(
                MissedWord(
                    source_text=result.correct_answer,
                    target_text=result.user_answer or "Empty",
                )
            )

        for words in updated.values():
            idx = _index_of(words, result.word_id)
            if idx is not None:
                words[idx] = review_word(words[idx], result.is_correct, now)
                break

    record = TestRecord(
        id=str(now),
        date=now,
        score=_round_half_up(100 * correct_count / len(results)),
        total=len(results),
        wrong_words=wrong_words,
    )
    return ReviewOutcome(library=updated, record=record)


def is_due(word: WordEntry, now: int) -> bool:
    if word.is_new:
        return True
    interval_ms = (word.review_interval_days or 0) * MS_PER_DAY
    return word.last_reviewed_at + interval_ms <= now


def due_words(library: Library, now: int) -> List[WordEntry]:
    """Words never reviewed or whose interval has elapsed, in category order."""
    return [word for words in library.values() for word in words if is_due(word, now)]


def select_review_session(
    library: Library,
    now: int,
    limit: int = REVIEW_SESSION_SIZE,
    rng: Optional[random.Random] = None,
) -> List[WordEntry]:
    """Shuffle the due words and keep at most ``limit`` of them.

    Not reproducible unless a seeded ``rng`` is given.
    """
    due = due_words(library, now)
    (rng or random).shuffle(due)
    return due[:limit]


def _index_of(words: List[WordEntry], word_id: str) -> Optional[int]:
    return next((i for i, w in enumerate(words) if w.id == word_id), None)


def _round_half_up(value: float) -> int:
    # Scores are non-negative; match the stored format's half-up rounding.
    return int(value + 0.5)
