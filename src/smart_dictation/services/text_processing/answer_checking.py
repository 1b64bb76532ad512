"""Dictation answer normalization and grading."""

import re
from typing import List, Tuple

from smart_dictation.core import QuizResult, WordEntry

_ANSWER_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_LOOKUP_PUNCTUATION = re.compile(r"[.,!?\"'()]")


def normalize_answer(text: str) -> str:
    """
    Normalize an answer for comparison.

    Rules:
    - Lower-case and trim
    - Drop common punctuation
    - Collapse runs of two or more whitespace characters to one space
    """
    text = text.lower().strip()
    text = _ANSWER_PUNCTUATION.sub("", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text


def is_answer_correct(answer: str, target: str) -> bool:
    return normalize_answer(answer) == normalize_answer(target)


def clean_lookup_word(word: str) -> str:
    """Strip punctuation from a word clicked in a passage before translating it."""
    return _LOOKUP_PUNCTUATION.sub("", word)


def spelling_feedback(answer: str, target: str) -> List[Tuple[str, bool]]:
    """Per-character match of answer against target, position by position."""
    answer_chars = answer.lower().strip()
    target_chars = target.lower().strip()
    return [
        (char, idx < len(target_chars) and char == target_chars[idx])
        for idx, char in enumerate(answer_chars)
    ]


def build_quiz_result(word: WordEntry, answer: str, target_text: str, now: int) -> QuizResult:
    """Grade one answer against the expected text and record it."""
    return QuizResult(
        word_id=word.id,
        is_correct=is_answer_correct(answer, target_text),
        user_answer=answer,
        correct_answer=target_text,
        timestamp=now,
    )
