"""Text processing - answer normalization and grading."""

from smart_dictation.services.text_processing.answer_checking import (
    build_quiz_result,
    clean_lookup_word,
    is_answer_correct,
    normalize_answer,
    spelling_feedback,
)

__all__ = [
    "normalize_answer",
    "is_answer_correct",
    "clean_lookup_word",
    "spelling_feedback",
    "build_quiz_result",
]
