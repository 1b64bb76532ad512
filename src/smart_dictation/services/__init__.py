"""Services layer - scheduling, library editing and external integrations."""

from smart_dictation.services import library_service, review_scheduler
from smart_dictation.services.review_scheduler import (
    ReviewOutcome,
    apply_results,
    due_words,
    select_review_session,
)
from smart_dictation.services.quiz_session import LanguageMode, QuizConfig, QuizSession
from smart_dictation.services.settings_manager import SettingsManager
from smart_dictation.services.session_context import SessionContext
from smart_dictation.services.study_service import StudyService

# Text processing
from smart_dictation.services.text_processing import (
    build_quiz_result,
    clean_lookup_word,
    is_answer_correct,
    normalize_answer,
    spelling_feedback,
)

# Content generation
from smart_dictation.services.generation import ContentService, GeminiContentService

# Caching
from smart_dictation.services.caching import DailyContentCache

__all__ = [
    "library_service",
    "review_scheduler",
    "ReviewOutcome",
    "apply_results",
    "due_words",
    "select_review_session",
    "LanguageMode",
    "QuizConfig",
    "QuizSession",
    "SettingsManager",
    "SessionContext",
    "StudyService",
    "normalize_answer",
    "is_answer_correct",
    "clean_lookup_word",
    "spelling_feedback",
    "build_quiz_result",
    "ContentService",
    "GeminiContentService",
    "DailyContentCache",
]
