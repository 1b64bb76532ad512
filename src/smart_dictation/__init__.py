"""
Smart Dictation - vocabulary dictation drills with spaced repetition.

This package provides:
- A spaced-repetition review scheduler
- A local account, session and word-library store
- Gemini-backed word lists, passages, translation and speech
"""

__version__ = "0.1.0"

# Make key components available at package level
from smart_dictation.core import QuizResult, TestRecord, User, UserData, WordEntry
from smart_dictation.io import AccountStore, InMemoryKeyValueStore, SqliteKeyValueStore
from smart_dictation.services.review_scheduler import apply_results, due_words

__all__ = [
    "WordEntry",
    "QuizResult",
    "TestRecord",
    "User",
    "UserData",
    "AccountStore",
    "InMemoryKeyValueStore",
    "SqliteKeyValueStore",
    "apply_results",
    "due_words",
]
