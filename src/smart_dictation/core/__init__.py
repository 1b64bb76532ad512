"""Domain layer - entities and errors for vocabulary, accounts and generated content."""

from .content_entities import (
    ChatMessage,
    DailyContent,
    DailyQuote,
    GeneratedPassage,
    SpeakingEvaluation,
    TranslationOption,
)
from .errors import (
    AccountError,
    ContentGenerationError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotFoundError,
    PermissionDeniedError,
    ReservedCategoryError,
    SmartDictationError,
    StorageUnavailableError,
    UserNotFoundError,
)
from .user import User, UserData, UserStats
from .vocabulary_entities import (
    MAX_PROFICIENCY,
    UNCATEGORIZED,
    Library,
    MissedWord,
    QuizResult,
    TestRecord,
    WordEntry,
)

__all__ = [
    "WordEntry",
    "Library",
    "QuizResult",
    "MissedWord",
    "TestRecord",
    "UNCATEGORIZED",
    "MAX_PROFICIENCY",
    "User",
    "UserData",
    "UserStats",
    "TranslationOption",
    "GeneratedPassage",
    "SpeakingEvaluation",
    "ChatMessage",
    "DailyQuote",
    "DailyContent",
    "SmartDictationError",
    "AccountError",
    "DuplicateUsernameError",
    "UserNotFoundError",
    "InvalidCredentialsError",
    "PermissionDeniedError",
    "NotFoundError",
    "ReservedCategoryError",
    "StorageUnavailableError",
    "ContentGenerationError",
]
