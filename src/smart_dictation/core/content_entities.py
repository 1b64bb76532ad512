"""Entities produced by AI content generation."""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .vocabulary_entities import WordEntry


@dataclass(frozen=True)
class TranslationOption:
    text: str
    context: str


@dataclass
class GeneratedPassage:
    """A short story plus the vocabulary extracted from it."""

    title: str
    content: str
    vocabulary: List[WordEntry] = field(default_factory=list)


@dataclass(frozen=True)
class SpeakingEvaluation:
    score: int
    feedback: str


@dataclass
class ChatMessage:
    id: str
    role: Literal["user", "ai"]
    text: str
    audio_base64: Optional[str] = None


@dataclass(frozen=True)
class DailyQuote:
    english: str
    chinese: str
    author: str


@dataclass
class DailyContent:
    """Quotes shown on the login screen, regenerated once per calendar day."""

    date: str
    quotes: List[DailyQuote] = field(default_factory=list)
