"""Content Service - interface for AI-generated learning content."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from smart_dictation.core import (
    ChatMessage,
    DailyContent,
    GeneratedPassage,
    SpeakingEvaluation,
    TranslationOption,
    WordEntry,
)


class ContentService(ABC):
    """
    Abstract service for generating words, passages, translations and speech.

    Implementations (e.g., GeminiContentService) handle API calls. Operations
    that have a sensible fallback return it instead of raising.
    """

    @abstractmethod
    def generate_word_list(self, topic: str) -> List[WordEntry]:
        """
        Generate about ten English words or phrases for a topic, with Chinese translations.

        Raises:
            ContentGenerationError: If the service call fails.
        """
        pass

    @abstractmethod
    def generate_passage(self, topic: str) -> Optional[GeneratedPassage]:
        """Write a short story about topic and extract its key vocabulary."""
        pass

    @abstractmethod
    def generate_passage_from_words(self, words: Sequence[str]) -> Optional[GeneratedPassage]:
        """Write a short story that uses the given words."""
        pass

    @abstractmethod
    def generate_context_sentence(self, word: str) -> str:
        pass

    @abstractmethod
    def translate(self, text: str, from_lang: str) -> List[TranslationOption]:
        """
        Translate English ("en") to Chinese or Chinese ("zh") to English.

        Returns:
            Up to three options when the text has several common meanings.
        """
        pass

    @abstractmethod
    def simple_translate(self, text: str) -> str:
        pass

    @abstractmethod
    def generate_chat_response(self, history: Sequence[ChatMessage], topic: str) -> str:
        pass

    @abstractmethod
    def evaluate_pronunciation(self, audio_base64: str, reference_text: str) -> SpeakingEvaluation:
        pass

    @abstractmethod
    def generate_speech_audio(self, text: str, is_english: bool) -> str:
        """
        Synthesize speech for text.

        Returns:
            Base64-encoded audio.

        Raises:
            ContentGenerationError: If no audio was produced.
        """
        pass

    @abstractmethod
    def generate_hint_image(self, text: str) -> Optional[str]:
        """Return a ``data:`` URL for an illustration of text, or None."""
        pass

    @abstractmethod
    def generate_daily_content(self, date: str) -> Optional[DailyContent]:
        pass
