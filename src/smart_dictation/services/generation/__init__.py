"""Content generation services - abstract interface and Gemini implementation."""

from smart_dictation.services.generation.content_service import ContentService
from smart_dictation.services.generation.gemini_content_service import GeminiContentService

__all__ = [
    "ContentService",
    "GeminiContentService",
]
