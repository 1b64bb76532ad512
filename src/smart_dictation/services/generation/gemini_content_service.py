"""Gemini Content Service - implements content generation via Google Gemini API."""

import base64
import json
import logging
import time
from typing import Callable, List, Optional, Sequence

import google.genai as genai
from google.genai import types

from smart_dictation.core import (
    ChatMessage,
    ContentGenerationError,
    DailyContent,
    DailyQuote,
    GeneratedPassage,
    SpeakingEvaluation,
    TranslationOption,
    WordEntry,
)
from smart_dictation.services.generation.content_service import ContentService
from smart_dictation.services.library_service import new_word_id

logger = logging.getLogger(__name__)


def _string() -> types.Schema:
    return types.Schema(type=types.Type.STRING)


def _object(properties: dict) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties=properties,
        required=list(properties),
    )


def _array(items: types.Schema) -> types.Schema:
    return types.Schema(type=types.Type.ARRAY, items=items)


WORD_PAIR_SCHEMA = _object({"english": _string(), "chinese": _string()})


def is_rate_limit_error(exc: Exception) -> bool:
    error_msg = str(exc).lower()
    return (
        "429" in error_msg
        or "resource_exhausted" in error_msg
        or "quota" in error_msg
        or "rate_limit" in error_msg
    )


class GeminiContentService(ContentService):
    """
    Content service using Google Gemini API.

    Uses the google.genai package. Rate-limited calls are retried with
    exponential backoff; other failures fall back per operation.
    """

    GENERATION_MODEL = "gemini-2.5-flash"
    TTS_MODEL = "gemini-2.5-flash-preview-tts"
    IMAGE_MODEL = "gemini-2.5-flash-image"

    MAX_RETRIES = 3
    INITIAL_RETRY_DELAY = 2

    WORD_LIST_PROMPT = """Create a list of 10 English vocabulary words, phrases, or simple sentences related to the topic: "{topic}".
Provide the Chinese translation for each."""

    PASSAGE_PROMPT = """Write a short, engaging story (approx 100-150 words) suitable for a primary school student about "{topic}".
Then, extract 5-8 key vocabulary words from the story and provide their Chinese translations.
Return JSON."""

    PASSAGE_FROM_WORDS_PROMPT = """Write a short story (max 150 words) that includes the following words: {words}.
Highlight the usage of these words naturally.
Also provide a title.
Return JSON with 'title' and 'content' fields."""

    CONTEXT_PROMPT = """Create a simple, natural English sentence or a short 2-line dialogue using the word "{word}". Return only the text."""

    TRANSLATE_PROMPT = """Translate "{text}" to {target_lang}.
If there are multiple common meanings (e.g. "Apple" can be a fruit or a brand, "Bank" can be a financial institution or river bank), provide up to 3 distinct options.
Return a JSON array."""

    SIMPLE_TRANSLATE_PROMPT = (
        "Translate the following text to English (if it is Chinese) or to Chinese (if it is English).\n"
        "Provide ONLY the translated text, no explanation.\n"
        'Text: "{text}"'
    )

    CHAT_PROMPT = """You are a helpful and friendly English tutor roleplaying a scenario with a student.
Scenario: {topic}.
Your Goal: Engage in a natural conversation. Keep responses concise (1-3 sentences). Correct the user gently only if they make a major mistake, otherwise just continue the conversation.

History:
{history}Tutor:"""

    PRONUNCIATION_PROMPT = """Listen to the audio. The user is trying to say: "{reference_text}".
Rate the pronunciation on a scale of 0 to 100.
Provide brief, encouraging feedback on what was good or what needs improvement (max 2 sentences).
Return JSON: {{ "score": number, "feedback": string }}"""

    IMAGE_PROMPT = """Create a simple, clear, colorful icon or illustration representing: "{text}". Do not include any text inside the image."""

    DAILY_PROMPT = """Today is {date}. Pick 3 short, inspiring quotes about learning or languages from well-known people.
For each, give the English quote, a natural Chinese translation, and the author."""

    CHAT_FALLBACK = "Sorry, I lost my train of thought."
    CHAT_EMPTY = "I'm not sure what to say."

    def __init__(
        self,
        api_key: str,
        client: Optional[genai.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._api_key = api_key
        self._client = client
        self._sleep = sleep

    # --- Generation ---

    def generate_word_list(self, topic: str) -> List[WordEntry]:
        try:
            text = self._generate_text(
                self.WORD_LIST_PROMPT.format(topic=topic),
                schema=_array(WORD_PAIR_SCHEMA),
            )
            if not text:
                return []
            return [
                WordEntry(id=new_word_id("gen"), source_text=item["english"], target_text=item["chinese"])
                for item in json.loads(text)
            ]
        except Exception as e:
            logger.error("Word list generation failed for topic %r: %s", topic, e)
            raise ContentGenerationError(f"Word list generation failed: {e}") from e

    def generate_passage(self, topic: str) -> Optional[GeneratedPassage]:
        schema = _object(
            {
                "title": _string(),
                "content": _string(),
                "vocabulary": _array(WORD_PAIR_SCHEMA),
            }
        )
        try:
            text = self._generate_text(self.PASSAGE_PROMPT.format(topic=topic), schema=schema)
            if not text:
                return None
            data = json.loads(text)
            return GeneratedPassage(
                title=data["title"],
                content=data["content"],
                vocabulary=[
                    WordEntry(id=new_word_id("story"), source_text=item["english"], target_text=item["chinese"])
                    for item in data["vocabulary"]
                ],
            )
        except Exception as e:
            logger.error("Passage generation failed for topic %r: %s", topic, e)
            return None

    def generate_passage_from_words(self, words: Sequence[str]) -> Optional[GeneratedPassage]:
        schema = _object({"title": _string(), "content": _string()})
        try:
            prompt = self.PASSAGE_FROM_WORDS_PROMPT.format(words=", ".join(words))
            text = self._generate_text(prompt, schema=schema)
            if not text:
                return None
            data = json.loads(text)
            return GeneratedPassage(title=data["title"], content=data["content"], vocabulary=[])
        except Exception as e:
            logger.error("Passage generation from %d words failed: %s", len(words), e)
            return None

    def generate_context_sentence(self, word: str) -> str:
        try:
            return self._generate_text(self.CONTEXT_PROMPT.format(word=word)) or ""
        except Exception as e:
            logger.error("Context sentence generation failed for %r: %s", word, e)
            return ""

    # --- Translation ---

    def translate(self, text: str, from_lang: str) -> List[TranslationOption]:
        target_lang = "Chinese" if from_lang == "en" else "English"
        schema = _array(_object({"text": _string(), "context": _string()}))
        try:
            raw = self._generate_text(
                self.TRANSLATE_PROMPT.format(text=text, target_lang=target_lang),
                schema=schema,
            )
            if not raw:
                return []
            return [TranslationOption(text=o["text"], context=o["context"]) for o in json.loads(raw)]
        except Exception as e:
            logger.error("Translation failed for %r: %s", text, e)
            return []

    def simple_translate(self, text: str) -> str:
        try:
            result = self._generate_text(self.SIMPLE_TRANSLATE_PROMPT.format(text=text))
            return result.strip() if result and result.strip() else text
        except Exception as e:
            logger.error("Simple translation failed: %s", e)
            return text

    # --- Dialogue ---

    def generate_chat_response(self, history: Sequence[ChatMessage], topic: str) -> str:
        lines = "".join(
            f"{'Student' if msg.role == 'user' else 'Tutor'}: {msg.text}\n" for msg in history
        )
        try:
            return self._generate_text(self.CHAT_PROMPT.format(topic=topic, history=lines)) or self.CHAT_EMPTY
        except Exception as e:
            logger.error("Chat response failed: %s", e)
            return self.CHAT_FALLBACK

    # --- Speech ---

    def evaluate_pronunciation(self, audio_base64: str, reference_text: str) -> SpeakingEvaluation:
        schema = types.Schema(
            type=types.Type.OBJECT,
            properties={
                "score": types.Schema(type=types.Type.INTEGER),
                "feedback": _string(),
            },
            required=["score", "feedback"],
        )
        try:
            contents = [
                types.Part.from_bytes(data=base64.b64decode(audio_base64), mime_type="audio/webm"),
                self.PRONUNCIATION_PROMPT.format(reference_text=reference_text),
            ]
            text = self._generate_text(contents, schema=schema)
            if not text:
                return SpeakingEvaluation(score=0, feedback="Could not analyze.")
            data = json.loads(text)
            return SpeakingEvaluation(score=int(data["score"]), feedback=data["feedback"])
        except Exception as e:
            logger.error("Pronunciation evaluation failed: %s", e)
            return SpeakingEvaluation(score=0, feedback="Error analyzing audio.")

    def generate_speech_audio(self, text: str, is_english: bool) -> str:
        voice_name = "Puck" if is_english else "Kore"
        prompt = f'Say specifically: "{text}"' if is_english else f'请读出: "{text}"'
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice_name),
                )
            ),
        )
        try:
            response = self._call(self.TTS_MODEL, prompt, config)
        except Exception as e:
            logger.error("Speech synthesis failed: %s", e)
            raise ContentGenerationError(f"Speech synthesis failed: {e}") from e

        for part in self._response_parts(response):
            if part.inline_data is not None and part.inline_data.data:
                return base64.b64encode(part.inline_data.data).decode("ascii")
        raise ContentGenerationError("No audio data returned from Gemini.")

    # --- Images ---

    def generate_hint_image(self, text: str) -> Optional[str]:
        try:
            response = self._call(self.IMAGE_MODEL, self.IMAGE_PROMPT.format(text=text))
        except Exception as e:
            logger.error("Hint image generation failed: %s", e)
            return None

        for part in self._response_parts(response):
            if part.inline_data is not None and part.inline_data.data:
                mime_type = part.inline_data.mime_type or "image/png"
                encoded = base64.b64encode(part.inline_data.data).decode("ascii")
                return f"data:{mime_type};base64,{encoded}"
        return None

    # --- Daily content ---

    def generate_daily_content(self, date: str) -> Optional[DailyContent]:
        schema = _array(_object({"english": _string(), "chinese": _string(), "author": _string()}))
        try:
            text = self._generate_text(self.DAILY_PROMPT.format(date=date), schema=schema)
            if not text:
                return None
            quotes = [
                DailyQuote(english=q["english"], chinese=q["chinese"], author=q["author"])
                for q in json.loads(text)
            ]
            return DailyContent(date=date, quotes=quotes)
        except Exception as e:
            logger.error("Daily content generation failed for %s: %s", date, e)
            return None

    # --- Helpers ---

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def _generate_text(self, contents, schema: Optional[types.Schema] = None) -> str:
        config = None
        if schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            )
        response = self._call(self.GENERATION_MODEL, contents, config)
        return response.text or ""

    def _call(self, model: str, contents, config: Optional[types.GenerateContentConfig] = None):
        """Run generate_content, retrying rate-limited attempts with exponential backoff."""
        retry_delay = self.INITIAL_RETRY_DELAY
        attempt = 0
        while True:
            attempt += 1
            logger.debug("Gemini request model=%s attempt=%d/%d", model, attempt, self.MAX_RETRIES)
            try:
                return self._get_client().models.generate_content(
                    model=model,
                    contents=contents,
                    config=config,
                )
            except Exception as e:
                if is_rate_limit_error(e) and attempt < self.MAX_RETRIES:
                    logger.warning("Rate limit detected. Retrying in %s seconds...", retry_delay)
                    self._sleep(retry_delay)
                    retry_delay *= 2
                    continue
                raise

    @staticmethod
    def _response_parts(response) -> list:
        candidates = getattr(response, "candidates", None) or []
        if not candidates or candidates[0].content is None:
            return []
        return candidates[0].content.parts or []
