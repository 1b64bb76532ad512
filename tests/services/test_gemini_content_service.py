"""GeminiContentService tests with a mocked google.genai client."""

import base64
import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from smart_dictation.core import ChatMessage, ContentGenerationError
from smart_dictation.services import GeminiContentService


def text_response(payload):
    text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    return SimpleNamespace(text=text, candidates=[])


def inline_response(data: bytes, mime_type="audio/pcm"):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type))
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    return SimpleNamespace(text=None, candidates=[candidate])


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def service(client, sleep):
    return GeminiContentService(api_key="test-key", client=client, sleep=sleep)


def last_call(client):
    return client.models.generate_content.call_args.kwargs


class TestWordList:
    def test_parses_pairs_into_entries(self, service, client):
        client.models.generate_content.return_value = text_response(
            [{"english": "Beach", "chinese": "海滩"}, {"english": "Sun", "chinese": "太阳"}]
        )
        words = service.generate_word_list("summer")

        assert [(w.source_text, w.target_text) for w in words] == [("Beach", "海滩"), ("Sun", "太阳")]
        assert all(w.id.startswith("gen-") for w in words)
        assert len({w.id for w in words}) == 2
        call = last_call(client)
        assert call["model"] == GeminiContentService.GENERATION_MODEL
        assert '"summer"' in call["contents"]
        assert call["config"].response_mime_type == "application/json"

    def test_empty_response_gives_empty_list(self, service, client):
        client.models.generate_content.return_value = text_response("")
        assert service.generate_word_list("x") == []

    def test_failure_raises(self, service, client):
        client.models.generate_content.side_effect = RuntimeError("boom")
        with pytest.raises(ContentGenerationError):
            service.generate_word_list("x")


class TestRetries:
    def test_rate_limit_is_retried_with_backoff(self, service, client, sleep):
        client.models.generate_content.side_effect = [
            RuntimeError("429 RESOURCE_EXHAUSTED"),
            RuntimeError("quota exceeded"),
            text_response("Hello there."),
        ]
        assert service.generate_context_sentence("hello") == "Hello there."
        assert [c.args[0] for c in sleep.call_args_list] == [2, 4]

    def test_gives_up_after_max_retries(self, service, client, sleep):
        client.models.generate_content.side_effect = RuntimeError("429")
        assert service.generate_context_sentence("hello") == ""
        assert client.models.generate_content.call_count == GeminiContentService.MAX_RETRIES
        assert sleep.call_count == GeminiContentService.MAX_RETRIES - 1

    def test_other_errors_are_not_retried(self, service, client, sleep):
        client.models.generate_content.side_effect = RuntimeError("invalid api_key")
        assert service.translate("bank", "en") == []
        assert client.models.generate_content.call_count == 1
        sleep.assert_not_called()


class TestPassages:
    def test_passage_with_vocabulary(self, service, client):
        client.models.generate_content.return_value = text_response(
            {
                "title": "At the Zoo",
                "content": "We saw a tiger.",
                "vocabulary": [{"english": "tiger", "chinese": "老虎"}],
            }
        )
        passage = service.generate_passage("zoo")
        assert passage.title == "At the Zoo"
        assert passage.vocabulary[0].target_text == "老虎"
        assert passage.vocabulary[0].id.startswith("story-")

    def test_passage_failure_returns_none(self, service, client):
        client.models.generate_content.return_value = text_response("not json")
        assert service.generate_passage("zoo") is None

    def test_passage_from_words_has_no_vocabulary(self, service, client):
        client.models.generate_content.return_value = text_response({"title": "T", "content": "C"})
        passage = service.generate_passage_from_words(["cat", "dog"])
        assert passage.vocabulary == []
        assert "cat, dog" in last_call(client)["contents"]


class TestTranslation:
    def test_translate_options(self, service, client):
        client.models.generate_content.return_value = text_response(
            [{"text": "银行", "context": "Finance"}, {"text": "河岸", "context": "River"}]
        )
        options = service.translate("bank", "en")
        assert [o.text for o in options] == ["银行", "河岸"]
        assert "to Chinese" in last_call(client)["contents"]

    def test_translate_from_chinese_targets_english(self, service, client):
        client.models.generate_content.return_value = text_response([])
        service.translate("银行", "zh")
        assert "to English" in last_call(client)["contents"]

    def test_simple_translate_falls_back_to_input(self, service, client):
        client.models.generate_content.side_effect = RuntimeError("offline")
        assert service.simple_translate("你好") == "你好"

    def test_simple_translate_strips(self, service, client):
        client.models.generate_content.return_value = text_response("  Hello \n")
        assert service.simple_translate("你好") == "Hello"


class TestDialogue:
    def test_history_is_rendered_into_prompt(self, service, client):
        client.models.generate_content.return_value = text_response("Sure, what size?")
        history = [
            ChatMessage(id="1", role="ai", text="Welcome to the cafe!"),
            ChatMessage(id="2", role="user", text="A coffee please"),
        ]
        assert service.generate_chat_response(history, "Ordering coffee") == "Sure, what size?"
        prompt = last_call(client)["contents"]
        assert "Tutor: Welcome to the cafe!\nStudent: A coffee please\nTutor:" in prompt
        assert "Scenario: Ordering coffee." in prompt

    def test_failure_apologizes(self, service, client):
        client.models.generate_content.side_effect = RuntimeError("boom")
        assert service.generate_chat_response([], "x") == GeminiContentService.CHAT_FALLBACK


class TestSpeech:
    def test_pronunciation_score(self, service, client):
        client.models.generate_content.return_value = text_response({"score": 85, "feedback": "Nice!"})
        audio = base64.b64encode(b"webm-bytes").decode()
        evaluation = service.evaluate_pronunciation(audio, "hello")
        assert (evaluation.score, evaluation.feedback) == (85, "Nice!")

    def test_pronunciation_failure(self, service, client):
        client.models.generate_content.side_effect = RuntimeError("boom")
        evaluation = service.evaluate_pronunciation(base64.b64encode(b"x").decode(), "hello")
        assert evaluation.score == 0

    def test_pronunciation_with_undecodable_audio(self, service, client):
        evaluation = service.evaluate_pronunciation("not*base64!", "hello")
        assert (evaluation.score, evaluation.feedback) == (0, "Error analyzing audio.")
        client.models.generate_content.assert_not_called()

    def test_speech_audio_is_base64(self, service, client):
        client.models.generate_content.return_value = inline_response(b"\x00\x01pcm")
        audio = service.generate_speech_audio("apple", is_english=True)
        assert base64.b64decode(audio) == b"\x00\x01pcm"
        call = last_call(client)
        assert call["model"] == GeminiContentService.TTS_MODEL
        voice = call["config"].speech_config.voice_config.prebuilt_voice_config.voice_name
        assert voice == "Puck"

    def test_chinese_speech_uses_other_voice(self, service, client):
        client.models.generate_content.return_value = inline_response(b"pcm")
        service.generate_speech_audio("苹果", is_english=False)
        call = last_call(client)
        assert call["config"].speech_config.voice_config.prebuilt_voice_config.voice_name == "Kore"
        assert call["contents"].startswith("请读出")

    def test_speech_without_audio_raises(self, service, client):
        client.models.generate_content.return_value = SimpleNamespace(text=None, candidates=[])
        with pytest.raises(ContentGenerationError):
            service.generate_speech_audio("apple", is_english=True)


class TestImagesAndDaily:
    def test_hint_image_data_url(self, service, client):
        client.models.generate_content.return_value = inline_response(b"png", mime_type="image/png")
        url = service.generate_hint_image("apple")
        assert url == "data:image/png;base64," + base64.b64encode(b"png").decode()

    def test_hint_image_without_image(self, service, client):
        client.models.generate_content.return_value = SimpleNamespace(text="no", candidates=[])
        assert service.generate_hint_image("apple") is None

    def test_daily_content(self, service, client):
        client.models.generate_content.return_value = text_response(
            [{"english": "Learn daily.", "chinese": "每天学习。", "author": "A"}]
        )
        content = service.generate_daily_content("2026-10-19")
        assert content.date == "2026-10-19"
        assert content.quotes[0].author == "A"


def test_client_is_created_lazily_with_api_key():
    with patch("smart_dictation.services.generation.gemini_content_service.genai.Client") as client_cls:
        client_cls.return_value.models.generate_content.return_value = text_response("ok")
        service = GeminiContentService(api_key="abc")
        client_cls.assert_not_called()
        service.generate_context_sentence("word")
        service.generate_context_sentence("word")
        client_cls.assert_called_once_with(api_key="abc")
