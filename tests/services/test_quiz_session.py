import random

import pytest

from smart_dictation.core import WordEntry
from smart_dictation.services import LanguageMode, QuizConfig, QuizSession


@pytest.fixture
def words():
    return [
        WordEntry(id="1", source_text="Cat", target_text="猫"),
        WordEntry(id="2", source_text="Dog", target_text="狗"),
    ]


def make_session(words, **config):
    return QuizSession(words, QuizConfig(**config), clock=lambda: 500)


def test_requires_words():
    with pytest.raises(ValueError):
        QuizSession([], QuizConfig())


def test_prompt_and_expected_answer_follow_config(words):
    session = make_session(words, prompt_language=LanguageMode.CHINESE, answer_language=LanguageMode.ENGLISH)
    assert session.prompt_text() == "猫"
    assert session.expected_answer() == "Cat"


def test_correct_answer_advances(words):
    session = make_session(words, answer_language=LanguageMode.ENGLISH)
    assert session.submit("cat") is True
    assert session.current_word.id == "2"
    assert session.progress == (1, 2)


def test_wrong_answer_does_not_advance(words):
    session = make_session(words)
    assert session.submit("狗") is False
    assert session.current_word.id == "1"
    assert session.results == []


def test_blank_answer_is_ignored(words):
    session = make_session(words)
    assert session.submit("   ") is False
    assert session.results == []


def test_skip_records_a_miss_and_finishes(words):
    session = make_session(words)
    session.submit("猫")
    session.skip("gou")

    assert session.is_finished
    results = session.results
    assert [r.is_correct for r in results] == [True, False]
    assert results[1].user_answer == "gou"
    assert results[1].correct_answer == "狗"
    assert results[1].timestamp == 500
    with pytest.raises(IndexError):
        session.current_word


def test_randomize_shuffles_with_rng(words):
    many = words * 5
    session = QuizSession(many, QuizConfig(randomize=True), rng=random.Random(3))
    expected = list(many)
    random.Random(3).shuffle(expected)
    assert session.current_word is expected[0]
