from unittest.mock import MagicMock

from smart_dictation.core import DailyContent, DailyQuote
from smart_dictation.io import InMemoryKeyValueStore
from smart_dictation.services import DailyContentCache
from smart_dictation.services.caching.daily_content_cache import DAILY_CONTENT_KEY


def content(day):
    return DailyContent(date=day, quotes=[DailyQuote("Keep going.", "继续前进。", "Someone")])


def test_miss_when_empty():
    assert DailyContentCache(InMemoryKeyValueStore()).get("2026-10-19") is None


def test_entry_from_another_day_is_a_miss():
    cache = DailyContentCache(InMemoryKeyValueStore())
    cache.put(content("2026-10-18"))
    assert cache.get("2026-10-19") is None
    assert cache.get("2026-10-18") == content("2026-10-18")


def test_get_or_generate_stores_new_content():
    cache = DailyContentCache(InMemoryKeyValueStore())
    generator = MagicMock(return_value=content("2026-10-19"))

    assert cache.get_or_generate("2026-10-19", generator) == content("2026-10-19")
    assert cache.get_or_generate("2026-10-19", generator) == content("2026-10-19")
    generator.assert_called_once_with("2026-10-19")


def test_generator_failure_yields_none():
    cache = DailyContentCache(InMemoryKeyValueStore())
    generator = MagicMock(side_effect=RuntimeError("offline"))
    assert cache.get_or_generate("2026-10-19", generator) is None


def test_generator_returning_none_is_not_cached():
    store = InMemoryKeyValueStore()
    cache = DailyContentCache(store)
    assert cache.get_or_generate("2026-10-19", lambda day: None) is None
    assert store.get(DAILY_CONTENT_KEY) is None


def test_corrupt_entry_is_a_miss():
    store = InMemoryKeyValueStore()
    store.set(DAILY_CONTENT_KEY, "nope")
    assert DailyContentCache(store).get("2026-10-19") is None
