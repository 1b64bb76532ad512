"""Caching services."""

from smart_dictation.services.caching.daily_content_cache import DailyContentCache

__all__ = ["DailyContentCache"]
