"""One-slot cache for the daily quotes, keyed by calendar date."""

import json
import logging
from typing import Callable, Optional

from smart_dictation.core import DailyContent
from smart_dictation.io import KeyValueStore
from smart_dictation.io import record_codec

logger = logging.getLogger(__name__)

DAILY_CONTENT_KEY = "sdb_daily_content"


class DailyContentCache:
    """Stores at most one DailyContent; entries from other days count as misses."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get(self, today: str) -> Optional[DailyContent]:
        raw = self._store.get(DAILY_CONTENT_KEY)
        if raw is None:
            return None
        try:
            content = record_codec.daily_content_from_dict(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning("Ignoring malformed daily content: %s", e)
            return None
        return content if content.date == today else None

    def put(self, content: DailyContent) -> None:
        payload = record_codec.daily_content_to_dict(content)
        self._store.set(DAILY_CONTENT_KEY, json.dumps(payload, ensure_ascii=False))

    def get_or_generate(
        self, today: str, generator: Callable[[str], Optional[DailyContent]]
    ) -> Optional[DailyContent]:
        """Return today's content, generating and storing it on a miss."""
        cached = self.get(today)
        if cached is not None:
            return cached
        try:
            content = generator(today)
        except Exception as e:
            logger.error("Failed to load daily content: %s", e)
            return None
        if content is not None:
            self.put(content)
        return content
