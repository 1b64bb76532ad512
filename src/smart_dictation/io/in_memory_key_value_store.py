"""In-memory key-value store for testing and session-level storage."""

from typing import Dict, List, Optional

from smart_dictation.io.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """
    Simple dict-backed store.

    Used for testing. No persistence.
    """

    def __init__(self) -> None:
        self._store: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def remove(self, key: str) -> None:
        self._store.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._store.keys())
