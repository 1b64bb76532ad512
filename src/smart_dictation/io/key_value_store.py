"""Key-value store abstraction - string keys mapped to JSON string blobs."""

from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueStore(ABC):
    """
    Abstract string-keyed, string-valued persistent store.

    Implementations (InMemoryKeyValueStore, SqliteKeyValueStore) handle storage details.
    The account store depends on this abstraction, not on a concrete backend.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Retrieve the value stored under key.

        Returns:
            The stored string, or None if the key is absent.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store or overwrite the value under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List all stored keys. Useful for diagnostics and testing."""
        pass
