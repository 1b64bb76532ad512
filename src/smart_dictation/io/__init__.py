"""I/O layer - key-value persistence and the account/library store."""

from .key_value_store import KeyValueStore
from .in_memory_key_value_store import InMemoryKeyValueStore
from .sqlite_key_value_store import SqliteKeyValueStore
from .account_store import AccountStore, starter_library

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SqliteKeyValueStore",
    "AccountStore",
    "starter_library",
]
