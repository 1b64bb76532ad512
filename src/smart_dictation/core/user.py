"""User account entities."""

from dataclasses import dataclass, field
from typing import List, Optional

from .vocabulary_entities import Library, TestRecord


@dataclass
class User:
    """A registered account.

    ``is_admin`` is decided once at registration and never re-evaluated.
    """

    id: str
    username: str
    password: Optional[str]
    created_at: int
    is_admin: bool = False


@dataclass
class UserData:
    """Everything persisted for one user under a single storage key."""

    library: Library = field(default_factory=dict)
    history: List[TestRecord] = field(default_factory=list)


@dataclass(frozen=True)
class UserStats:
    """Admin view of a user joined with figures derived from their data."""

    user: User
    word_count: int
    test_count: int
    last_active: Optional[int]
