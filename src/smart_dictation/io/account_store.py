"""Account and library persistence over a key-value store."""

import json
import logging
import time
from typing import Callable, Iterable, List, Optional

from smart_dictation.core import (
    UNCATEGORIZED,
    DuplicateUsernameError,
    InvalidCredentialsError,
    Library,
    User,
    UserData,
    UserNotFoundError,
    UserStats,
    WordEntry,
)
from smart_dictation.io import record_codec
from smart_dictation.io.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

USERS_KEY = "sdb_users"
CURRENT_USER_KEY = "sdb_current_user"
USER_DATA_KEY_PREFIX = "sdb_data_"

# Usernames granted admin rights at registration time.
DEFAULT_ADMIN_IDENTIFIERS = frozenset({"admin"})

_STARTER_WORDS = {
    "Food": [
        ("def-1", "Apple", "苹果"),
        ("def-2", "Banana", "香蕉"),
        ("def-3", "Bread", "面包"),
        ("def-4", "Milk", "牛奶"),
        ("def-5", "Coffee", "咖啡"),
    ],
    "Animals": [
        ("def-6", "Cat", "猫"),
        ("def-7", "Dog", "狗"),
        ("def-8", "Elephant", "大象"),
        ("def-9", "Tiger", "老虎"),
    ],
    "School": [
        ("def-10", "Book", "书"),
        ("def-11", "Teacher", "老师"),
        ("def-12", "Student", "学生"),
        ("def-13", "Pencil", "铅笔"),
    ],
    "Travel": [
        ("def-14", "Airport", "机场"),
        ("def-15", "Ticket", "票"),
        ("def-16", "Hotel", "酒店"),
    ],
    UNCATEGORIZED: [],
}


def user_data_key(user_id: str) -> str:
    return f"{USER_DATA_KEY_PREFIX}{user_id}"


def starter_library() -> Library:
    """Build a fresh copy of the library every new account starts with."""
    return {
        category: [
            WordEntry(id=word_id, source_text=english, target_text=chinese, category=category)
            for word_id, english, chinese in words
        ]
        for category, words in _STARTER_WORDS.items()
    }


def _now_ms() -> int:
    return int(time.time() * 1000)


class AccountStore:
    """Manages users, the persisted session slot, and per-user data.

    Every operation is a whole-value read-modify-write of one key; there is
    no merging, so concurrent writers to the same key are last-writer-wins.
    Corrupt stored JSON is logged and read back as "no data".
    """

    def __init__(
        self,
        store: KeyValueStore,
        admin_identifiers: Optional[Iterable[str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        """
        Args:
            store: Backing key-value store.
            admin_identifiers: Usernames that become admins when they register.
            clock: Returns the current time in epoch milliseconds.
        """
        self._store = store
        self._admin_identifiers = frozenset(
            DEFAULT_ADMIN_IDENTIFIERS if admin_identifiers is None else admin_identifiers
        )
        self._clock = clock or _now_ms

    # --- Users ---

    def get_users(self) -> List[User]:
        raw = self._read_json(USERS_KEY)
        if raw is None:
            return []
        try:
            return [record_codec.user_from_dict(u) for u in raw]
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring malformed user list: %s", e)
            return []

    def register(self, username: str, password: Optional[str] = None) -> User:
        """Create an account and its starter library.

        Raises:
            DuplicateUsernameError: If a user with the same name exists, ignoring case.
        """
        users = self.get_users()
        clean_username = username.strip()
        if self._find_by_username(users, clean_username) is not None:
            raise DuplicateUsernameError(clean_username)

        now = self._clock()
        user = User(
            id=self._new_user_id(users, now),
            username=clean_username,
            password=password,
            created_at=now,
            is_admin=clean_username in self._admin_identifiers,
        )
        users.append(user)
        self._write_users(users)
        self.save_user_data(user.id, UserData(library=starter_library(), history=[]))

        logger.info("Registered user %s (admin=%s)", user.username, user.is_admin)
        return user

    def login(self, username: str, password: Optional[str] = None) -> User:
        """Authenticate by case-insensitive username.

        Accounts stored without a password accept any input.

        Raises:
            UserNotFoundError: If no user matches.
            InvalidCredentialsError: If the stored password differs.
        """
        clean_username = username.strip()
        user = self._find_by_username(self.get_users(), clean_username)
        if user is None:
            raise UserNotFoundError(clean_username)
        if user.password and user.password != password:
            raise InvalidCredentialsError(clean_username)
        return user

    # --- Session ---

    def save_session(self, user: User) -> None:
        self._store.set(CURRENT_USER_KEY, json.dumps(record_codec.user_to_dict(user)))

    def get_session(self) -> Optional[User]:
        """Return the persisted user snapshot verbatim, or None.

        The snapshot is not refreshed from the user list, so changes made
        elsewhere only show up after the next login.
        """
        raw = self._read_json(CURRENT_USER_KEY)
        if raw is None:
            return None
        try:
            return record_codec.user_from_dict(raw)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring malformed session: %s", e)
            return None

    def clear_session(self) -> None:
        self._store.remove(CURRENT_USER_KEY)

    # --- Per-user data ---

    def save_user_data(self, user_id: str, data: UserData) -> None:
        payload = record_codec.user_data_to_dict(data)
        self._store.set(user_data_key(user_id), json.dumps(payload, ensure_ascii=False))

    def load_user_data(self, user_id: str) -> Optional[UserData]:
        raw = self._read_json(user_data_key(user_id))
        if raw is None:
            return None
        try:
            return record_codec.user_data_from_dict(raw)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring malformed data for user %s: %s", user_id, e)
            return None

    # --- Admin ---

    def list_users_with_stats(self) -> List[UserStats]:
        stats = []
        for user in self.get_users():
            data = self.load_user_data(user.id)
            if data is None:
                stats.append(UserStats(user=user, word_count=0, test_count=0, last_active=None))
                continue
            stats.append(
                UserStats(
                    user=user,
                    word_count=sum(len(words) for words in data.library.values()),
                    test_count=len(data.history),
                    last_active=data.history[-1].date if data.history else None,
                )
            )
        return stats

    def delete_user(self, user_id: str) -> None:
        """Remove the user record and all of their persisted data. Irreversible."""
        users = [u for u in self.get_users() if u.id != user_id]
        self._write_users(users)
        self._store.remove(user_data_key(user_id))
        logger.info("Deleted user %s", user_id)

    def reset_password(self, user_id: str, new_password: str) -> None:
        """Overwrite a user's password without checking the old one.

        Unknown ids are ignored.
        """
        users = self.get_users()
        for user in users:
            if user.id == user_id:
                user.password = new_password
                self._write_users(users)
                logger.info("Reset password for user %s", user_id)
                return
        logger.debug("Password reset skipped, no user with id %s", user_id)

    # --- Helpers ---

    def _write_users(self, users: List[User]) -> None:
        payload = [record_codec.user_to_dict(u) for u in users]
        self._store.set(USERS_KEY, json.dumps(payload, ensure_ascii=False))

    def _read_json(self, key: str):
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Stored value for %s is not valid JSON: %s", key, e)
            return None

    @staticmethod
    def _find_by_username(users: List[User], username: str) -> Optional[User]:
        wanted = username.lower()
        return next((u for u in users if u.username.lower() == wanted), None)

    @staticmethod
    def _new_user_id(users: List[User], now: int) -> str:
        taken = {u.id for u in users}
        candidate = now
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
