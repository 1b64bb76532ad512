"""Session Context - the authenticated user for this client, made explicit."""

import logging
from typing import Optional

from smart_dictation.core import PermissionDeniedError, User
from smart_dictation.io import AccountStore

logger = logging.getLogger(__name__)


class SessionContext:
    """Explicit replacement for a global "current user" slot.

    Contract: ``load()`` once at startup, ``start()`` on login, ``end()`` on
    logout. The user is a snapshot taken at login time.
    """

    def __init__(self, accounts: AccountStore) -> None:
        self._accounts = accounts
        self._user: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def load(self) -> Optional[User]:
        """Restore the persisted session, if any."""
        self._user = self._accounts.get_session()
        if self._user is not None:
            logger.info("Restored session for %s", self._user.username)
        return self._user

    def start(self, user: User) -> None:
        self._user = user
        self._accounts.save_session(user)

    def end(self) -> None:
        self._user = None
        self._accounts.clear_session()

    def require_admin(self) -> User:
        """
        Raises:
            PermissionDeniedError: If nobody is logged in or the user is not an admin.
        """
        if self._user is None or not self._user.is_admin:
            raise PermissionDeniedError("Admin privileges required")
        return self._user
