"""Exception hierarchy shared by the store, library editing and AI services."""


class SmartDictationError(Exception):
    """Base class for all application errors."""


class AccountError(SmartDictationError):
    """Raised for account and authentication failures."""


class DuplicateUsernameError(AccountError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username already exists: {username}")
        self.username = username


class UserNotFoundError(AccountError):
    def __init__(self, username: str) -> None:
        super().__init__(f"User not found: {username}")
        self.username = username


class InvalidCredentialsError(AccountError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Invalid password for user: {username}")
        self.username = username


class PermissionDeniedError(AccountError):
    """Raised when a non-admin session attempts an admin operation."""


class NotFoundError(SmartDictationError):
    """Raised when a word or category lookup misses."""


class ReservedCategoryError(SmartDictationError):
    """Raised when trying to delete the default category."""


class StorageUnavailableError(SmartDictationError):
    """Raised when the underlying key-value store cannot be opened or written."""


class ContentGenerationError(SmartDictationError):
    """Raised when the AI service fails on an operation that has no fallback."""
