"""Settings Manager - Handles API key, storage and logging configuration."""

import os
from pathlib import Path
from typing import FrozenSet, Optional

from dotenv import load_dotenv

from smart_dictation.io.account_store import DEFAULT_ADMIN_IDENTIFIERS


class SettingsManager:
    """
    Manages settings and API key configuration.

    Reads values from the .env file in the project root, falling back to
    the process environment.
    """

    DB_FILENAME = "smart_dictation.db"

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_gemini_api_key(self) -> Optional[str]:
        """Get the Gemini API key from environment."""
        key = os.getenv("GEMINI_API_KEY")
        return key.strip() if key and key.strip() else None

    def get_db_path(self) -> Path:
        value = os.getenv("SMART_DICTATION_DB")
        if value and value.strip():
            return Path(value.strip())
        return self._project_root / self.DB_FILENAME

    def get_log_level(self) -> str:
        value = os.getenv("SMART_DICTATION_LOG_LEVEL", "")
        return value.strip().upper() or "INFO"

    def get_admin_identifiers(self) -> FrozenSet[str]:
        """Comma-separated SMART_DICTATION_ADMINS, or the built-in allow-list."""
        value = os.getenv("SMART_DICTATION_ADMINS", "")
        names = {name.strip() for name in value.split(",") if name.strip()}
        return frozenset(names) if names else DEFAULT_ADMIN_IDENTIFIERS

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
