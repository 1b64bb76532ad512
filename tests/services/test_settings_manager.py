"""Unit tests for SettingsManager."""

import os
from pathlib import Path

import pytest

from smart_dictation.io.account_store import DEFAULT_ADMIN_IDENTIFIERS
from smart_dictation.services import SettingsManager

ENV_VARS = (
    "GEMINI_API_KEY",
    "SMART_DICTATION_DB",
    "SMART_DICTATION_LOG_LEVEL",
    "SMART_DICTATION_ADMINS",
)


@pytest.fixture
def clean_env():
    """Clear our variables from the environment before and after each test."""
    saved = {name: os.environ.pop(name, None) for name in ENV_VARS}
    yield
    for name, value in saved.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


def write_env(root: Path, text: str) -> SettingsManager:
    (root / ".env").write_text(text)
    return SettingsManager(project_root=root)


class TestApiKey:
    def test_none_when_empty(self, tmp_path, clean_env):
        assert write_env(tmp_path, "GEMINI_API_KEY=\n").get_gemini_api_key() is None

    def test_read_from_env_file(self, tmp_path, clean_env):
        assert write_env(tmp_path, "GEMINI_API_KEY=test-key-123\n").get_gemini_api_key() == "test-key-123"

    def test_strips_whitespace(self, tmp_path, clean_env):
        settings = write_env(tmp_path, 'GEMINI_API_KEY="  test-key  "\n')
        assert settings.get_gemini_api_key() == "test-key"

    def test_reload_picks_up_changes(self, tmp_path, clean_env):
        settings = write_env(tmp_path, "GEMINI_API_KEY=first\n")
        (tmp_path / ".env").write_text("GEMINI_API_KEY=second\n")
        settings.reload_env()
        assert settings.get_gemini_api_key() == "second"


class TestStorageAndLogging:
    def test_db_path_defaults_to_project_root(self, tmp_path, clean_env):
        settings = write_env(tmp_path, "")
        assert settings.get_db_path() == tmp_path / "smart_dictation.db"

    def test_db_path_override(self, tmp_path, clean_env):
        settings = write_env(tmp_path, f"SMART_DICTATION_DB={tmp_path / 'other.db'}\n")
        assert settings.get_db_path() == tmp_path / "other.db"

    def test_log_level(self, tmp_path, clean_env):
        assert write_env(tmp_path, "").get_log_level() == "INFO"
        os.environ["SMART_DICTATION_LOG_LEVEL"] = "debug"
        assert SettingsManager(project_root=tmp_path).get_log_level() == "DEBUG"


class TestAdmins:
    def test_default_allow_list(self, tmp_path, clean_env):
        assert write_env(tmp_path, "").get_admin_identifiers() == DEFAULT_ADMIN_IDENTIFIERS

    def test_comma_separated_override(self, tmp_path, clean_env):
        settings = write_env(tmp_path, "SMART_DICTATION_ADMINS=ann, bo ,\n")
        assert settings.get_admin_identifiers() == frozenset({"ann", "bo"})
