"""Main entry point - wires storage, session and content services together."""

import logging
import sys
from dataclasses import dataclass
from datetime import date
from typing import Optional

from smart_dictation.io import AccountStore, SqliteKeyValueStore
from smart_dictation.logging_config import configure_logging
from smart_dictation.services import (
    ContentService,
    DailyContentCache,
    GeminiContentService,
    SessionContext,
    SettingsManager,
    StudyService,
)

logger = logging.getLogger(__name__)


@dataclass
class Application:
    """Every long-lived component, built once by ``build_app``."""

    store: SqliteKeyValueStore
    accounts: AccountStore
    session: SessionContext
    study: StudyService
    daily_cache: DailyContentCache
    content: Optional[ContentService]

    def close(self) -> None:
        self.store.close()


def build_app(settings: SettingsManager) -> Application:
    """
    Composition root.
    This is the only place that knows how to instantiate and wire all components.
    """
    store = SqliteKeyValueStore(settings.get_db_path())
    store.ensure_schema()

    accounts = AccountStore(store, admin_identifiers=settings.get_admin_identifiers())
    session = SessionContext(accounts)
    session.load()

    api_key = settings.get_gemini_api_key()
    content = GeminiContentService(api_key) if api_key else None
    if content is None:
        logger.warning("GEMINI_API_KEY not set; content generation is disabled")

    return Application(
        store=store,
        accounts=accounts,
        session=session,
        study=StudyService(accounts),
        daily_cache=DailyContentCache(store),
        content=content,
    )


def main() -> int:
    settings = SettingsManager()
    configure_logging(settings.get_log_level())

    app = build_app(settings)
    try:
        if app.content is not None:
            daily = app.daily_cache.get_or_generate(date.today().isoformat(), app.content.generate_daily_content)
            for quote in daily.quotes if daily else []:
                print(f'"{quote.english}" ({quote.chinese}) - {quote.author}')

        user = app.session.current_user
        if user is None:
            print("No active session.")
            return 0

        data = app.study.load(user.id)
        words = sum(len(w) for w in data.library.values())
        print(f"Logged in as {user.username}: {words} words, {len(data.history)} tests taken.")
        return 0
    finally:
        app.close()


if __name__ == "__main__":
    sys.exit(main())
