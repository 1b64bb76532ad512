"""Study Service - orchestrates quiz completion and library edits for a user."""

import logging
import random
from typing import List, Optional, Sequence

from smart_dictation.core import UNCATEGORIZED, Library, QuizResult, TestRecord, UserData, WordEntry
from smart_dictation.io import AccountStore
from smart_dictation.services import library_service, review_scheduler

logger = logging.getLogger(__name__)


class StudyService:
    """Application service for one user's vocabulary.

    Depends on AccountStore for persistence. Each call loads the user's data,
    applies a pure transformation and writes the whole record back.
    """

    def __init__(self, accounts: AccountStore) -> None:
        self._accounts = accounts

    def load(self, user_id: str) -> UserData:
        """Return the user's data, or an empty library with the default bucket."""
        data = self._accounts.load_user_data(user_id)
        if data is None:
            return UserData(library={UNCATEGORIZED: []}, history=[])
        return data

    def complete_quiz(self, user_id: str, results: Sequence[QuizResult], now: int) -> TestRecord:
        """Apply quiz results to the library and append the test record.

        Raises:
            ValueError: If results is empty (the score would be undefined).
        """
        if not results:
            raise ValueError("Cannot complete a quiz without results")
        data = self.load(user_id)
        outcome = review_scheduler.apply_results(data.library, results, now)
        self._save(user_id, outcome.library, [*data.history, outcome.record])
        logger.info(
            "User %s finished quiz: %d/%d, score %d",
            user_id,
            outcome.record.total - len(outcome.record.wrong_words),
            outcome.record.total,
            outcome.record.score,
        )
        return outcome.record

    def review_session(
        self, user_id: str, now: int, rng: Optional[random.Random] = None
    ) -> List[WordEntry]:
        """Pick up to twenty due words for a review drill."""
        return review_scheduler.select_review_session(self.load(user_id).library, now, rng=rng)

    def add_to_library(self, user_id: str, word: WordEntry, category: Optional[str] = None) -> Library:
        data = self.load(user_id)
        library = library_service.add_word(data.library, word, category)
        self._save(user_id, library, data.history)
        return library

    def update_library(self, user_id: str, library: Library) -> None:
        data = self.load(user_id)
        self._save(user_id, library, data.history)

    def clear_history(self, user_id: str) -> None:
        data = self.load(user_id)
        self._save(user_id, data.library, [])

    def _save(self, user_id: str, library: Library, history: Sequence[TestRecord]) -> None:
        self._accounts.save_user_data(user_id, UserData(library=library, history=list(history)))
