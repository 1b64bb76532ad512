"""Quiz Session - drives one dictation drill over a list of words."""

import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from smart_dictation.core import QuizResult, WordEntry
from smart_dictation.services.text_processing import build_quiz_result


class LanguageMode(str, Enum):
    ENGLISH = "ENGLISH"
    CHINESE = "CHINESE"


@dataclass(frozen=True)
class QuizConfig:
    """Which side of each pair is spoken and which side the learner writes."""

    prompt_language: LanguageMode = LanguageMode.ENGLISH
    answer_language: LanguageMode = LanguageMode.CHINESE
    randomize: bool = False


def text_for(word: WordEntry, language: LanguageMode) -> str:
    return word.source_text if language is LanguageMode.ENGLISH else word.target_text


class QuizSession:
    """Holds the question queue and collected results for one drill.

    A wrong answer does not advance the queue; the learner retries or skips.
    """

    def __init__(
        self,
        words: Sequence[WordEntry],
        config: QuizConfig,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        if not words:
            raise ValueError("A quiz needs at least one word")
        self.config = config
        self._queue: List[WordEntry] = list(words)
        if config.randomize:
            (rng or random).shuffle(self._queue)
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._index = 0
        self._results: List[QuizResult] = []

    @property
    def results(self) -> List[QuizResult]:
        return list(self._results)

    @property
    def is_finished(self) -> bool:
        return self._index >= len(self._queue)

    @property
    def current_word(self) -> WordEntry:
        if self.is_finished:
            raise IndexError("Quiz is already finished")
        return self._queue[self._index]

    @property
    def progress(self) -> Tuple[int, int]:
        return self._index, len(self._queue)

    def prompt_text(self) -> str:
        return text_for(self.current_word, self.config.prompt_language)

    def expected_answer(self) -> str:
        return text_for(self.current_word, self.config.answer_language)

    def submit(self, answer: str) -> bool:
        """Check an answer. Records and advances only when it is correct."""
        if not answer.strip():
            return False
        result = build_quiz_result(self.current_word, answer, self.expected_answer(), self._clock())
        if result.is_correct:
            self._advance(result)
        return result.is_correct

    def skip(self, answer: str = "") -> None:
        """Give up on the current word, recording it as missed."""
        word = self.current_word
        self._advance(
            QuizResult(
                word_id=word.id,
                is_correct=False,
                user_answer=answer,
                correct_answer=self.expected_answer(),
                timestamp=self._clock(),
            )
        )

    def _advance(self, result: QuizResult) -> None:
        self._results.append(result)
        self._index += 1
