from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from keyramp.core.config import TrainerConfig
from keyramp.core.letter_stats import LetterStatsTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lesson:
    text: str
    focus_letter: Optional[str]

    @property
    def words(self) -> list[str]:
        return self.text.split(" ")


class LessonGenerator:
    """Builds pronounceable pseudo-word lessons from the active letters.

    Words alternate consonant and vowel by position (even index takes a
    consonant, odd index a vowel). A focus letter, when given, is placed at
    the start of most words so the slowest letter gets extra practice.
    """

    def __init__(self, config: Optional[TrainerConfig] = None, rng: Optional[random.Random] = None) -> None:
        self._config = config or TrainerConfig()
        self._rng = rng or random.Random()
        self._consonants = frozenset(self._config.consonants)
        self._vowels = frozenset(self._config.vowels)

    def generate_word(self, letters: Sequence[str], focus_letter: Optional[str] = None) -> str:
        """Return one pseudo-word drawn from *letters*."""
        if not letters:
            raise ValueError("Cannot generate a word from an empty letter set")
        consonants = [letter for letter in letters if letter in self._consonants]
        vowels = [letter for letter in letters if letter in self._vowels]

        # Without both classes there is nothing to alternate.
        if not consonants or not vowels:
            return self._rng.choice(list(letters)) * 2

        length = self._rng.randint(self._config.min_word_length, self._config.max_word_length)
        word = ""
        if focus_letter and self._rng.random() < self._config.focus_probability:
            word += focus_letter

        for i in range(len(word), length):
            if i % 2 == 0:
                word += self._rng.choice(consonants)
            else:
                word += self._rng.choice(vowels)
        return word

    def generate_lesson(self, active_letters: Sequence[str], letter_stats: LetterStatsTracker) -> Lesson:
        """Pick the focus letter and build a full lesson of words."""
        focus_letter = letter_stats.slowest()
        words = [
            self.generate_word(active_letters, focus_letter)
            for _ in range(self._config.words_per_lesson)
        ]
        lesson = Lesson(text=" ".join(words), focus_letter=focus_letter)
        logger.debug(
            "Generated lesson of %d words from %d letters (focus=%s)",
            len(words),
            len(active_letters),
            focus_letter,
        )
        return lesson
