from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from keyramp.core.config import TrainerConfig
from keyramp.core.lesson import Lesson, LessonGenerator
from keyramp.core.letter_stats import ActiveLetterSet, LetterStat, LetterStatsTracker
from keyramp.core.metrics import Metrics, RunningAverages, compute_metrics
from keyramp.core.progression import ProgressionPolicy
from keyramp.core.timer import LessonTimer

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class SessionPhase(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session handed to the renderer."""

    lesson_text: str
    input_text: str
    position: int
    errors: int
    letter_stats: Dict[str, LetterStat]
    active_letters: Tuple[str, ...]
    focus_letter: Optional[str]
    metrics: Metrics
    averages: RunningAverages
    phase: SessionPhase
    locked_preview: Tuple[str, ...]


class TypingSession:
    """Drives one adaptive lesson after another.

    The renderer reports every change of the input field through
    :meth:`handle_input` and calls :meth:`tick` on a fixed interval. A lesson
    moves ``IDLE -> ACTIVE -> COMPLETE`` and, once the completion delay has
    passed, a fresh lesson puts the session back to ``IDLE``.

    Letter timing is measured from the start of the lesson, so later
    letters in a lesson carry larger latencies than earlier ones.
    """

    def __init__(
        self,
        config: Optional[TrainerConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """Create a session with the seed letters active and a first lesson ready."""
        self._config = config or TrainerConfig()
        self._clock = clock or monotonic_ms
        self._letters = ActiveLetterSet(self._config.seed_letters, self._config.alphabet)
        self._stats = LetterStatsTracker(self._letters, self._config.confidence_samples)
        self._generator = LessonGenerator(self._config, rng)
        self._policy = ProgressionPolicy(self._config.unlock_threshold)
        self._regen_timer = LessonTimer()

        self._lesson = Lesson(text="", focus_letter=None)
        self._input = ""
        self._position = 0
        self._errors = 0
        self._start_time: Optional[float] = None
        self._phase = SessionPhase.IDLE
        self._metrics = Metrics()
        self._averages = RunningAverages()
        self._completed_lessons = 0

        self.new_lesson()

    @property
    def phase(self) -> SessionPhase:
        """Current lesson phase."""
        return self._phase

    @property
    def lesson_text(self) -> str:
        """Text the user is expected to type."""
        return self._lesson.text

    @property
    def focus_letter(self) -> Optional[str]:
        """Slowest calibrated letter, emphasised in the current lesson."""
        return self._lesson.focus_letter

    @property
    def input_text(self) -> str:
        return self._input

    @property
    def position(self) -> int:
        return self._position

    @property
    def errors(self) -> int:
        return self._errors

    @property
    def start_time(self) -> Optional[float]:
        """Clock reading (ms) when the lesson became active, or None."""
        return self._start_time

    @property
    def metrics(self) -> Metrics:
        """Metrics as of the last tick or completion."""
        return self._metrics

    @property
    def averages(self) -> RunningAverages:
        return self._averages

    @property
    def completed_lessons(self) -> int:
        return self._completed_lessons

    @property
    def active_letters(self) -> Tuple[str, ...]:
        return self._letters.letters()

    @property
    def stats(self) -> LetterStatsTracker:
        return self._stats

    @property
    def regeneration_pending(self) -> bool:
        """True while a completed lesson is waiting to be replaced."""
        return self._regen_timer.active

    def start(self) -> None:
        """Begin timing the current lesson; ignored unless idle."""
        if self._phase is not SessionPhase.IDLE:
            return
        self._phase = SessionPhase.ACTIVE
        self._start_time = self._clock()

    def handle_input(self, value: str) -> None:
        """Process the full current contents of the input field."""
        if self._phase is SessionPhase.COMPLETE:
            logger.debug("Ignoring input while lesson is complete")
            return
        if self._phase is SessionPhase.IDLE:
            if not value:
                return
            self.start()

        if len(value) == len(self._input) + 1:
            self._check_character(value)

        self._input = value
        self._position = len(value)

        if value == self._lesson.text:
            self._complete()

    def tick(self) -> None:
        """Periodic update: refresh live metrics or fire the pending lesson."""
        now = self._clock()
        if self._phase is SessionPhase.ACTIVE:
            self._metrics = self._compute_metrics(now)
        elif self._phase is SessionPhase.COMPLETE and self._regen_timer.due(now):
            self.new_lesson()

    def new_lesson(self) -> Lesson:
        """Replace the current lesson and reset the input state."""
        self._regen_timer.cancel()
        self._lesson = self._generator.generate_lesson(self._letters.letters(), self._stats)
        self._input = ""
        self._position = 0
        self._errors = 0
        self._start_time = None
        self._phase = SessionPhase.IDLE
        return self._lesson

    def close(self) -> None:
        """Tear down: drop any pending lesson regeneration."""
        self._regen_timer.cancel()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            lesson_text=self._lesson.text,
            input_text=self._input,
            position=self._position,
            errors=self._errors,
            letter_stats=self._stats.snapshot(),
            active_letters=self._letters.letters(),
            focus_letter=self._lesson.focus_letter,
            metrics=self._metrics,
            averages=self._averages,
            phase=self._phase,
            locked_preview=tuple(self._policy.upcoming(self._letters, self._config.locked_preview)),
        )

    def _check_character(self, value: str) -> None:
        index = len(value) - 1
        if index >= len(self._lesson.text):
            return
        expected = self._lesson.text[index]
        if value[index] != expected:
            self._errors += 1
            return
        now = self._clock()
        start = self._start_time if self._start_time is not None else now
        self._stats.record_correct(expected, int(now - start))

    def _compute_metrics(self, now: float) -> Metrics:
        elapsed = now - self._start_time if self._start_time is not None else 0.0
        return compute_metrics(
            chars_typed=len(self._input),
            errors=self._errors,
            elapsed_ms=elapsed,
            active_letter_count=len(self._letters),
            chars_per_word=self._config.chars_per_word,
        )

    def _complete(self) -> None:
        now = self._clock()
        self._phase = SessionPhase.COMPLETE
        self._metrics = self._compute_metrics(now)
        self._averages = self._averages.fold(self._metrics)
        self._completed_lessons += 1
        unlocked = self._policy.apply(self._stats, self._letters)
        self._regen_timer.start(now, self._config.completion_delay_ms)
        logger.info(
            "Lesson %d complete: %d wpm, %d%% accuracy, score %d%s",
            self._completed_lessons,
            self._metrics.wpm,
            self._metrics.accuracy,
            self._metrics.score,
            f", unlocked {unlocked!r}" if unlocked else "",
        )
