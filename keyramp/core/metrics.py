"""Speed, accuracy and score derived from session state.

Everything here is a pure function of its arguments so the session can
recompute the displayed values on every tick without keeping counters:
  * **WPM** – (characters typed / 5) / elapsed minutes.
  * **Accuracy** – (characters typed − errors) / characters typed, as a
    percentage; 100 before anything has been typed.
  * **Score** – WPM weighted by accuracy and by how many letters are
    active, so unlocking letters raises the ceiling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Metrics:
    wpm: int = 0
    accuracy: int = 100
    score: int = 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def compute_wpm(chars_typed: int, elapsed_ms: float, chars_per_word: int = 5) -> int:
    """Words per minute; 0 when no time has elapsed or the rate is not finite."""
    minutes = elapsed_ms / 60000.0
    if minutes <= 0:
        return 0
    rate = (chars_typed / chars_per_word) / minutes
    if not math.isfinite(rate):
        return 0
    return round_half_up(rate)


def compute_accuracy(chars_typed: int, errors: int) -> int:
    """Percentage of typed characters that were not errors."""
    if chars_typed == 0:
        return 100
    return round_half_up((chars_typed - errors) / chars_typed * 100)


def compute_score(wpm: int, accuracy: int, active_letter_count: int) -> int:
    return max(0, round_half_up(wpm * (accuracy / 100) * active_letter_count / 5))


def compute_metrics(
    chars_typed: int,
    errors: int,
    elapsed_ms: float,
    active_letter_count: int,
    chars_per_word: int = 5,
) -> Metrics:
    wpm = compute_wpm(chars_typed, elapsed_ms, chars_per_word)
    accuracy = compute_accuracy(chars_typed, errors)
    return Metrics(
        wpm=wpm,
        accuracy=accuracy,
        score=compute_score(wpm, accuracy, active_letter_count),
    )


def running_average(previous: float, current: float) -> float:
    """Blend *current* into *previous*; the first nonzero value seeds the average."""
    return (previous + current) / 2 if previous else float(current)


def trend(current: float, average: float) -> Tuple[str, float]:
    """Return ("up" | "down", absolute delta) of *current* against *average*."""
    direction = "up" if current >= average else "down"
    return direction, abs(current - average)


@dataclass(frozen=True)
class RunningAverages:
    """Averages shown next to the live metrics; accuracy starts at 100."""

    wpm: float = 0.0
    accuracy: float = 100.0
    score: float = 0.0

    def fold(self, metrics: Metrics) -> "RunningAverages":
        """Return the averages after one more completed lesson."""
        return RunningAverages(
            wpm=running_average(self.wpm, metrics.wpm),
            accuracy=running_average(self.accuracy, metrics.accuracy),
            score=running_average(self.score, metrics.score),
        )
