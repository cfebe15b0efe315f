from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass
class LetterStat:
    """Timing and confidence for one active letter."""

    count: int = 0
    total_time_ms: int = 0
    avg_time_ms: float = 0.0
    confidence: float = 0.0
    calibrated: bool = False


class LetterStatsTracker:
    """Owns one LetterStat per active letter, in the order letters were added.

    Stats are only mutated through :meth:`record_correct`; callers that need
    to hold on to values should use :meth:`snapshot`.
    """

    def __init__(self, letters: Iterable[str] = (), confidence_samples: int = 50) -> None:
        self._confidence_samples = confidence_samples
        self._stats: Dict[str, LetterStat] = {}
        for letter in letters:
            self.track(letter)

    def __contains__(self, letter: object) -> bool:
        return letter in self._stats

    def __len__(self) -> int:
        return len(self._stats)

    def __iter__(self) -> Iterator[str]:
        return iter(self._stats)

    def track(self, letter: str) -> None:
        """Start tracking *letter* with zeroed, uncalibrated stats."""
        if letter not in self._stats:
            self._stats[letter] = LetterStat()

    def get(self, letter: str) -> Optional[LetterStat]:
        stat = self._stats.get(letter)
        return replace(stat) if stat is not None else None

    def record_correct(self, letter: str, elapsed_ms: int) -> None:
        """Record one correctly typed *letter* that took *elapsed_ms*."""
        stat = self._stats.get(letter)
        if stat is None:
            logger.debug("Ignoring timing for untracked character %r", letter)
            return
        stat.count += 1
        stat.total_time_ms += max(0, int(elapsed_ms))
        stat.avg_time_ms = stat.total_time_ms / stat.count
        stat.calibrated = True
        stat.confidence = min(1.0, stat.count / self._confidence_samples)

    def all_confident(self, threshold: float = 0.8) -> bool:
        """Return True if every tracked letter's confidence exceeds *threshold*."""
        return all(stat.confidence > threshold for stat in self._stats.values())

    def slowest(self) -> Optional[str]:
        """Calibrated letter with the highest average time; earliest wins ties."""
        slowest: Optional[str] = None
        max_time = 0.0
        for letter, stat in self._stats.items():
            if not stat.calibrated:
                continue
            if slowest is None or stat.avg_time_ms > max_time:
                slowest = letter
                max_time = stat.avg_time_ms
        return slowest

    def snapshot(self) -> Dict[str, LetterStat]:
        """Independent copies of every stat, keyed by letter."""
        return {letter: replace(stat) for letter, stat in self._stats.items()}


class ActiveLetterSet:
    """Append-only, ordered set of letters currently in rotation."""

    def __init__(self, seed: Sequence[str], alphabet: Sequence[str]) -> None:
        self._alphabet: Tuple[str, ...] = tuple(alphabet)
        self._letters: List[str] = []
        for letter in seed:
            self.append(letter)

    def __contains__(self, letter: object) -> bool:
        return letter in self._letters

    def __len__(self) -> int:
        return len(self._letters)

    def __iter__(self) -> Iterator[str]:
        return iter(self._letters)

    @property
    def alphabet(self) -> Tuple[str, ...]:
        return self._alphabet

    def letters(self) -> Tuple[str, ...]:
        return tuple(self._letters)

    def append(self, letter: str) -> bool:
        """Add *letter*; returns False if it is already active."""
        if letter in self._letters:
            return False
        self._letters.append(letter)
        return True

    def remaining(self) -> List[str]:
        """Locked letters in canonical alphabet order."""
        return [letter for letter in self._alphabet if letter not in self._letters]
