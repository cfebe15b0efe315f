from __future__ import annotations

from typing import Optional


class LessonTimer:
    """One-shot deadline, polled by the session tick.

    Starting the timer again replaces the pending deadline, so at most one
    callback is ever outstanding.
    """

    def __init__(self) -> None:
        self._deadline: Optional[float] = None

    @property
    def active(self) -> bool:
        return self._deadline is not None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def start(self, now_ms: float, delay_ms: float) -> None:
        self._deadline = now_ms + delay_ms

    def cancel(self) -> None:
        self._deadline = None

    def due(self, now_ms: float) -> bool:
        """True once *now_ms* has reached the deadline of an armed timer."""
        return self._deadline is not None and now_ms >= self._deadline
