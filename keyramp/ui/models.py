"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from keyramp.core.session import SessionSnapshot


@dataclass
class LetterTile:
    """UI state for a single letter tile."""

    letter: str
    confidence: float = 0.0
    calibrated: bool = False
    is_focus: bool = False
    locked: bool = False

    @property
    def marker(self) -> Optional[str]:
        """Corner badge: "!" for the focus letter, "?" before calibration."""
        if self.locked:
            return None
        if self.is_focus:
            return "!"
        if not self.calibrated:
            return "?"
        return None


class CharState(Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    CURSOR = "cursor"
    PENDING = "pending"


@dataclass(frozen=True)
class ChartRow:
    """One bar of the confidence chart."""

    letter: str
    confidence_pct: int
    samples: int


def build_letter_tiles(snapshot: SessionSnapshot) -> List[LetterTile]:
    """Active letters in unlock order followed by the locked preview."""
    tiles: List[LetterTile] = []
    for letter in snapshot.active_letters:
        stat = snapshot.letter_stats.get(letter)
        tiles.append(
            LetterTile(
                letter=letter,
                confidence=stat.confidence if stat else 0.0,
                calibrated=stat.calibrated if stat else False,
                is_focus=letter == snapshot.focus_letter,
            )
        )
    tiles.extend(LetterTile(letter=letter, locked=True) for letter in snapshot.locked_preview)
    return tiles


def char_states(lesson_text: str, input_text: str, position: int) -> List[CharState]:
    """Classify every lesson character for the text board."""
    states: List[CharState] = []
    for idx, char in enumerate(lesson_text):
        if idx < position:
            typed_ok = idx < len(input_text) and input_text[idx] == char
            states.append(CharState.CORRECT if typed_ok else CharState.WRONG)
        elif idx == position:
            states.append(CharState.CURSOR)
        else:
            states.append(CharState.PENDING)
    return states


def chart_rows(snapshot: SessionSnapshot) -> List[ChartRow]:
    """Calibrated letters with their confidence percentage and sample count."""
    return [
        ChartRow(
            letter=letter.upper(),
            confidence_pct=round(stat.confidence * 100),
            samples=stat.count,
        )
        for letter, stat in snapshot.letter_stats.items()
        if stat.calibrated
    ]
