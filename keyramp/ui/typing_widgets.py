"""Typing practice UI: letter tiles, confidence chart and lesson text board."""

from __future__ import annotations

import html
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QLabel, QWidget

from keyramp.ui.colors import TrainerColors, blend_hex, confidence_color
from keyramp.ui.models import CharState, ChartRow, LetterTile, char_states


class LetterTilesWidget(QWidget):
    """Row of letter tiles colored by confidence; locked letters are grayed out."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._tiles: list[LetterTile] = []
        self.setFixedHeight(64)
        self.setMinimumWidth(200)

    def set_tiles(self, tiles: list[LetterTile]) -> None:
        self._tiles = list(tiles)
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._tiles:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        box_size = 48
        spacing = 8
        radius = 8
        y = (self.height() - box_size) // 2
        for i, tile in enumerate(self._tiles):
            x = i * (box_size + spacing)
            if tile.locked:
                fill = TrainerColors.LOCKED_BG
                text_color = TrainerColors.LOCKED_TEXT
            else:
                fill = confidence_color(tile.confidence, tile.is_focus)
                text_color = "#ffffff"
            painter.setBrush(QColor(fill))
            painter.setPen(QPen(QColor(blend_hex(fill, "#000000", 0.15)), 1))
            painter.drawRoundedRect(x, y, box_size, box_size, radius, radius)

            font = painter.font()
            font.setPointSize(16)
            font.setBold(True)
            painter.setFont(font)
            painter.setPen(QColor(text_color))
            painter.drawText(x, y, box_size, box_size, Qt.AlignCenter, tile.letter.upper())

            marker = tile.marker
            if marker:
                font.setPointSize(10)
                painter.setFont(font)
                painter.setPen(QColor(TrainerColors.MARKER))
                painter.drawText(x + box_size - 14, y + 2, 12, 14, Qt.AlignCenter, marker)


class ConfidenceChartWidget(QWidget):
    """Bar chart of confidence (0-100%) for calibrated letters."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._rows: list[ChartRow] = []
        self.setMinimumHeight(200)

    def set_rows(self, rows: list[ChartRow]) -> None:
        self._rows = list(rows)
        self.setVisible(bool(self._rows))
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._rows:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        label_h = 20
        plot_h = self.height() - label_h
        slot_w = self.width() / len(self._rows)
        bar_w = max(8.0, slot_w * 0.6)
        for i, row in enumerate(self._rows):
            bar_h = plot_h * row.confidence_pct / 100
            x = i * slot_w + (slot_w - bar_w) / 2
            # Bars lighten as confidence drops.
            color = blend_hex(TrainerColors.PRIMARY, "#ffffff", 0.5 * (1 - row.confidence_pct / 100))
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(color))
            painter.drawRect(int(x), int(plot_h - bar_h), int(bar_w), int(bar_h))
            painter.setPen(QColor(TrainerColors.TEXT_SECONDARY))
            painter.drawText(int(i * slot_w), int(plot_h), int(slot_w), label_h, Qt.AlignCenter, row.letter)


class LessonTextLabel(QLabel):
    """Lesson text with typed characters colored and the cursor highlighted."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWordWrap(True)
        self.setTextFormat(Qt.RichText)
        self.setMinimumHeight(128)
        self.setStyleSheet("QLabel { font-size: 24px; font-family: monospace; }")

    def set_progress(self, lesson_text: str, input_text: str, position: int) -> None:
        parts = []
        for char, state in zip(lesson_text, char_states(lesson_text, input_text, position)):
            text = html.escape(char)
            if state is CharState.CORRECT:
                style = f"color:{TrainerColors.TYPED_CORRECT};"
            elif state is CharState.WRONG:
                style = f"color:{TrainerColors.TYPED_WRONG}; background:{TrainerColors.TYPED_WRONG_BG};"
            elif state is CharState.CURSOR:
                style = f"background:{TrainerColors.CURSOR_BG};"
            else:
                style = f"color:{TrainerColors.PENDING};"
            parts.append(f'<span style="{style}">{text}</span>')
        self.setText("".join(parts))
