from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QEvent, Qt, QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from keyramp.core.config import TrainerConfig
from keyramp.core.metrics import trend
from keyramp.core.session import SessionPhase, SessionSnapshot, TypingSession
from keyramp.ui.colors import TrainerColors
from keyramp.ui.models import build_letter_tiles, chart_rows
from keyramp.ui.typing_widgets import ConfidenceChartWidget, LessonTextLabel, LetterTilesWidget

logger = logging.getLogger(__name__)


class MetricCard(QFrame):
    """Current value with its running average and a trend arrow."""

    def __init__(self, title: str, color: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setStyleSheet(
            f"QFrame {{ background: {TrainerColors.CARD_BG}; border-radius: 8px; }}"
        )
        layout = QVBoxLayout(self)
        title_label = QLabel(title)
        title_label.setStyleSheet(f"color: {TrainerColors.TEXT_MUTED}; font-size: 12px;")
        self._value = QLabel("0")
        self._value.setStyleSheet(f"color: {color}; font-size: 30px; font-weight: 700;")
        self._average = QLabel("")
        self._average.setTextFormat(Qt.RichText)
        self._average.setStyleSheet(f"color: {TrainerColors.TEXT_SECONDARY}; font-size: 12px;")
        layout.addWidget(title_label)
        layout.addWidget(self._value)
        layout.addWidget(self._average)

    def set_values(self, current: int, average: float) -> None:
        self._value.setText(str(current))
        direction, delta = trend(current, average)
        arrow, color = ("▲", TrainerColors.TREND_UP) if direction == "up" else ("▼", TrainerColors.TREND_DOWN)
        self._average.setText(
            f'Avg: {round(average)} <span style="color:{color};">{arrow} {round(delta)}</span>'
        )


class MainWindow(QMainWindow):
    """Renders a TypingSession and forwards input changes to it."""

    def __init__(self, session: TypingSession, config: Optional[TrainerConfig] = None) -> None:
        super().__init__()
        self._session = session
        self._config = config or TrainerConfig()
        self.setWindowTitle("Keyramp")
        self._build_ui()

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(self._config.metrics_tick_ms)
        self._tick_timer.timeout.connect(self._on_tick)
        self._tick_timer.start()

        self._refresh()

    def _build_ui(self) -> None:
        central = QWidget()
        central.setStyleSheet(
            f"QWidget#central {{ background: qlineargradient(x1:0, y1:0, x2:1, y2:1, "
            f"stop:0 {TrainerColors.BG_TOP}, stop:1 {TrainerColors.BG_BOTTOM}); }}"
        )
        central.setObjectName("central")
        root = QVBoxLayout(central)

        header = QLabel("Adaptive Typing Trainer")
        header.setStyleSheet(f"color: {TrainerColors.PRIMARY_DARK}; font-size: 28px; font-weight: 700;")
        root.addWidget(header)

        metrics_row = QHBoxLayout()
        self._wpm_card = MetricCard("Speed (WPM)", TrainerColors.WPM)
        self._accuracy_card = MetricCard("Accuracy (%)", TrainerColors.ACCURACY)
        self._score_card = MetricCard("Score", TrainerColors.SCORE)
        for card in (self._wpm_card, self._accuracy_card, self._score_card):
            metrics_row.addWidget(card)
        root.addLayout(metrics_row)

        self._lesson_label = LessonTextLabel()
        root.addWidget(self._lesson_label)

        self._input = QLineEdit()
        self._input.setPlaceholderText("Click or start typing...")
        self._input.textChanged.connect(self._on_text_changed)
        self._input.installEventFilter(self)
        root.addWidget(self._input)

        letters_title = QLabel("Active Letters")
        letters_title.setStyleSheet(f"color: {TrainerColors.TEXT_PRIMARY}; font-size: 18px; font-weight: 700;")
        root.addWidget(letters_title)
        self._tiles = LetterTilesWidget()
        root.addWidget(self._tiles)

        self._focus_panel = QFrame()
        focus_layout = QGridLayout(self._focus_panel)
        self._focus_title = QLabel()
        self._focus_confidence = QLabel()
        self._focus_samples = QLabel()
        self._focus_avg_time = QLabel()
        focus_layout.addWidget(self._focus_title, 0, 0, 1, 3)
        focus_layout.addWidget(self._focus_confidence, 1, 0)
        focus_layout.addWidget(self._focus_samples, 1, 1)
        focus_layout.addWidget(self._focus_avg_time, 1, 2)
        root.addWidget(self._focus_panel)

        self._chart = ConfidenceChartWidget()
        root.addWidget(self._chart)

        new_lesson = QPushButton("New Lesson")
        new_lesson.clicked.connect(self._on_new_lesson)
        root.addWidget(new_lesson)

        self.setCentralWidget(central)

    def eventFilter(self, obj, event) -> bool:
        if obj is self._input and event.type() == QEvent.Type.FocusIn:
            self._session.start()
        return super().eventFilter(obj, event)

    def _on_text_changed(self, text: str) -> None:
        self._session.handle_input(text)
        self._refresh()

    def _on_tick(self) -> None:
        was_complete = self._session.phase is SessionPhase.COMPLETE
        self._session.tick()
        if was_complete and self._session.phase is SessionPhase.IDLE:
            self._set_input_text("")
            self._input.setEnabled(True)
            self._input.setFocus()
        self._refresh()

    def _on_new_lesson(self) -> None:
        self._session.new_lesson()
        self._set_input_text("")
        self._input.setFocus()
        self._refresh()

    def _set_input_text(self, text: str) -> None:
        self._input.blockSignals(True)
        self._input.setText(text)
        self._input.blockSignals(False)

    def _refresh(self) -> None:
        snapshot = self._session.snapshot()
        self._wpm_card.set_values(snapshot.metrics.wpm, snapshot.averages.wpm)
        self._accuracy_card.set_values(snapshot.metrics.accuracy, snapshot.averages.accuracy)
        self._score_card.set_values(snapshot.metrics.score, snapshot.averages.score)
        self._lesson_label.set_progress(snapshot.lesson_text, snapshot.input_text, snapshot.position)
        self._input.setEnabled(snapshot.phase is not SessionPhase.COMPLETE)
        self._tiles.set_tiles(build_letter_tiles(snapshot))
        self._chart.set_rows(chart_rows(snapshot))
        self._refresh_focus_panel(snapshot)

    def _refresh_focus_panel(self, snapshot: SessionSnapshot) -> None:
        stat = snapshot.letter_stats.get(snapshot.focus_letter) if snapshot.focus_letter else None
        if stat is None:
            self._focus_panel.setVisible(False)
            return
        self._focus_panel.setVisible(True)
        self._focus_title.setText(f"Focus Letter: {snapshot.focus_letter.upper()}")
        self._focus_confidence.setText(f"Confidence\n{round(stat.confidence * 100)}%")
        self._focus_samples.setText(f"Samples\n{stat.count}")
        self._focus_avg_time.setText(f"Avg Time\n{round(stat.avg_time_ms)}ms")

    def closeEvent(self, event: QCloseEvent) -> None:
        self._tick_timer.stop()
        self._session.close()
        logger.info("Session closed after %d lessons", self._session.completed_lessons)
        super().closeEvent(event)
