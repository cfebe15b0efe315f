"""Tests for keyramp.core.timer – the cancelable lesson timer."""

from __future__ import annotations

from keyramp.core.timer import LessonTimer


class TestLessonTimer:
    def test_inactive_initially(self):
        timer = LessonTimer()
        assert not timer.active
        assert not timer.due(1e12)

    def test_due_at_deadline(self):
        timer = LessonTimer()
        timer.start(1000, 1500)
        assert timer.deadline == 2500
        assert not timer.due(2499)
        assert timer.due(2500)

    def test_cancel(self):
        timer = LessonTimer()
        timer.start(0, 100)
        timer.cancel()
        assert not timer.active
        assert not timer.due(200)

    def test_restart_replaces_deadline(self):
        timer = LessonTimer()
        timer.start(0, 100)
        timer.start(50, 100)
        assert not timer.due(120)
        assert timer.due(150)
