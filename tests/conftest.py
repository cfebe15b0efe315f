"""Pytest fixtures for Keyramp tests."""

from __future__ import annotations

import random

import pytest

from keyramp.core.config import TrainerConfig
from keyramp.core.session import TypingSession


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 10_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def config() -> TrainerConfig:
    return TrainerConfig()


@pytest.fixture()
def session(config: TrainerConfig, clock: FakeClock) -> TypingSession:
    return TypingSession(config, rng=random.Random(1234), clock=clock)


def type_text(session: TypingSession, clock: FakeClock, text: str, step_ms: float = 100.0) -> None:
    """Feed *text* one character at a time, advancing the clock between keys."""
    typed = session.input_text
    for char in text:
        clock.advance(step_ms)
        typed += char
        session.handle_input(typed)
