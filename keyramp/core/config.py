from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "KEYRAMP_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "data" / "trainer.yaml"


@dataclass(frozen=True)
class TrainerConfig:
    """Tunable constants of the adaptive trainer."""

    consonants: Tuple[str, ...] = tuple("bcdfghjklmnpqrstvwxyz")
    vowels: Tuple[str, ...] = tuple("aeiou")
    seed_letters: Tuple[str, ...] = ("e", "t", "a", "o", "i", "n")
    words_per_lesson: int = 20
    min_word_length: int = 3
    max_word_length: int = 6
    focus_probability: float = 0.7
    confidence_samples: int = 50
    unlock_threshold: float = 0.8
    completion_delay_ms: int = 1500
    metrics_tick_ms: int = 100
    chars_per_word: int = 5
    locked_preview: int = 5

    @property
    def alphabet(self) -> Tuple[str, ...]:
        """Canonical unlock order: consonants, then vowels."""
        return self.consonants + self.vowels


def load_config(path: Optional[Path] = None) -> TrainerConfig:
    """Load trainer settings from *path*, ``$KEYRAMP_CONFIG`` or the bundled default."""
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trainer config not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{path.name}: expected a YAML mapping of trainer settings")

    config = _build_config(path.name, raw)
    logger.info(
        "Loaded trainer config from %s (%d letters, %d seed)",
        path,
        len(config.alphabet),
        len(config.seed_letters),
    )
    return config


def _letters(name: str, raw: Dict[str, Any], key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        value = value.split()
    if not isinstance(value, list):
        raise ValueError(f"{name}: '{key}' must be a list of letters")
    letters: List[str] = [str(item).strip() for item in value if str(item).strip()]
    for letter in letters:
        if len(letter) != 1:
            raise ValueError(f"{name}: '{key}' entry {letter!r} is not a single letter")
    if len(set(letters)) != len(letters):
        raise ValueError(f"{name}: '{key}' contains duplicate letters")
    return tuple(letters)


def _positive_int(name: str, raw: Dict[str, Any], key: str, default: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name}: '{key}' must be a positive integer")
    return value


def _fraction(name: str, raw: Dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
        raise ValueError(f"{name}: '{key}' must be a number between 0 and 1")
    return float(value)


def _build_config(name: str, raw: Dict[str, Any]) -> TrainerConfig:
    defaults = TrainerConfig()

    consonants = _letters(name, raw, "consonants", defaults.consonants)
    vowels = _letters(name, raw, "vowels", defaults.vowels)
    if not consonants:
        raise ValueError(f"{name}: 'consonants' has no letters")
    if not vowels:
        raise ValueError(f"{name}: 'vowels' has no letters")
    overlap = set(consonants) & set(vowels)
    if overlap:
        raise ValueError(f"{name}: letters listed as both consonant and vowel: {sorted(overlap)}")

    seed = _letters(name, raw, "seed_letters", defaults.seed_letters)
    if not seed:
        raise ValueError(f"{name}: 'seed_letters' has no letters")
    unknown = [letter for letter in seed if letter not in consonants and letter not in vowels]
    if unknown:
        raise ValueError(f"{name}: seed letters not in alphabet: {unknown}")

    length = raw.get("word_length", {})
    if not isinstance(length, dict):
        raise ValueError(f"{name}: 'word_length' must have 'min' and 'max'")
    min_length = _positive_int(name, length, "min", defaults.min_word_length)
    max_length = _positive_int(name, length, "max", defaults.max_word_length)
    if min_length > max_length:
        raise ValueError(f"{name}: 'word_length' min {min_length} exceeds max {max_length}")

    return TrainerConfig(
        consonants=consonants,
        vowels=vowels,
        seed_letters=seed,
        words_per_lesson=_positive_int(name, raw, "words_per_lesson", defaults.words_per_lesson),
        min_word_length=min_length,
        max_word_length=max_length,
        focus_probability=_fraction(name, raw, "focus_probability", defaults.focus_probability),
        confidence_samples=_positive_int(name, raw, "confidence_samples", defaults.confidence_samples),
        unlock_threshold=_fraction(name, raw, "unlock_threshold", defaults.unlock_threshold),
        completion_delay_ms=_positive_int(name, raw, "completion_delay_ms", defaults.completion_delay_ms),
        metrics_tick_ms=_positive_int(name, raw, "metrics_tick_ms", defaults.metrics_tick_ms),
        chars_per_word=_positive_int(name, raw, "chars_per_word", defaults.chars_per_word),
        locked_preview=_positive_int(name, raw, "locked_preview", defaults.locked_preview),
    )
