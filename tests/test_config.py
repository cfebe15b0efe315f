"""Tests for keyramp.core.config – YAML trainer settings."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from keyramp.core.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    TrainerConfig,
    load_config,
)


def _write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Bundled default
# ---------------------------------------------------------------------------

class TestDefaultConfig:
    def test_bundled_file_exists(self):
        assert DEFAULT_CONFIG_PATH.exists()

    def test_bundled_matches_dataclass_defaults(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert load_config() == TrainerConfig()

    def test_alphabet_order(self):
        config = TrainerConfig()
        assert len(config.alphabet) == 26
        assert config.alphabet[:3] == ("b", "c", "d")
        assert config.alphabet[-5:] == ("a", "e", "i", "o", "u")

    def test_seed_letters(self):
        assert TrainerConfig().seed_letters == ("e", "t", "a", "o", "i", "n")


# ---------------------------------------------------------------------------
# Loading custom files
# ---------------------------------------------------------------------------

class TestLoadConfig:
    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "trainer.yaml", {"words_per_lesson": 8})
        config = load_config(path)
        assert config.words_per_lesson == 8
        assert config.confidence_samples == 50

    def test_letter_lists_as_strings(self, tmp_path: Path):
        path = _write_yaml(
            tmp_path / "trainer.yaml",
            {"consonants": "t n s", "vowels": "e a", "seed_letters": "e t"},
        )
        config = load_config(path)
        assert config.alphabet == ("t", "n", "s", "e", "a")
        assert config.seed_letters == ("e", "t")

    def test_letter_lists_as_lists(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "trainer.yaml", {"seed_letters": ["a", "t"]})
        assert load_config(path).seed_letters == ("a", "t")

    def test_word_length(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "trainer.yaml", {"word_length": {"min": 2, "max": 4}})
        config = load_config(path)
        assert (config.min_word_length, config.max_word_length) == (2, 4)

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = _write_yaml(tmp_path / "env.yaml", {"completion_delay_ms": 500})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config().completion_delay_ms == 500

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    @pytest.mark.parametrize(
        "data, match",
        [
            ({"vowels": []}, "vowels"),
            ({"consonants": "b c", "vowels": "a b"}, "both consonant and vowel"),
            ({"seed_letters": "e 7"}, "not in alphabet"),
            ({"seed_letters": "e e"}, "duplicate"),
            ({"seed_letters": "et"}, "single letter"),
            ({"word_length": {"min": 5, "max": 3}}, "exceeds max"),
            ({"word_length": {"min": 0, "max": 3}}, "min"),
            ({"focus_probability": 1.5}, "focus_probability"),
            ({"unlock_threshold": -0.1}, "unlock_threshold"),
            ({"words_per_lesson": 0}, "words_per_lesson"),
            ({"completion_delay_ms": "soon"}, "completion_delay_ms"),
            ({"metrics_tick_ms": True}, "metrics_tick_ms"),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, data: dict, match: str):
        path = _write_yaml(tmp_path / "trainer.yaml", data)
        with pytest.raises(ValueError, match=match):
            load_config(path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "trainer.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path):
        path = tmp_path / "trainer.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_error_names_file(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "broken.yaml", {"words_per_lesson": -1})
        with pytest.raises(ValueError, match="broken.yaml"):
            load_config(path)
