"""Tests for keyramp.core.lesson – pseudo-word lesson generation."""

from __future__ import annotations

import random

import pytest

from keyramp.core.config import TrainerConfig
from keyramp.core.lesson import Lesson, LessonGenerator
from keyramp.core.letter_stats import LetterStatsTracker

VOWELS = set("aeiou")
SEED = ["e", "t", "a", "o", "i", "n"]


def _generator(seed: int = 7) -> LessonGenerator:
    return LessonGenerator(TrainerConfig(), random.Random(seed))


def _follows_parity(word: str, start: int = 0) -> bool:
    for i, char in enumerate(word[start:], start=start):
        if (i % 2 == 0) == (char in VOWELS):
            return False
    return True


# ---------------------------------------------------------------------------
# generate_word
# ---------------------------------------------------------------------------

class TestGenerateWord:
    def test_alternates_consonant_vowel(self):
        gen = _generator()
        for _ in range(200):
            word = gen.generate_word(["e", "t"])
            assert _follows_parity(word), word

    def test_consonant_first(self):
        gen = _generator()
        for _ in range(50):
            assert gen.generate_word(["e", "t"])[0] == "t"

    def test_length_range(self):
        gen = _generator()
        lengths = {len(gen.generate_word(SEED)) for _ in range(500)}
        assert lengths == {3, 4, 5, 6}

    def test_only_active_letters(self):
        gen = _generator()
        for _ in range(200):
            assert set(gen.generate_word(SEED)) <= set(SEED)

    def test_single_consonant_doubled(self):
        gen = _generator()
        for _ in range(20):
            assert gen.generate_word(["z"]) == "zz"

    def test_single_vowel_doubled(self):
        assert _generator().generate_word(["a"]) == "aa"

    def test_vowels_only_doubles_one_of_them(self):
        gen = _generator()
        for _ in range(50):
            word = gen.generate_word(["e", "a"])
            assert word in ("ee", "aa")

    def test_consonants_only_doubled(self):
        gen = _generator()
        for _ in range(50):
            word = gen.generate_word(["t", "n"], focus_letter="t")
            assert word in ("tt", "nn")

    def test_empty_letters_rejected(self):
        with pytest.raises(ValueError):
            _generator().generate_word([])

    def test_focus_letter_leads_some_words(self):
        gen = _generator()
        words = [gen.generate_word(["e", "t", "n"], focus_letter="e") for _ in range(1000)]
        leading = sum(1 for word in words if word[0] == "e") / len(words)
        # "e" is a vowel so it can only lead via the focus rule (~70%).
        assert 0.6 < leading < 0.8

    def test_focus_word_continues_parity(self):
        gen = _generator()
        for _ in range(200):
            word = gen.generate_word(["e", "t"], focus_letter="e")
            start = 1 if word[0] == "e" else 0
            assert _follows_parity(word, start), word

    def test_focus_probability_zero(self):
        config = TrainerConfig(focus_probability=0.0)
        gen = LessonGenerator(config, random.Random(3))
        for _ in range(100):
            assert gen.generate_word(["e", "t"], focus_letter="e")[0] == "t"

    def test_same_seed_same_words(self):
        gen_a, gen_b = _generator(42), _generator(42)
        a = [gen_a.generate_word(SEED, "o") for _ in range(10)]
        b = [gen_b.generate_word(SEED, "o") for _ in range(10)]
        assert a == b


# ---------------------------------------------------------------------------
# generate_lesson
# ---------------------------------------------------------------------------

class TestGenerateLesson:
    def test_twenty_words(self):
        lesson = _generator().generate_lesson(SEED, LetterStatsTracker(SEED))
        assert len(lesson.words) == 20
        assert "  " not in lesson.text
        assert lesson.text == lesson.text.strip()

    def test_no_focus_without_calibration(self):
        lesson = _generator().generate_lesson(SEED, LetterStatsTracker(SEED))
        assert lesson.focus_letter is None

    def test_focus_is_slowest_letter(self):
        stats = LetterStatsTracker(SEED)
        stats.record_correct("t", 120)
        stats.record_correct("o", 900)
        lesson = _generator().generate_lesson(SEED, stats)
        assert lesson.focus_letter == "o"

    def test_single_letter_lesson_is_deterministic(self):
        lesson = _generator().generate_lesson(["z"], LetterStatsTracker(["z"]))
        assert lesson.text == " ".join(["zz"] * 20)

    def test_configured_word_count(self):
        gen = LessonGenerator(TrainerConfig(words_per_lesson=5), random.Random(1))
        lesson = gen.generate_lesson(SEED, LetterStatsTracker(SEED))
        assert len(lesson.words) == 5

    def test_lesson_is_frozen(self):
        lesson = Lesson(text="ten", focus_letter=None)
        with pytest.raises(AttributeError):
            lesson.text = "net"
