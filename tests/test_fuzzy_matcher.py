"""
Tests for FuzzyMatcher similarity.
"""
import pytest

from path_agent.resolution import FuzzyMatcher


class TestSimilarity:
    """Tests for the normalized edit-distance similarity."""

    @pytest.mark.parametrize("a,b", [
        ("desktop", "dekstop"),
        ("바탕화면", "바탕 화면"),
        ("customapp", "CustomApp".lower()),
        ("", "abc"),
        ("games", "game"),
    ])
    def test_similarity_is_symmetric(self, a, b):
        """similarity(a, b) == similarity(b, a)."""
        assert FuzzyMatcher.similarity(a, b) == FuzzyMatcher.similarity(b, a)

    @pytest.mark.parametrize("text", ["", "a", "desktop", "바탕화면", "kakaotalk received files"])
    def test_similarity_is_reflexive(self, text):
        """A string is identical to itself."""
        assert FuzzyMatcher.similarity(text, text) == 1.0

    def test_similarity_uses_longer_length(self):
        """One edit over seven characters gives 1 - 1/7."""
        assert FuzzyMatcher.similarity("desktop", "desktp") == pytest.approx(1 - 1 / 7)

    def test_completely_different_strings(self):
        """Strings with nothing in common score 0."""
        assert FuzzyMatcher.similarity("abc", "xyz") == 0.0

    def test_empty_against_non_empty(self):
        """Empty string against non-empty scores 0."""
        assert FuzzyMatcher.similarity("", "abc") == 0.0


class TestMatching:
    """Tests for threshold-based helpers."""

    def test_threshold_validation(self):
        """Thresholds outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            FuzzyMatcher(threshold=1.5)

    def test_is_similar_respects_threshold(self):
        """is_similar compares against the configured threshold."""
        matcher = FuzzyMatcher(threshold=0.8)
        assert matcher.is_similar("desktop", "desktp")
        assert not matcher.is_similar("desktop", "documents")

    def test_best_match_finds_typo(self):
        """best_match returns the closest choice and its score."""
        matcher = FuzzyMatcher(threshold=0.7)
        match = matcher.best_match("downlaods", ["desktop", "downloads", "documents"])

        assert match is not None
        assert match[0] == "downloads"
        assert match[1] >= 0.7

    def test_best_match_none_below_threshold(self):
        """No choice above the threshold gives None."""
        matcher = FuzzyMatcher(threshold=0.9)
        assert matcher.best_match("zzz", ["desktop", "downloads"]) is None

    def test_best_match_empty_choices(self):
        """Empty choices give None."""
        assert FuzzyMatcher().best_match("desktop", []) is None
