"""Tests for entity_resolution.similarity."""

import pytest
from entity_resolution.similarity import jaccard_similarity, string_similarity, token_jaccard

TITLE_PAIRS = [
    ("One Piece", "One Peace"),
    ("Naruto", "Naruto Shippuden"),
    ("Boku no Hero Academia", "My Hero Academia"),
    ("kitten", "sitting"),
    ("Steins;Gate", "Steins Gate 0"),
    ("", "Bleach"),
]


class TestStringSimilarity:
    """Test edit-distance similarity."""

    def test_identical(self):
        assert string_similarity("One Piece", "One Piece") == 1.0

    def test_equal_after_normalization(self):
        assert string_similarity("Naruto", "naruto") == 1.0
        assert string_similarity("Naruto (TV)", "NARUTO!") == 1.0

    def test_near_match(self):
        assert string_similarity("One Piece", "One Peace") > 0.7

    def test_exact_levenshtein(self):
        """kitten -> sitting is three edits over seven characters."""
        assert string_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_blank_titles_never_match(self):
        assert string_similarity("", "Naruto") == 0.0
        assert string_similarity("Naruto", None) == 0.0
        assert string_similarity("", "") == 0.0
        assert string_similarity("!!!", "???") == 0.0

    @pytest.mark.parametrize(("a", "b"), TITLE_PAIRS)
    def test_symmetric(self, a, b):
        assert string_similarity(a, b) == string_similarity(b, a)

    @pytest.mark.parametrize("title", [a for a, _ in TITLE_PAIRS if a])
    def test_identity(self, title):
        assert string_similarity(title, title) == 1.0

    @pytest.mark.parametrize(("a", "b"), TITLE_PAIRS)
    def test_bounded(self, a, b):
        assert 0.0 <= string_similarity(a, b) <= 1.0


class TestJaccard:
    """Test token-set overlap."""

    def test_jaccard_similarity(self):
        assert jaccard_similarity({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)
        assert jaccard_similarity({"a"}, {"a"}) == 1.0

    def test_both_empty(self):
        assert jaccard_similarity(set(), set()) == 0.0

    def test_token_jaccard_bridges_romaji_and_english(self):
        assert token_jaccard("Boku no Hero Academia", "My Hero Academia") == pytest.approx(2 / 3)

    def test_token_jaccard_ignores_word_order(self):
        assert token_jaccard("Hero Academia", "Academia Hero") == 1.0
