"""Tests for entity_resolution.text.normalization."""

import pytest
from entity_resolution.text.normalization import core_tokens, normalize_title

TITLE_CORPUS = [
    "Naruto: Shippuden (Season 2)!",
    "ＮＡＲＵＴＯ",
    "Kimi　no Na wa.",
    "Re:Zero kara Hajimeru Isekai Seikatsu S2",
    "Mob Psycho 100 III",
    "Attack on Titan: The Final Season Part 2",
    "Kaguya-sama wa Kokurasetai: Ultra Romantic",
    "season season 2 2",
    "Sword Art Online: Alicization - War of Underworld Cour 2",
    "進撃の巨人 Season 3",
    "tvs2 movie special",
    "",
    "   ",
]


class TestNormalizeTitle:
    """Test title canonicalization."""

    def test_strips_punctuation_case_and_season_markers(self):
        assert normalize_title("Naruto: Shippuden (Season 2)!") == "naruto shippuden"

    def test_missing_input(self):
        assert normalize_title("") == ""
        assert normalize_title(None) == ""

    def test_fullwidth_characters_folded(self):
        """NFKC turns full-width Latin into ASCII."""
        assert normalize_title("ＮＡＲＵＴＯ") == "naruto"

    def test_japanese_fullwidth_space(self):
        assert normalize_title("Kimi　no Na wa.") == "kimi no na wa"

    def test_filler_tokens_removed_only_when_standalone(self):
        assert normalize_title("Naruto (TV)") == "naruto"
        assert normalize_title("Akira Movie") == "akira"
        assert normalize_title("One Piece Special") == "one piece"
        assert normalize_title("TVXQ Specials") == "tvxq specials"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Re:Zero S2", "re zero"),
            ("Mob Psycho 100 Season 3", "mob psycho 100"),
            ("Attack on Titan Final Season", "attack on titan"),
            ("Kaguya-sama Cour 2", "kaguya sama"),
            ("Vinland Saga Part 2", "vinland saga"),
            ("Season 2", ""),
        ],
    )
    def test_season_markers_removed(self, raw, expected):
        assert normalize_title(raw) == expected

    def test_markers_only_removed_as_whole_words(self):
        assert normalize_title("Season 2nd") == "season 2nd"
        assert normalize_title("tvs2") == "tvs2"

    def test_underscore_treated_as_punctuation(self):
        assert normalize_title("snake_case_title") == "snake case title"

    def test_non_latin_letters_kept(self):
        assert normalize_title("進撃の巨人") == "進撃の巨人"

    def test_whitespace_collapsed(self):
        assert normalize_title("  One    Piece \t ") == "one piece"

    @pytest.mark.parametrize("title", TITLE_CORPUS)
    def test_idempotent(self, title):
        """normalize(normalize(s)) == normalize(s)."""
        once = normalize_title(title)
        assert normalize_title(once) == once

    def test_nested_marker_fully_removed(self):
        """Removing an inner marker can expose an outer one; both go."""
        assert normalize_title("season season 2 2") == ""


class TestCoreTokens:
    """Test content-bearing token extraction."""

    def test_drops_particles_and_stop_words(self):
        assert core_tokens("Boku no Hero Academia") == {"boku", "hero", "academia"}
        assert core_tokens("My Hero Academia") == {"hero", "academia"}

    def test_drops_digits_and_season_words(self):
        assert core_tokens("Attack on Titan Season 2") == {"attack", "titan"}
        assert core_tokens("Mob Psycho 100") == {"mob", "psycho"}
        assert core_tokens("Naruto Shippuden") == {"naruto"}

    def test_empty(self):
        assert core_tokens("") == set()
        assert core_tokens(None) == set()
