"""Tests for entity_resolution.scoring."""

import pytest
from common.models.anime import AnimeRecord, ExternalSource
from entity_resolution.exceptions import InvalidRecordError
from entity_resolution.scoring import pick_preferred_title, score_record, select_primary


class TestScoreRecord:
    """Test record quality scoring."""

    def test_bare_record(self):
        assert score_record(AnimeRecord(title="Naruto")) == 0

    def test_complete_record(self):
        record = AnimeRecord(
            title="Boku no Hero Academia",
            title_english="My Hero Academia",
            episodes=13,
            year=2016,
            genres=["Action"],
            external_ids={ExternalSource.ANILIST: 21459},
        )
        assert score_record(record) == 70

    def test_romanized_only_title(self):
        """Penalized, partly offset by the short-title bonus (10 - 21/10)."""
        record = AnimeRecord(title="Boku no Hero Academia")
        assert score_record(record) == pytest.approx(-5 + 7.9)

    def test_romanized_english_title_earns_nothing(self):
        record = AnimeRecord(title="Attack on Titan", title_english="Shingeki no Kyojin")
        assert score_record(record) == 0

    def test_longer_english_title_still_penalizes_romanized_title(self):
        record = AnimeRecord(
            title="Ore Monogatari!!", title_english="My Love Story!! extended version"
        )
        assert score_record(record) == 25

    def test_total_episodes_counts(self):
        assert score_record(AnimeRecord(title="Naruto", total_episodes=220)) == 10


class TestSelectPrimary:
    """Test primary record selection."""

    def test_english_record_wins(self):
        romanized = AnimeRecord(title="Boku no Hero Academia", year=2016)
        english = AnimeRecord(
            title="My Hero Academia",
            title_english="My Hero Academia",
            year=2016,
            external_ids={ExternalSource.ANILIST: 10},
        )
        assert select_primary([romanized, english]) is english

    def test_tie_keeps_first(self):
        first = AnimeRecord(title="Naruto", year=2002)
        second = AnimeRecord(title="Naruto (TV)", year=2002)
        assert select_primary([first, second]) is first

    def test_empty_group(self):
        with pytest.raises(InvalidRecordError):
            select_primary([])


class TestPickPreferredTitle:
    """Test display title choice."""

    def test_english_title(self):
        record = AnimeRecord(title="Shingeki no Kyojin", title_english="Attack on Titan")
        assert pick_preferred_title(record) == "Attack on Titan"

    def test_shortest_english_like_alternate(self):
        record = AnimeRecord(
            title="Shingeki no Kyojin",
            alternate_titles=["Attack on Titan: The Series", "Attack on Titan"],
        )
        assert pick_preferred_title(record) == "Attack on Titan"

    def test_romanized_english_title_skipped(self):
        record = AnimeRecord(
            title="Kaguya-sama: Love Is War",
            title_english="Kaguya-sama wa Kokurasetai",
            alternate_titles=["Love Is War"],
        )
        assert pick_preferred_title(record) == "Love Is War"

    def test_shortest_romanized_when_nothing_else(self):
        record = AnimeRecord(
            title="Yahari Ore no Seishun Love Comedy wa Machigatteiru",
            alternate_titles=["Ore no Seishun"],
        )
        assert pick_preferred_title(record) == "Ore no Seishun"

    def test_non_latin_title_falls_back_to_primary(self):
        assert pick_preferred_title(AnimeRecord(title="進撃の巨人")) == "進撃の巨人"
