"""Unit tests for AnimeRecord model validation."""

import pytest
from common.models.anime import AnimeRecord, ExternalSource, SeasonEntry
from pydantic import ValidationError


class TestAnimeRecordModel:
    """Test suite for AnimeRecord validation and helpers."""

    def test_minimal_record(self):
        """Only a title is required; collections default to empty."""
        record = AnimeRecord(title="Naruto")
        assert record.alternate_titles == []
        assert record.external_ids == {}
        assert record.seasons == []
        assert record.consolidated is None

    def test_title_required(self):
        with pytest.raises(ValidationError):
            AnimeRecord()

    def test_external_ids_accept_source_values(self):
        """Source names are coerced into ExternalSource keys."""
        record = AnimeRecord(title="Naruto", external_ids={"mal": 20, "anilist": 20})
        assert record.external_ids == {ExternalSource.MAL: 20, ExternalSource.ANILIST: 20}

    def test_unknown_external_source_rejected(self):
        with pytest.raises(ValidationError):
            AnimeRecord(title="Naruto", external_ids={"crunchyroll": 1})

    def test_negative_episodes_rejected(self):
        with pytest.raises(ValidationError):
            AnimeRecord(title="Naruto", episodes=-1)

    def test_type_is_upper_cased(self):
        assert AnimeRecord(title="Akira", type="Movie").type == "MOVIE"
        assert AnimeRecord(title="Akira", type="  ").type is None

    def test_episode_count_prefers_total_episodes(self):
        assert AnimeRecord(title="X", episodes=12, total_episodes=13).episode_count == 13
        assert AnimeRecord(title="X", episodes=12).episode_count == 12
        assert AnimeRecord(title="X").episode_count is None

    def test_title_candidates_order_and_blanks(self):
        record = AnimeRecord(
            title="Shingeki no Kyojin",
            title_english="Attack on Titan",
            title_romaji="",
            alternate_titles=["AoT", ""],
        )
        assert list(record.title_candidates()) == [
            "Shingeki no Kyojin",
            "Attack on Titan",
            "AoT",
        ]

    def test_season_entry_defaults(self):
        entry = SeasonEntry(season=2, episodes=12)
        assert entry.label is None
        assert entry.external_ids == {}
