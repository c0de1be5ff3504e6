"""Shared fixtures for entity resolution unit tests."""

import pytest
from common.models.anime import AnimeRecord, ExternalSource


@pytest.fixture
def attack_on_titan_seasons() -> list[AnimeRecord]:
    """Three season records of one franchise with increasing years."""
    return [
        AnimeRecord(title="Attack on Titan", year=2013, episodes=25),
        AnimeRecord(title="Attack on Titan Season 2", year=2017, episodes=12),
        AnimeRecord(title="Attack on Titan Season 3", year=2018, episodes=22),
    ]


@pytest.fixture
def naruto_records() -> list[AnimeRecord]:
    """Two observations of Naruto under MAL 20 plus its sequel series."""
    return [
        AnimeRecord(title="Naruto", year=2002, external_ids={ExternalSource.MAL: 20}),
        AnimeRecord(title="Naruto (TV)", year=2002, external_ids={ExternalSource.MAL: 20}),
        AnimeRecord(title="Naruto Shippuden", year=2007),
    ]
