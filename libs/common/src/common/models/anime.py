"""Pydantic models for anime metadata records used by the entity-resolution engine."""
from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ExternalSource(str, Enum):
    """External catalog namespaces whose ids identify an anime globally."""

    MAL = "mal"
    ANILIST = "anilist"
    KITSU = "kitsu"
    ANIDB = "anidb"


class SeasonEntry(BaseModel):
    """One installment of a consolidated multi-season series."""

    season: int | None = Field(None, description="Season index (1-based)")
    label: str | None = Field(
        None, description="Free-form season label (e.g. 'Part 2', 'Final Season')"
    )
    episodes: int | None = Field(None, ge=0, description="Episode count of the season")
    year: int | None = Field(None, description="Release year of the season")
    external_ids: dict[ExternalSource, int] = Field(
        default_factory=dict,
        description="External ids of the record this season was built from",
    )


class AnimeRecord(BaseModel):
    """One metadata observation of an anime, from a source or the canonical store."""

    # =====================================================================
    # SCALAR FIELDS (alphabetical)
    # =====================================================================
    consolidated: bool | None = Field(
        None,
        description="True once the record represents a merged multi-season series",
    )
    episodes: int | None = Field(None, ge=0, description="Episode count")
    id: str | None = Field(None, description="Opaque store id, passed through untouched")
    title: str = Field(..., description="Primary display title")
    title_english: str | None = Field(None, description="Localized English title")
    title_romaji: str | None = Field(None, description="Romanized Japanese title")
    total_episodes: int | None = Field(
        None, ge=0, description="Episode count reported by a second source"
    )
    type: str | None = Field(None, description="Coarse category (TV, MOVIE, OVA, ...)")
    year: int | None = Field(None, description="Release year")

    # =====================================================================
    # ARRAY FIELDS (alphabetical)
    # =====================================================================
    alternate_titles: list[str] = Field(
        default_factory=list, description="Additional known titles"
    )
    genres: list[str] = Field(default_factory=list, description="Genre labels")
    seasons: list[SeasonEntry] = Field(
        default_factory=list,
        description="Ordered seasons, present only on consolidated records",
    )

    # =====================================================================
    # OBJECT/DICT FIELDS (alphabetical)
    # =====================================================================
    external_ids: dict[ExternalSource, int] = Field(
        default_factory=dict,
        description="External catalog ids {source: id}, at most one per source",
    )

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str | None) -> str | None:
        """Store types upper-cased so 'Movie' and 'MOVIE' compare equal."""
        if v is None:
            return None
        v = v.strip().upper()
        return v or None

    @property
    def episode_count(self) -> int | None:
        """Best known episode count, preferring ``total_episodes``."""
        if self.total_episodes is not None:
            return self.total_episodes
        return self.episodes

    def title_candidates(self) -> Iterator[str]:
        """Yield every non-empty title variant, primary fields first."""
        for value in (self.title, self.title_english, self.title_romaji):
            if value:
                yield value
        for value in self.alternate_titles:
            if value:
                yield value
