"""Explicit configuration for the entity resolution engine.

Every threshold, token list and regex rule the engine uses lives on an
immutable ``MatchingConfig`` value. Functions accept it as a keyword argument
(defaulting to ``DEFAULT_MATCHING_CONFIG``) and ``DeduplicationEngine`` binds
one at construction, so there is no process-wide mutable state.
"""

import re
from functools import cached_property
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from common.config.settings import Settings

__all__ = [
    "DEFAULT_MATCHING_CONFIG",
    "DEFAULT_SEASON_RULES",
    "MatchingConfig",
    "ScoreWeights",
    "SeasonRule",
]


class SeasonRule(BaseModel):
    """One season/part marker recognised by the season extractor.

    ``pattern`` group 1, when present, is the number. ``label`` may reference
    it as ``{number}``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Rule name used in debug logs")
    pattern: re.Pattern[str] = Field(..., description="Regex matched against the residual title")
    sets_season: bool = Field(
        default=False, description="Whether group 1 becomes the season index"
    )
    label: str | None = Field(None, description="Label template set when the rule matches")
    default_season: int | None = Field(
        None, description="Season index applied only if no earlier rule set one"
    )


DEFAULT_SEASON_RULES: tuple[SeasonRule, ...] = (
    SeasonRule(name="season", pattern=re.compile(r"season\s*(\d+)", re.I), sets_season=True),
    SeasonRule(name="s_number", pattern=re.compile(r"\bS(\d+)\b", re.I), sets_season=True),
    SeasonRule(
        name="part",
        pattern=re.compile(r"part\s*(\d+)", re.I),
        sets_season=True,
        label="Part {number}",
    ),
    SeasonRule(
        name="final_season",
        pattern=re.compile(r"final\s*season", re.I),
        label="Final Season",
    ),
    SeasonRule(
        name="shippuden",
        pattern=re.compile(r"shippuden", re.I),
        label="Shippuden",
        default_season=2,
    ),
)


class ScoreWeights(BaseModel):
    """Additive weights of the record quality score."""

    model_config = ConfigDict(frozen=True)

    english_title: float = 30
    episodes: float = 10
    year: float = 5
    genres: float = 5
    external_id: float = 20
    romanized_penalty: float = 5
    short_romanized_max: float = 10
    short_romanized_divisor: float = 10


class MatchingConfig(BaseModel):
    """Thresholds, token lists and rule tables for duplicate detection."""

    model_config = ConfigDict(frozen=True)

    # ============================================================================
    # TITLE NORMALIZATION
    # ============================================================================

    filler_tokens: tuple[str, ...] = ("tv", "ova", "ona", "movie", "special")
    season_markers: tuple[str, ...] = (
        r"season\s*\d+",
        r"s\d+",
        r"part\s*\d+",
        r"cour\s*\d+",
        r"final\s+season",
    )
    stop_words: frozenset[str] = frozenset(
        {
            "the", "a", "an", "of", "and", "or", "my", "your", "our", "his",
            "her", "their", "on", "in", "no", "wa", "ga", "wo", "ni", "de",
            "to", "kara", "made", "ya", "mo", "sa", "yo", "season", "part",
            "final", "shippuden",
        }
    )

    # ============================================================================
    # ROMANIZATION
    # ============================================================================

    romanized_particles: frozenset[str] = frozenset(
        {
            "no", "wa", "ga", "wo", "ni", "de", "to", "kara", "made", "ya",
            "mo", "sa", "yo", "desu", "sama", "kun", "chan",
        }
    )
    romanized_patterns: tuple[re.Pattern[str], ...] = (
        re.compile(r"\b(boku|ore|watashi|kimi|anata)\b", re.I),
        re.compile(r"-kun\b", re.I),
        re.compile(r"-chan\b", re.I),
        re.compile(r"-sama\b", re.I),
        re.compile(r"shoujo|shonen|senpai|kouhai", re.I),
    )

    season_rules: tuple[SeasonRule, ...] = DEFAULT_SEASON_RULES

    # ============================================================================
    # DUPLICATE DETECTION THRESHOLDS
    # ============================================================================

    title_similarity_threshold: float = Field(default=0.92, ge=0.0, le=1.0)
    romanized_similarity_threshold: float = Field(default=0.86, ge=0.0, le=1.0)
    token_jaccard_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    min_core_tokens: int = Field(default=2, ge=0)
    metadata_title_similarity_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    episode_tolerance: int = Field(default=1, ge=0)
    year_tolerance: int = Field(default=1, ge=0)

    # ============================================================================
    # SCORING & CONSOLIDATION
    # ============================================================================

    score_weights: ScoreWeights = Field(default_factory=ScoreWeights)
    unnumbered_season_sentinel: int = Field(
        default=99, description="Sort index for seasons without a number"
    )

    @cached_property
    def filler_regex(self) -> re.Pattern[str]:
        """Standalone filler tokens (tv, ova, ...) removed during normalization."""
        alternation = "|".join(re.escape(token) for token in self.filler_tokens)
        return re.compile(rf"\b(?:{alternation})\b")

    @cached_property
    def season_marker_regex(self) -> re.Pattern[str]:
        """Season/part markers removed during normalization."""
        return re.compile(rf"\b(?:{'|'.join(self.season_markers)})\b")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "MatchingConfig":
        """Build a config from env-driven settings, keeping default rule tables."""
        return cls(
            title_similarity_threshold=settings.dedup_title_similarity_threshold,
            romanized_similarity_threshold=settings.dedup_romanized_similarity_threshold,
            token_jaccard_threshold=settings.dedup_token_jaccard_threshold,
            metadata_title_similarity_threshold=settings.dedup_metadata_title_similarity_threshold,
            episode_tolerance=settings.dedup_episode_tolerance,
            year_tolerance=settings.dedup_year_tolerance,
        )


DEFAULT_MATCHING_CONFIG = MatchingConfig()
