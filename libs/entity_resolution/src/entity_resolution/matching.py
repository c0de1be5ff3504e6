"""Duplicate decision between two anime records.

The decision is an ordered list of named rules evaluated with short-circuit:

1. ``external_id``: a shared source with an equal id. Unambiguous, so it
   overrides any title disagreement.
2. ``title_similarity``: some pair of titles is near-identical, near-identical
   with a romanized side (transliteration variance), or shares most core
   tokens.
3. ``metadata_corroboration``: weaker title agreement backed by matching
   episode count and year or type.

Each rule returns a short detail string when it fires and None otherwise, so
rules can be tested and audited individually.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from common.models.anime import AnimeRecord

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.similarity import jaccard_similarity, string_similarity
from entity_resolution.text.normalization import core_tokens
from entity_resolution.text.romanization import is_romanized_japanese

logger = logging.getLogger(__name__)

__all__ = [
    "DUPLICATE_RULES",
    "MatchResult",
    "are_duplicate",
    "explain_match",
    "match_external_ids",
    "match_metadata",
    "match_titles",
]

DuplicateRule = Callable[[AnimeRecord, AnimeRecord, MatchingConfig], str | None]


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a duplicate decision and the rule that produced it."""

    is_duplicate: bool
    rule: str | None = None
    detail: str | None = None

    def __bool__(self) -> bool:
        return self.is_duplicate


def match_external_ids(
    a: AnimeRecord, b: AnimeRecord, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> str | None:
    """Fire when both records carry the same id under the same source."""
    for source, external_id in a.external_ids.items():
        if b.external_ids.get(source) == external_id:
            return f"{source.value}={external_id}"
    return None


def match_titles(
    a: AnimeRecord, b: AnimeRecord, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> str | None:
    """Fire when any title of ``a`` is close enough to any title of ``b``."""
    b_titles = list(b.title_candidates())
    for a_title in a.title_candidates():
        for b_title in b_titles:
            similarity = string_similarity(a_title, b_title, config=config)
            if similarity >= config.title_similarity_threshold:
                return f"'{a_title}' ~ '{b_title}' similarity={similarity:.3f}"

            if similarity >= config.romanized_similarity_threshold and (
                is_romanized_japanese(a_title, config=config)
                or is_romanized_japanese(b_title, config=config)
            ):
                return f"'{a_title}' ~ '{b_title}' romanized similarity={similarity:.3f}"

            a_tokens = core_tokens(a_title, config=config)
            b_tokens = core_tokens(b_title, config=config)
            jaccard = jaccard_similarity(a_tokens, b_tokens)
            # One-word titles trivially overlap fully; need some substance on one side
            if jaccard >= config.token_jaccard_threshold and (
                len(a_tokens) >= config.min_core_tokens
                or len(b_tokens) >= config.min_core_tokens
            ):
                return f"'{a_title}' ~ '{b_title}' token jaccard={jaccard:.3f}"
    return None


def match_metadata(
    a: AnimeRecord, b: AnimeRecord, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> str | None:
    """Fire when episodes agree, year or type agrees, and primary titles are similar."""
    episodes_a, episodes_b = a.episode_count, b.episode_count
    if episodes_a is None or episodes_b is None:
        return None
    if abs(episodes_a - episodes_b) > config.episode_tolerance:
        return None

    years_close = (
        a.year is not None
        and b.year is not None
        and abs(a.year - b.year) <= config.year_tolerance
    )
    same_type = a.type is not None and a.type == b.type
    if not (years_close or same_type):
        return None

    similarity = string_similarity(a.title, b.title, config=config)
    if similarity < config.metadata_title_similarity_threshold:
        return None
    return (
        f"episodes {episodes_a}/{episodes_b}, "
        f"{'year' if years_close else 'type'} agrees, similarity={similarity:.3f}"
    )


DUPLICATE_RULES: tuple[tuple[str, DuplicateRule], ...] = (
    ("external_id", match_external_ids),
    ("title_similarity", match_titles),
    ("metadata_corroboration", match_metadata),
)


def explain_match(
    a: AnimeRecord, b: AnimeRecord, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> MatchResult:
    """Run the duplicate rules in order and report the first that fires.

    Args:
        a: First record
        b: Second record

    Returns:
        MatchResult naming the rule that matched, or a negative result
    """
    for name, rule in DUPLICATE_RULES:
        detail = rule(a, b, config)
        if detail is not None:
            logger.debug(f"Duplicate via {name}: '{a.title}' / '{b.title}' ({detail})")
            return MatchResult(is_duplicate=True, rule=name, detail=detail)
    return MatchResult(is_duplicate=False)


def are_duplicate(
    a: AnimeRecord, b: AnimeRecord, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> bool:
    """Decide whether two records describe the same anime."""
    return explain_match(a, b, config=config).is_duplicate
