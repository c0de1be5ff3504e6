"""Record quality scoring, primary selection and display title choice."""

import re
from collections.abc import Sequence

from common.models.anime import AnimeRecord

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.exceptions import InvalidRecordError
from entity_resolution.text.normalization import normalize_title
from entity_resolution.text.romanization import is_romanized_japanese

__all__ = ["pick_preferred_title", "score_record", "select_primary"]

_LATIN_LETTER_RE = re.compile(r"[a-z]", re.I)


def score_record(
    record: AnimeRecord, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> float:
    """Relative quality of a record within a duplicate group (higher is better).

    Only meaningful for ranking records against each other, never as an
    absolute measure.

    Args:
        record: Record to score

    Returns:
        Additive score: official English title, episode count, year, genres
        and external ids add; redundant romanized-only titles subtract.
    """
    weights = config.score_weights
    score = 0.0

    if record.title_english and not is_romanized_japanese(record.title_english, config=config):
        score += weights.english_title
    if record.total_episodes or record.episodes:
        score += weights.episodes
    if record.year:
        score += weights.year
    if record.genres:
        score += weights.genres
    if record.external_ids:
        score += weights.external_id

    title_romanized = is_romanized_japanese(record.title, config=config)
    if title_romanized and (
        not record.title_english or len(record.title_english) > len(record.title)
    ):
        score -= weights.romanized_penalty
    if title_romanized and not record.title_english:
        score += max(
            0.0,
            weights.short_romanized_max - len(record.title) / weights.short_romanized_divisor,
        )

    return score


def select_primary(
    group: Sequence[AnimeRecord], *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> AnimeRecord:
    """Pick the canonical record of a group: highest score, earliest on ties.

    Raises:
        InvalidRecordError: If the group is empty.
    """
    if not group:
        raise InvalidRecordError("Cannot select a primary record from an empty group")

    best = group[0]
    best_score = score_record(best, config=config)
    for record in group[1:]:
        record_score = score_record(record, config=config)
        if record_score > best_score:
            best, best_score = record, record_score
    return best


def pick_preferred_title(
    record: AnimeRecord, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> str:
    """Choose the display title of a record.

    Preference: a non-romanized English title; else the shortest Latin-script
    candidate that is not romanized; else the romanized candidate with the
    shortest normalized form; else the raw primary title. Candidates are the
    primary title, the romaji title and all alternate titles.
    """
    if record.title_english and not is_romanized_japanese(record.title_english, config=config):
        return record.title_english

    candidates = [
        title
        for title in (record.title, record.title_romaji, *record.alternate_titles)
        if title
    ]

    english_like = [
        title
        for title in candidates
        if _LATIN_LETTER_RE.search(title) and not is_romanized_japanese(title, config=config)
    ]
    if english_like:
        return min(english_like, key=len)

    romanized = [title for title in candidates if is_romanized_japanese(title, config=config)]
    if romanized:
        return min(romanized, key=lambda title: len(normalize_title(title, config=config)))

    return record.title
