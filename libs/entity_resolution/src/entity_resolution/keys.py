"""Stable matching keys for batch grouping."""

from common.models.anime import AnimeRecord, ExternalSource

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.exceptions import InvalidRecordError
from entity_resolution.text.seasons import extract_season

__all__ = ["best_title", "generate_key", "series_key"]

# External sources that may stand in for a title key, in preference order
KEY_SOURCES: tuple[tuple[ExternalSource, str], ...] = (
    (ExternalSource.MAL, "mal"),
    (ExternalSource.ANILIST, "al"),
)


def best_title(record: AnimeRecord) -> str:
    """Title used for keys: English, then primary, then romaji."""
    return record.title_english or record.title or record.title_romaji or ""


def generate_key(
    record: AnimeRecord, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> str:
    """Derive the batch-grouping key of a record.

    Two records with the same MAL (or, failing that, AniList) id always share
    a key regardless of their titles; otherwise the season-stripped base title
    is used.

    Args:
        record: Record to key

    Returns:
        ``"mal:<id>"``, ``"al:<id>"`` or ``"t:<base title>"``

    Raises:
        InvalidRecordError: If the record has neither a keyed external id nor a
            title that survives normalization.
    """
    for source, prefix in KEY_SOURCES:
        external_id = record.external_ids.get(source)
        if external_id:
            return f"{prefix}:{external_id}"

    base_title = extract_season(best_title(record), config=config).base_title
    if not base_title:
        raise InvalidRecordError(
            "Record has no MAL/AniList id and no usable title to key on", record
        )
    return f"t:{base_title}"


def series_key(
    record: AnimeRecord, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> str | None:
    """Franchise grouping key ``"series:<base title>"``, None for blank titles."""
    base_title = extract_season(best_title(record), config=config).base_title
    if not base_title:
        return None
    return f"series:{base_title}"
