"""Merging a freshly ingested batch of records."""

import logging
from collections.abc import Sequence

from common.models.anime import AnimeRecord

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.consolidation import consolidate_seasons
from entity_resolution.keys import generate_key
from entity_resolution.scoring import score_record

logger = logging.getLogger(__name__)

__all__ = ["deduplicate_batch", "merge_alternate_titles"]


def merge_alternate_titles(kept: AnimeRecord, other: AnimeRecord) -> list[str]:
    """Union of both records' alternate titles plus ``other``'s title fields.

    Titles exactly equal (case-sensitive) to one of ``kept``'s own title
    fields are left out, as are repeats. First-seen order is preserved.
    """
    own_titles = {kept.title, kept.title_english, kept.title_romaji}
    merged: list[str] = []
    seen: set[str] = set()
    for title in (
        *kept.alternate_titles,
        *other.alternate_titles,
        other.title,
        other.title_english,
        other.title_romaji,
    ):
        if not title or title in own_titles or title in seen:
            continue
        merged.append(title)
        seen.add(title)
    return merged


def deduplicate_batch(
    records: Sequence[AnimeRecord], *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> list[AnimeRecord]:
    """Merge key-colliding records of a batch, then consolidate seasons.

    Records are keyed by ``generate_key``. On a collision the higher scoring
    record is kept (the newer one on a tie) and absorbs the other's titles as
    alternates. Records with different external ids but similar titles are
    not merged here; run ``find_duplicate_groups`` over the output for that.
    Title keys are season-stripped, so season records without a MAL/AniList
    id merge into one another here instead of becoming consolidated seasons.

    Args:
        records: Incoming batch; never mutated

    Returns:
        Deduplicated, season-consolidated records

    Raises:
        InvalidRecordError: If a record has neither a keyed external id nor a
            usable title.
    """
    by_key: dict[str, AnimeRecord] = {}
    for record in records:
        key = generate_key(record, config=config)
        existing = by_key.get(key)
        if existing is None:
            by_key[key] = record
            continue

        if score_record(record, config=config) >= score_record(existing, config=config):
            kept, other = record, existing
        else:
            kept, other = existing, record
        logger.debug(f"Merging '{other.title}' into '{kept.title}' under key '{key}'")
        by_key[key] = kept.model_copy(
            update={"alternate_titles": merge_alternate_titles(kept, other)}, deep=True
        )

    result = consolidate_seasons(list(by_key.values()), config=config)
    logger.info(
        f"Deduplicated batch of {len(records)} records into {len(result)} "
        f"({len(by_key)} unique keys)"
    )
    return result
