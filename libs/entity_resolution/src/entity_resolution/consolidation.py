"""Folding multi-season franchises into one consolidated series record."""

import logging
from collections.abc import Sequence

from common.models.anime import AnimeRecord, SeasonEntry

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.keys import best_title, series_key
from entity_resolution.scoring import select_primary
from entity_resolution.text.seasons import SeasonInfo, extract_season

logger = logging.getLogger(__name__)

__all__ = ["build_season_entries", "consolidate_seasons"]


def _member_season(record: AnimeRecord, config: MatchingConfig) -> SeasonInfo:
    """Season info of a group member, taken from the first title that carries a marker.

    A member whose titles carry no marker at all is the franchise's first
    installment ("Attack on Titan" next to "Attack on Titan Season 2").
    """
    info = extract_season(best_title(record), config=config)
    if info.has_marker:
        return info
    for title in (record.title, record.title_romaji):
        if not title:
            continue
        candidate = extract_season(title, config=config)
        if candidate.has_marker:
            return candidate
    return SeasonInfo(base_title=info.base_title, season=1)


def build_season_entries(
    members: Sequence[AnimeRecord], *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> list[SeasonEntry]:
    """One season entry per member, ordered by season index.

    Entries without a season index sort after every numbered one.
    """
    entries = []
    for member in members:
        info = _member_season(member, config)
        entries.append(
            SeasonEntry(
                season=info.season,
                label=info.label,
                episodes=member.episode_count,
                year=member.year,
                external_ids=dict(member.external_ids),
            )
        )
    sentinel = config.unnumbered_season_sentinel
    return sorted(entries, key=lambda entry: entry.season if entry.season is not None else sentinel)


def consolidate_seasons(
    records: Sequence[AnimeRecord], *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> list[AnimeRecord]:
    """Group records by base-series title and fold each multi-member group.

    Args:
        records: Records to consolidate; never mutated

    Returns:
        One record per series in order of first appearance. Singletons are
        copied with ``consolidated`` defaulting to False; larger groups become
        their primary record with ``consolidated=True`` and a seasons list
        holding exactly one entry per member.
    """
    groups: dict[str, list[AnimeRecord]] = {}
    for index, record in enumerate(records):
        # Blank-titled records never group with each other
        key = series_key(record, config=config) or f"untitled:{index}"
        groups.setdefault(key, []).append(record)

    consolidated: list[AnimeRecord] = []
    for key, members in groups.items():
        if len(members) == 1:
            record = members[0]
            consolidated.append(
                record.model_copy(
                    update={"consolidated": bool(record.consolidated)}, deep=True
                )
            )
            continue

        by_year = sorted(members, key=lambda member: member.year or 0)
        primary = select_primary(by_year, config=config)
        seasons = build_season_entries(by_year, config=config)
        logger.debug(
            f"Consolidated {len(members)} records under '{key}' with primary '{primary.title}'"
        )
        consolidated.append(
            primary.model_copy(update={"consolidated": True, "seasons": seasons}, deep=True)
        )

    return consolidated
