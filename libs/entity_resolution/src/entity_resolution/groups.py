"""Anchor-based duplicate group discovery over an existing record set."""

import logging
from collections.abc import Callable, Sequence

from common.models.anime import AnimeRecord

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.matching import are_duplicate

logger = logging.getLogger(__name__)

__all__ = ["find_duplicate_groups"]


def find_duplicate_groups(
    records: Sequence[AnimeRecord],
    *,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
    should_continue: Callable[[], bool] | None = None,
) -> list[list[AnimeRecord]]:
    """Find groups of records that duplicate a common anchor.

    O(n²) pairwise scan meant for offline audits. Each unvisited record
    anchors a group and claims every later unvisited record it duplicates.
    Members are only checked against the anchor, so two members of a group
    need not be duplicates of each other.

    Args:
        records: Existing canonical records
        should_continue: Optional cancellation hook checked before each
            anchor; returning False stops the scan early

    Returns:
        Groups with at least two members; each record is in at most one group
    """
    groups: list[list[AnimeRecord]] = []
    visited: set[int] = set()

    for i, anchor in enumerate(records):
        if should_continue is not None and not should_continue():
            logger.info(f"Duplicate scan cancelled after {i} of {len(records)} records")
            break
        if i in visited:
            continue

        group = [anchor]
        for j in range(i + 1, len(records)):
            if j in visited:
                continue
            if are_duplicate(anchor, records[j], config=config):
                group.append(records[j])
                visited.add(j)
        visited.add(i)

        if len(group) > 1:
            groups.append(group)

    return groups
