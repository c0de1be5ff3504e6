"""Audit passes and pre-insert preparation built on the matching engine.

Nothing here writes to storage. Audit reports carry merge plans that a caller
applies (or not, on a dry run); insert preparation consults a caller supplied
lookup to skip records the store already holds.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Protocol

from common.models.anime import AnimeRecord, ExternalSource, SeasonEntry
from common.utils.id_generation import generate_batch_id, generate_group_id
from pydantic import BaseModel, Field

from entity_resolution.batch import deduplicate_batch
from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.consolidation import build_season_entries
from entity_resolution.exceptions import InvalidRecordError
from entity_resolution.groups import find_duplicate_groups
from entity_resolution.keys import generate_key, series_key
from entity_resolution.scoring import pick_preferred_title, select_primary

logger = logging.getLogger(__name__)

__all__ = [
    "AuditReport",
    "GroupMergePlan",
    "PreparedRecord",
    "RecordLookup",
    "plan_group_merge",
    "prepare_for_insert",
    "run_audit",
]


class RecordLookup(Protocol):
    """Minimal store capability: find an existing record by external id or title."""

    def find_by_external_ids(
        self, external_ids: Mapping[ExternalSource, int], title: str
    ) -> str | None:
        """Return the store id of a matching record, or None."""
        ...


class GroupMergePlan(BaseModel):
    """How one duplicate group should be collapsed into its primary record."""

    group_id: str = Field(..., description="Deterministic id derived from the group key")
    group_key: str = Field(..., description="Matching key of the group's anchor record")
    series_key: str | None = Field(None, description="Series key of the primary record")
    primary: AnimeRecord = Field(..., description="Record that survives the merge")
    duplicates: list[AnimeRecord] = Field(
        default_factory=list, description="Records folded into the primary, input order"
    )
    seasons: list[SeasonEntry] = Field(
        default_factory=list, description="Seasons list the primary should carry"
    )
    size: int = Field(..., ge=1, description="Number of records in the group")


class AuditReport(BaseModel):
    """Result of an audit pass over an existing record set."""

    batch_id: str = Field(..., description="Time-sortable id of this audit run")
    groups_examined: int = Field(..., ge=0, description="Duplicate groups found")
    groups_processed: int = Field(..., ge=0, description="Groups planned after limiting")
    changes_applied: bool = Field(
        ..., description="False on dry runs; tells the caller whether to apply the plans"
    )
    plans: list[GroupMergePlan] = Field(default_factory=list)


class PreparedRecord(BaseModel):
    """A deduplicated record ready for insertion, or a pointer to its stored twin."""

    record: AnimeRecord
    series_key: str | None = None
    existing_id: str | None = None
    found_in_store: bool = False


def _group_key(anchor: AnimeRecord, config: MatchingConfig) -> str:
    try:
        return generate_key(anchor, config=config)
    except InvalidRecordError:
        # Grouped purely through a non-keyed source (e.g. Kitsu); key on those ids
        fallback = ",".join(
            f"{source.value}:{external_id}"
            for source, external_id in sorted(anchor.external_ids.items())
        )
        logger.warning(f"Anchor '{anchor.title}' is not keyable, using ids '{fallback}'")
        return f"ids:{fallback}"


def plan_group_merge(
    group: Sequence[AnimeRecord], *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> GroupMergePlan:
    """Plan the merge of a duplicate group into its primary record.

    Args:
        group: Group as returned by ``find_duplicate_groups`` (anchor first)

    Returns:
        GroupMergePlan with the primary, the duplicates and the combined
        seasons list

    Raises:
        InvalidRecordError: If the group is empty.
    """
    if not group:
        raise InvalidRecordError("Cannot plan a merge for an empty group")

    group_key = _group_key(group[0], config)
    primary = select_primary(group, config=config)
    by_year = sorted(group, key=lambda member: member.year or 0)

    return GroupMergePlan(
        group_id=generate_group_id(group_key),
        group_key=group_key,
        series_key=series_key(primary, config=config),
        primary=primary,
        duplicates=[member for member in group if member is not primary],
        seasons=build_season_entries(by_year, config=config),
        size=len(group),
    )


def run_audit(
    records: Sequence[AnimeRecord],
    *,
    limit_groups: int | None = None,
    dry_run: bool = True,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
    should_continue: Callable[[], bool] | None = None,
) -> AuditReport:
    """Find duplicate groups in an existing set and plan their merges.

    Args:
        records: Existing canonical records
        limit_groups: Plan at most this many groups (None plans all)
        dry_run: Mark the report as not to be applied
        should_continue: Cancellation hook forwarded to the group finder

    Returns:
        AuditReport with one plan per processed group
    """
    if limit_groups is not None and limit_groups < 0:
        raise ValueError("limit_groups must be non-negative")

    batch_id = generate_batch_id()
    groups = find_duplicate_groups(records, config=config, should_continue=should_continue)
    selected = groups if limit_groups is None else groups[:limit_groups]

    plans = []
    for group in selected:
        logger.info(f"[{batch_id}] Group found: {' | '.join(r.title for r in group)}")
        plans.append(plan_group_merge(group, config=config))

    logger.info(
        f"[{batch_id}] Audit examined {len(groups)} groups, planned {len(plans)} "
        f"({'dry run' if dry_run else 'to apply'})"
    )
    return AuditReport(
        batch_id=batch_id,
        groups_examined=len(groups),
        groups_processed=len(plans),
        changes_applied=not dry_run,
        plans=plans,
    )


def prepare_for_insert(
    records: Sequence[AnimeRecord],
    lookup: RecordLookup | None = None,
    *,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[PreparedRecord]:
    """Deduplicate an incoming batch and cross-check it against the store.

    Records the lookup already knows are returned unchanged with their store
    id. The rest get their preferred display title, ``consolidated`` set when
    they carry seasons, and their series key.

    Args:
        records: Incoming batch
        lookup: Optional store lookup; without it nothing is treated as stored

    Returns:
        One PreparedRecord per deduplicated record
    """
    prepared = []
    for record in deduplicate_batch(records, config=config):
        display_title = pick_preferred_title(record, config=config)

        existing_id = None
        if lookup is not None:
            existing_id = lookup.find_by_external_ids(record.external_ids, display_title)
        if existing_id is not None:
            logger.debug(f"'{record.title}' already stored as {existing_id}")
            prepared.append(
                PreparedRecord(
                    record=record,
                    series_key=series_key(record, config=config),
                    existing_id=existing_id,
                    found_in_store=True,
                )
            )
            continue

        alternates = [title for title in record.alternate_titles if title != display_title]
        if display_title != record.title and record.title not in alternates:
            alternates.append(record.title)
        ready = record.model_copy(
            update={
                "title": display_title,
                "alternate_titles": alternates,
                "consolidated": bool(record.seasons) or bool(record.consolidated),
            }
        )
        prepared.append(PreparedRecord(record=ready, series_key=series_key(ready, config=config)))

    return prepared
