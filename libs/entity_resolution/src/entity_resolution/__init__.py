"""Entity resolution and deduplication engine for anime metadata records.

Decides whether two records describe the same anime, which record of a
duplicate group is canonical, how multi-season franchises fold into one
series record, and how an incoming batch merges into a canonical set.
"""

from entity_resolution.adapters import record_from_payload
from entity_resolution.audit import (
    AuditReport,
    GroupMergePlan,
    PreparedRecord,
    RecordLookup,
    plan_group_merge,
    prepare_for_insert,
    run_audit,
)
from entity_resolution.batch import deduplicate_batch
from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.consolidation import consolidate_seasons
from entity_resolution.engine import DeduplicationEngine
from entity_resolution.exceptions import EntityResolutionError, InvalidRecordError
from entity_resolution.groups import find_duplicate_groups
from entity_resolution.keys import generate_key
from entity_resolution.matching import MatchResult, are_duplicate, explain_match
from entity_resolution.scoring import pick_preferred_title, score_record, select_primary
from entity_resolution.similarity import string_similarity
from entity_resolution.text import (
    SeasonInfo,
    core_tokens,
    extract_season,
    is_romanized_japanese,
    normalize_title,
)

__all__ = [
    "DEFAULT_MATCHING_CONFIG",
    "AuditReport",
    "DeduplicationEngine",
    "EntityResolutionError",
    "GroupMergePlan",
    "InvalidRecordError",
    "MatchResult",
    "MatchingConfig",
    "PreparedRecord",
    "RecordLookup",
    "SeasonInfo",
    "are_duplicate",
    "consolidate_seasons",
    "core_tokens",
    "deduplicate_batch",
    "explain_match",
    "extract_season",
    "find_duplicate_groups",
    "generate_key",
    "is_romanized_japanese",
    "normalize_title",
    "pick_preferred_title",
    "plan_group_merge",
    "prepare_for_insert",
    "record_from_payload",
    "run_audit",
    "score_record",
    "select_primary",
    "string_similarity",
]
