"""Deduplication engine with its configuration bound at construction."""

import logging
from collections.abc import Callable, Sequence

from common.config.settings import Settings
from common.models.anime import AnimeRecord

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

logger = logging.getLogger(__name__)

__all__ = ["DeduplicationEngine"]


class DeduplicationEngine:
    """Every entity-resolution operation, sharing one immutable MatchingConfig.

    The engine holds no state besides its config, so one instance can be
    shared freely across threads and requests.
    """

    def __init__(self, config: MatchingConfig | None = None) -> None:
        """Initialize the engine.

        Args:
            config: Matching configuration; the defaults when omitted.
        """
        self.config = config or DEFAULT_MATCHING_CONFIG

    @classmethod
    def from_settings(cls, settings: Settings) -> "DeduplicationEngine":
        """Create an engine whose thresholds come from env-driven settings."""
        config = MatchingConfig.from_settings(settings)
        logger.debug(f"Engine configured from {settings.environment.value} settings")
        return cls(config)

    # ============================================================================
    # FEATURE EXTRACTION
    # ============================================================================

    def normalize(self, title: str | None) -> str:
        return normalize_title(title, config=self.config)

    def is_romanized_japanese(self, title: str | None) -> bool:
        return is_romanized_japanese(title, config=self.config)

    def extract_season(self, title: str | None) -> SeasonInfo:
        return extract_season(title, config=self.config)

    def core_tokens(self, title: str | None) -> set[str]:
        return core_tokens(title, config=self.config)

    def string_similarity(self, a: str | None, b: str | None) -> float:
        return string_similarity(a, b, config=self.config)

    def generate_key(self, record: AnimeRecord) -> str:
        return generate_key(record, config=self.config)

    # ============================================================================
    # MATCHING & SELECTION
    # ============================================================================

    def are_duplicate(self, a: AnimeRecord, b: AnimeRecord) -> bool:
        return are_duplicate(a, b, config=self.config)

    def explain_match(self, a: AnimeRecord, b: AnimeRecord) -> MatchResult:
        return explain_match(a, b, config=self.config)

    def score(self, record: AnimeRecord) -> float:
        return score_record(record, config=self.config)

    def select_primary(self, group: Sequence[AnimeRecord]) -> AnimeRecord:
        return select_primary(group, config=self.config)

    def pick_preferred_title(self, record: AnimeRecord) -> str:
        return pick_preferred_title(record, config=self.config)

    # ============================================================================
    # ORCHESTRATION
    # ============================================================================

    def consolidate(self, records: Sequence[AnimeRecord]) -> list[AnimeRecord]:
        return consolidate_seasons(records, config=self.config)

    def deduplicate_batch(self, records: Sequence[AnimeRecord]) -> list[AnimeRecord]:
        return deduplicate_batch(records, config=self.config)

    def find_groups(
        self,
        records: Sequence[AnimeRecord],
        should_continue: Callable[[], bool] | None = None,
    ) -> list[list[AnimeRecord]]:
        return find_duplicate_groups(
            records, config=self.config, should_continue=should_continue
        )

    def plan_group_merge(self, group: Sequence[AnimeRecord]) -> GroupMergePlan:
        return plan_group_merge(group, config=self.config)

    def audit(
        self,
        records: Sequence[AnimeRecord],
        limit_groups: int | None = None,
        dry_run: bool = True,
        should_continue: Callable[[], bool] | None = None,
    ) -> AuditReport:
        return run_audit(
            records,
            limit_groups=limit_groups,
            dry_run=dry_run,
            config=self.config,
            should_continue=should_continue,
        )

    def prepare_for_insert(
        self, records: Sequence[AnimeRecord], lookup: RecordLookup | None = None
    ) -> list[PreparedRecord]:
        return prepare_for_insert(records, lookup, config=self.config)
