"""Identity generation utilities using ULID and deterministic hashing.

This module provides standard functions for generating:
1. Unique Lexicographically Sortable Identifiers (ULID) for deduplication runs.
2. Deterministic SHA-256 IDs for duplicate groups based on their matching key.
"""

import hashlib
from typing import Literal

from ulid import ULID

EntityType = Literal["dedup_batch", "dup_group"]

ENTITY_PREFIXES: dict[EntityType, str] = {
    "dedup_batch": "dedup_",
    "dup_group": "grp_",
}


def generate_ulid(entity_type: EntityType) -> str:
    """Generate a new random, time-sortable ULID with entity prefix.

    Args:
        entity_type: The type of entity (e.g. 'dedup_batch')

    Returns:
        Prefixed ULID string (e.g., 'dedup_01ARZ3NDEKTSV4RRFFQ69G5FAV')
    """
    prefix = ENTITY_PREFIXES.get(entity_type, f"{entity_type}_")
    return f"{prefix}{ULID()}"


def generate_deterministic_id(seed: str, entity_type: EntityType | None = None) -> str:
    """Generate a deterministic ID based on a unique seed string.

    Args:
        seed: Unique string content to hash (e.g. "mal:20")
        entity_type: Optional prefix to add to the hash

    Returns:
        Prefixed short hash (16 chars)
    """
    hash_object = hashlib.sha256(seed.encode("utf-8"))
    # 64 bits of the digest
    short_hash = hash_object.hexdigest()[:16]

    if entity_type:
        prefix = ENTITY_PREFIXES.get(entity_type, f"{entity_type}_")
        return f"{prefix}{short_hash}"

    return short_hash


def generate_batch_id() -> str:
    """Generate a time-sortable id for one deduplication run."""
    return generate_ulid("dedup_batch")


def generate_group_id(group_key: str) -> str:
    """Generate a stable id for a duplicate group from its anchor's matching key.

    Args:
        group_key: Matching key of the group's anchor record (e.g. 'mal:20').

    Returns:
        Deterministic ID string (e.g. 'grp_1a2b3c4d5e6f7a8b')
    """
    return generate_deterministic_id(group_key, "dup_group")
