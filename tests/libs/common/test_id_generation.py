"""Tests for ID generation utility."""

import time

from common.utils.id_generation import (
    generate_batch_id,
    generate_deterministic_id,
    generate_group_id,
    generate_ulid,
)


def test_generate_ulid_format():
    """Test that generated ULIDs have correct prefix and length."""
    batch_id = generate_ulid("dedup_batch")
    assert batch_id.startswith("dedup_")
    assert len(batch_id) == len("dedup_") + 26  # ULID is 26 chars


def test_generate_batch_id_sorting():
    """Test that batch ids are time-sortable."""
    id1 = generate_batch_id()
    time.sleep(0.002)
    id2 = generate_batch_id()

    assert id1 < id2


def test_generate_deterministic_id_consistency():
    """Test that deterministic IDs remain constant for same input."""
    id1 = generate_deterministic_id("mal:20", "dup_group")
    id2 = generate_deterministic_id("mal:20", "dup_group")

    assert id1 == id2
    assert id1.startswith("grp_")
    assert len(id1) == len("grp_") + 16


def test_generate_deterministic_id_no_prefix():
    """Test deterministic ID generation without prefix."""
    id1 = generate_deterministic_id("test_seed")

    assert len(id1) == 16
    assert "_" not in id1


def test_generate_group_id_depends_on_key():
    """Different group keys give different ids."""
    assert generate_group_id("mal:20") == generate_group_id("mal:20")
    assert generate_group_id("mal:20") != generate_group_id("t:naruto")
