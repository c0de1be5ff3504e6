"""String and token similarity between anime titles.

Edit-distance similarity uses the exact unit-cost Levenshtein distance from
rapidfuzz over normalized titles. Token Jaccard over core tokens is the
secondary signal that tolerates word order and translation differences.
"""

from rapidfuzz.distance import Levenshtein

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.text.normalization import core_tokens, normalize_title

__all__ = ["jaccard_similarity", "string_similarity", "token_jaccard"]


def string_similarity(
    a: str | None, b: str | None, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> float:
    """Normalized edit-distance similarity in [0, 1].

    Blank titles never match: if either side normalizes to "" the result is
    0.0, including when both do.

    Args:
        a: First title
        b: Second title

    Returns:
        ``1 - distance / max(len(a), len(b))`` over the normalized titles
    """
    s1 = normalize_title(a, config=config)
    s2 = normalize_title(b, config=config)
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    distance = Levenshtein.distance(s1, s2)
    return 1.0 - distance / max(len(s1), len(s2))


def jaccard_similarity(a: set[str], b: set[str]) -> float:
    """``|a ∩ b| / |a ∪ b|``, 0.0 when both sets are empty."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def token_jaccard(
    a: str | None, b: str | None, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> float:
    """Jaccard similarity of the core tokens of two titles."""
    return jaccard_similarity(core_tokens(a, config=config), core_tokens(b, config=config))
