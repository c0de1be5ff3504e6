"""Title feature extraction: normalization, romanization and season markers."""

from entity_resolution.text.normalization import core_tokens, normalize_title
from entity_resolution.text.romanization import is_romanized_japanese
from entity_resolution.text.seasons import SeasonInfo, extract_season

__all__ = [
    "SeasonInfo",
    "core_tokens",
    "extract_season",
    "is_romanized_japanese",
    "normalize_title",
]
