"""Romanized-Japanese title detection."""

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig

__all__ = ["is_romanized_japanese"]


def is_romanized_japanese(
    title: str | None, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> bool:
    """Check whether a title reads as romanized Japanese rather than a localized title.

    A title qualifies when any whitespace token is a Japanese particle or
    honorific ("no", "wa", "kun", ...) or when it matches one of the
    pronoun/suffix/register patterns ("boku", "-chan", "senpai", ...). There is
    deliberately no vowel-ratio heuristic, which misfires on short English
    titles.

    Args:
        title: Title to classify

    Returns:
        True if the title looks romanized
    """
    if not title:
        return False

    lowered = title.lower()
    if any(token in config.romanized_particles for token in lowered.split()):
        return True
    return any(pattern.search(lowered) for pattern in config.romanized_patterns)
