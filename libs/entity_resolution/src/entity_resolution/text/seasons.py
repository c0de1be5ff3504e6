"""Season/part marker extraction."""

import logging
from dataclasses import dataclass

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from entity_resolution.text.normalization import normalize_title

logger = logging.getLogger(__name__)

__all__ = ["SeasonInfo", "extract_season"]


@dataclass(frozen=True)
class SeasonInfo:
    """Base-series title plus the season information stripped from it."""

    base_title: str
    season: int | None = None
    label: str | None = None

    @property
    def has_marker(self) -> bool:
        return self.season is not None or self.label is not None


def extract_season(
    title: str | None, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> SeasonInfo:
    """Split a title into its base-series title and season index/label.

    Rules run in table order; each strips its first match before the next
    rule sees the text. A title with several markers ("Season 3 Part 2") is
    therefore resolved left-to-right through the table, not by specificity.

    Args:
        title: Raw title

    Returns:
        SeasonInfo with the normalized base title

    Example:
        >>> extract_season("Attack on Titan Season 3")
        SeasonInfo(base_title='attack on titan', season=3, label=None)
    """
    residual = title or ""
    season: int | None = None
    label: str | None = None

    for rule in config.season_rules:
        match = rule.pattern.search(residual)
        if not match:
            continue

        number = match.group(1) if rule.pattern.groups else None
        if rule.sets_season and number is not None:
            season = int(number)
        if rule.label is not None:
            label = rule.label.format(number=number)
        if rule.default_season is not None and season is None:
            season = rule.default_season

        logger.debug(f"Season rule '{rule.name}' matched '{match.group(0)}' in '{title}'")
        residual = rule.pattern.sub(" ", residual, count=1)

    return SeasonInfo(
        base_title=normalize_title(residual, config=config), season=season, label=label
    )
