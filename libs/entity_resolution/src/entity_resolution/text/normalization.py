"""Title normalization for comparable, exact-match-friendly title forms."""

import re
import unicodedata

from entity_resolution.config import DEFAULT_MATCHING_CONFIG, MatchingConfig

__all__ = ["core_tokens", "normalize_title"]

_FULLWIDTH_SPACE = "\u3000"
# Anything that is not a letter, digit or whitespace (underscore counts as punctuation)
_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WHITESPACE_RE = re.compile(r"\s+")
_DIGITS_RE = re.compile(r"^\d+$")
_SEASON_SHORTHAND_RE = re.compile(r"^s\d+$")


def normalize_title(
    title: str | None, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> str:
    """Canonicalize a free-text title into a comparable form.

    Applies, in order: NFKC, lowercasing, full-width space folding, punctuation
    removal, filler token removal (tv, ova, ...), season/part marker removal,
    whitespace collapsing. Removal is repeated until nothing more matches, so
    the result is a fixed point: normalizing it again returns it unchanged.

    Args:
        title: Raw title, may be None or empty

    Returns:
        Normalized title, or "" for missing input

    Example:
        >>> normalize_title("Naruto: Shippuden (Season 2)!")
        'naruto shippuden'
    """
    if not title:
        return ""

    text = unicodedata.normalize("NFKC", title).lower()
    text = text.replace(_FULLWIDTH_SPACE, " ")
    text = _NON_WORD_RE.sub(" ", text)

    while True:
        stripped = config.filler_regex.sub(" ", text)
        stripped = config.season_marker_regex.sub(" ", stripped)
        if stripped == text:
            break
        text = stripped

    return _WHITESPACE_RE.sub(" ", text).strip()


def core_tokens(
    title: str | None, *, config: MatchingConfig = DEFAULT_MATCHING_CONFIG
) -> set[str]:
    """Content-bearing tokens of a title, for word-order tolerant overlap.

    Drops pure numbers, ``sN`` season shorthand and English/Japanese stop
    words, so "Boku no Hero Academia" and "My Hero Academia" share
    ``{"hero", "academia"}``.
    """
    return {
        token
        for token in normalize_title(title, config=config).split()
        if token not in config.stop_words
        and not _DIGITS_RE.match(token)
        and not _SEASON_SHORTHAND_RE.match(token)
    }
