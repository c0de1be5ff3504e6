"""Ingestion adapter from loosely typed source payloads to AnimeRecord.

Sources name the same field differently (``mal_id`` in API payloads,
``myAnimeListId`` in stored documents, ``idMal`` from AniList). All synonym
reconciliation happens here so the matching logic only sees AnimeRecord.
"""

import logging
from collections.abc import Mapping
from typing import Any

from common.models.anime import AnimeRecord, ExternalSource, SeasonEntry

from entity_resolution.exceptions import InvalidRecordError

logger = logging.getLogger(__name__)

__all__ = ["external_ids_from_payload", "record_from_payload"]

ID_FIELD_ALIASES: dict[ExternalSource, tuple[str, ...]] = {
    ExternalSource.MAL: ("mal_id", "myAnimeListId", "idMal", "malId"),
    ExternalSource.ANILIST: ("anilist_id", "anilistId"),
    ExternalSource.KITSU: ("kitsu_id", "kitsuId"),
    ExternalSource.ANIDB: ("anidb_id", "anidbId"),
}

SOURCE_NAME_ALIASES: dict[str, ExternalSource] = {
    "mal": ExternalSource.MAL,
    "myanimelist": ExternalSource.MAL,
    "anilist": ExternalSource.ANILIST,
    "al": ExternalSource.ANILIST,
    "kitsu": ExternalSource.KITSU,
    "anidb": ExternalSource.ANIDB,
}

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "_id"),
    "title": ("title",),
    "title_english": ("title_english", "titleEnglish", "english_title"),
    "title_romaji": ("title_romaji", "titleRomaji", "romaji_title"),
    "alternate_titles": ("alternate_titles", "alternateTitles", "synonyms"),
    "episodes": ("episodes",),
    "total_episodes": ("total_episodes", "totalEpisodes"),
    "year": ("year",),
    "type": ("type", "format"),
    "genres": ("genres",),
    "consolidated": ("consolidated",),
}


def _first_present(payload: Mapping[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = payload.get(name)
        if value is not None:
            return value
    return None


def _coerce_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
        return number if number > 0 else None
    return None


def external_ids_from_payload(payload: Mapping[str, Any]) -> dict[ExternalSource, int]:
    """Collect external ids from flat synonym fields and explicit id mappings.

    Flat fields (``mal_id``, ``myAnimeListId``, ...) win over entries of an
    ``external_ids``/``externalIds`` mapping. Unknown sources and ids that are
    not positive integers are dropped.
    """
    external_ids: dict[ExternalSource, int] = {}

    mapping = _first_present(payload, ("external_ids", "externalIds"))
    if isinstance(mapping, Mapping):
        for name, raw_id in mapping.items():
            source = SOURCE_NAME_ALIASES.get(str(name).strip().lower())
            if source is None:
                logger.debug(f"Ignoring unknown external id source '{name}'")
                continue
            external_id = _coerce_id(raw_id)
            if external_id is None:
                logger.debug(f"Ignoring unusable {source.value} id {raw_id!r}")
                continue
            external_ids[source] = external_id

    for source, aliases in ID_FIELD_ALIASES.items():
        raw_id = _first_present(payload, aliases)
        if raw_id is None:
            continue
        external_id = _coerce_id(raw_id)
        if external_id is None:
            logger.debug(f"Ignoring unusable {source.value} id {raw_id!r}")
            continue
        external_ids[source] = external_id

    return external_ids


def _season_from_payload(payload: Mapping[str, Any]) -> SeasonEntry:
    return SeasonEntry(
        season=payload.get("season"),
        label=payload.get("label"),
        episodes=payload.get("episodes"),
        year=payload.get("year"),
        external_ids=external_ids_from_payload(payload),
    )


def record_from_payload(payload: Mapping[str, Any]) -> AnimeRecord:
    """Build an AnimeRecord from a source payload or stored document.

    Args:
        payload: Mapping using any of the known field spellings

    Returns:
        Canonical AnimeRecord

    Raises:
        InvalidRecordError: If the payload is not a mapping or has no non-blank
            title, English title or romaji title.
        pydantic.ValidationError: If a field has an invalid value.
    """
    if not isinstance(payload, Mapping):
        raise InvalidRecordError(
            f"Payload must be a mapping, got {type(payload).__name__}", payload
        )

    fields = {
        field: _first_present(payload, aliases) for field, aliases in FIELD_ALIASES.items()
    }

    title = next(
        (
            value.strip()
            for value in (fields["title"], fields["title_english"], fields["title_romaji"])
            if isinstance(value, str) and value.strip()
        ),
        None,
    )
    if title is None:
        raise InvalidRecordError("Payload has no usable title", payload)
    fields["title"] = title

    if fields["id"] is not None:
        fields["id"] = str(fields["id"])
    for list_field in ("alternate_titles", "genres"):
        values = fields[list_field]
        if isinstance(values, str):
            # Scraped sources send a lone synonym or genre as a bare string
            values = [values]
        if isinstance(values, list | tuple):
            fields[list_field] = [value for value in values if value]

    seasons = payload.get("seasons") or []
    if not isinstance(seasons, list | tuple) or not all(
        isinstance(season, Mapping) for season in seasons
    ):
        raise InvalidRecordError("Payload seasons must be a list of mappings", payload)
    return AnimeRecord(
        **{field: value for field, value in fields.items() if value is not None},
        external_ids=external_ids_from_payload(payload),
        seasons=[_season_from_payload(season) for season in seasons],
    )
