#!/usr/bin/env python3
"""
Anime Duplicate Audit Script

Runs the entity resolution engine over a JSON file of anime records:
1. audit   - find duplicate groups in an existing set and plan their merges
2. dedupe  - merge an incoming batch and consolidate multi-season series
3. prepare - dedupe, then pick display titles and series keys for insertion

Input is a JSON list of record payloads in any supported field spelling
(mal_id / myAnimeListId, title_english / titleEnglish, ...).

Usage:
    python audit_duplicates.py anime.json
    python audit_duplicates.py anime.json --limit-groups 20 --apply
    python audit_duplicates.py batch.json --mode dedupe --output deduped.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from common.config.settings import get_settings
from entity_resolution import DeduplicationEngine, InvalidRecordError, record_from_payload
from pydantic import ValidationError

logger = logging.getLogger(__name__)


def load_records(path: Path) -> list[Any]:
    """Load record payloads from a JSON file, skipping unusable entries."""
    with open(path, encoding="utf-8") as f:
        payloads = json.load(f)

    if not isinstance(payloads, list):
        raise ValueError(f"Expected a JSON list of records in {path}")

    records = []
    for index, payload in enumerate(payloads):
        try:
            records.append(record_from_payload(payload))
        except (InvalidRecordError, ValidationError) as e:
            logger.warning(f"Skipping record #{index}: {e}")
    logger.info(f"Loaded {len(records)} of {len(payloads)} records from {path}")
    return records


def run(args: argparse.Namespace) -> Any:
    """Execute the selected mode and return a JSON-serializable result."""
    engine = DeduplicationEngine.from_settings(get_settings())
    records = load_records(args.input)

    if args.mode == "audit":
        report = engine.audit(records, limit_groups=args.limit_groups, dry_run=not args.apply)
        return report.model_dump(mode="json")
    if args.mode == "dedupe":
        return [record.model_dump(mode="json") for record in engine.deduplicate_batch(records)]
    return [prepared.model_dump(mode="json") for prepared in engine.prepare_for_insert(records)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Audit or deduplicate anime metadata records")
    parser.add_argument("input", type=Path, help="JSON file containing a list of records")
    parser.add_argument(
        "--mode",
        choices=["audit", "dedupe", "prepare"],
        default="audit",
        help="Operation to run (default: audit)",
    )
    parser.add_argument(
        "--limit-groups", type=int, default=None, help="Plan at most N duplicate groups"
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Mark the audit report as to be applied (default is a dry run)",
    )
    parser.add_argument(
        "--output", type=Path, default=None, help="Write JSON here instead of stdout"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level), format=settings.log_format
    )

    try:
        result = run(args)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to process {args.input}: {e}", exc_info=settings.debug)
        return 1

    output = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote results to {args.output}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
