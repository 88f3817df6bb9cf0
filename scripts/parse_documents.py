#!/usr/bin/env python3
"""
Batch Case-Note Parser

Decodes and parses every case note of a data directory and writes one
JSON file per document, ready for import by the records database.

Usage:
    python scripts/parse_documents.py
    python scripts/parse_documents.py --data-dir data --output-dir data/parsed
    python scripts/parse_documents.py --keep-raw --log-level DEBUG
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vet_ingestion.config import base_settings, logging_settings, BaseSettingsConfig
from vet_ingestion.core.document_source import DocumentSource
from vet_ingestion.utils.exceptions import ConfigurationError, DocumentSourceError
from vet_ingestion.utils.logging import setup_logging

logger = logging.getLogger("parse_documents")


def parse_all(source: DocumentSource, output_dir: Path, keep_raw: bool = False) -> Dict[str, int]:
    """
    Parse every document of ``source`` into the existing ``output_dir``.

    Returns:
        Totals: documents, failed, owners, pets, visits
    """
    totals = {"documents": 0, "failed": 0, "owners": 0, "pets": 0, "visits": 0}

    for info in source.list_documents():
        name = info["name"]
        try:
            parsed, _ = source.parse(name, keep_raw=keep_raw)
        except DocumentSourceError as e:
            logger.error(f"Skipping {name}: {e}")
            totals["failed"] += 1
            continue

        target = output_dir / f"{Path(name).stem}.json"
        with open(target, "w", encoding="utf-8") as f:
            json.dump(parsed.to_dict(), f, ensure_ascii=False, indent=2)

        totals["documents"] += 1
        totals["owners"] += len(parsed.owners)
        totals["pets"] += len(parsed.pets)
        totals["visits"] += sum(len(pet.visits) for pet in parsed.pets)
        logger.info(f"{name}: {len(parsed.owners)} owners, {len(parsed.pets)} pets -> {target.name}")

    return totals


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Parse veterinary case notes into JSON")
    parser.add_argument("--data-dir", type=Path, default=base_settings.DATA_DIR,
                        help="Directory containing the case notes")
    parser.add_argument("--output-dir", type=Path, default=base_settings.OUTPUT_DIR,
                        help="Directory receiving the JSON files")
    parser.add_argument("--keep-raw", action="store_true",
                        help="Include the decoded text in each JSON file")
    parser.add_argument("--log-level", default=logging_settings.LOG_LEVEL,
                        help="Logging level")
    parser.add_argument("--json-logs", action="store_true", default=logging_settings.LOG_JSON,
                        help="Emit logs as JSON lines")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=logging_settings.LOG_FILE, format_json=args.json_logs)

    settings = BaseSettingsConfig(DATA_DIR=args.data_dir, OUTPUT_DIR=args.output_dir)
    try:
        settings.create_directories()
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    source = DocumentSource(data_dir=settings.DATA_DIR, suffix=settings.DOCUMENT_SUFFIX)
    totals = parse_all(source, settings.OUTPUT_DIR, keep_raw=args.keep_raw)

    logger.info(
        f"Done: {totals['documents']} documents ({totals['failed']} failed), "
        f"{totals['owners']} owners, {totals['pets']} pets, {totals['visits']} visits"
    )
    return 1 if totals["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
