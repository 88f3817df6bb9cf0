# ============================================================================
# src/vet_ingestion/core/parser.py
# ============================================================================
"""
Parse Coordinator

Single entry point of the extraction engine. Owner extraction and pet
segmentation read the same text independently and share no state, so the
same document always yields the same ParsedDocument and documents can be
parsed from several threads at once.
"""

import logging
from typing import Optional

from vet_ingestion.config import ExtractionSettings
from vet_ingestion.core.context import ParsedDocument
from vet_ingestion.extractors.owner_extractor import extract_owners
from vet_ingestion.extractors.pet_segmenter import extract_pets

logger = logging.getLogger(__name__)


def parse_document(
    text: str,
    keep_raw: bool = False,
    settings: Optional[ExtractionSettings] = None,
) -> ParsedDocument:
    """
    Extract owners, pets and visits from one decoded case note.

    Never raises for string input: missing data shows up as empty lists
    and omitted fields.

    Args:
        text: Decoded document text; None is treated as empty
        keep_raw: Echo the input text in ``ParsedDocument.raw``
        settings: Extraction settings; defaults to the global instance

    Returns:
        Freshly built ParsedDocument
    """
    text = text or ""

    owners = extract_owners(text, settings)
    pets = extract_pets(text, settings)

    logger.debug(
        f"Parsed document ({len(text)} chars): {len(owners)} owners, "
        f"{len(pets)} pets, {sum(len(pet.visits) for pet in pets)} visits"
    )
    return ParsedDocument(
        owners=owners,
        pets=pets,
        raw=text if keep_raw else None,
    )
