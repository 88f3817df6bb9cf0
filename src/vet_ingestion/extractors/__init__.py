# ============================================================================
# src/vet_ingestion/extractors/__init__.py
# ============================================================================
"""
Rule-based extractors for free-form veterinary case notes.
"""

from .owner_extractor import extract_owners, merge_candidates
from .pet_segmenter import extract_pets, parse_pet_header, split_pet_blocks, PetHeader
from .visit_segmenter import extract_visits, classify_line, VisitStateMachine

__all__ = [
    "extract_owners",
    "merge_candidates",
    "extract_pets",
    "parse_pet_header",
    "split_pet_blocks",
    "PetHeader",
    "extract_visits",
    "classify_line",
    "VisitStateMachine",
]
