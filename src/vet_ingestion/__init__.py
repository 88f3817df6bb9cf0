# ============================================================================
# src/vet_ingestion/__init__.py
# ============================================================================
"""
Veterinary record ingestion engine.

Turns free-form case notes into owners, pets and visits:

    from vet_ingestion import parse_document
    parsed = parse_document(text, keep_raw=True)
    parsed.to_dict()
"""

from .core.parser import parse_document
from .core.context import OwnerCandidate, PetRecord, Visit, ParsedDocument

__version__ = "1.0.0"

__all__ = [
    "parse_document",
    "OwnerCandidate",
    "PetRecord",
    "Visit",
    "ParsedDocument",
]
