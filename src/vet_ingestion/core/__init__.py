# ============================================================================
# src/vet_ingestion/core/__init__.py
# ============================================================================
"""
Core components for the ingestion engine.
"""

from .context import (
    OwnerCandidate,
    OwnerRole,
    PetRecord,
    Visit,
    ParsedDocument,
)
from .tokenizer import Token, tokenize
