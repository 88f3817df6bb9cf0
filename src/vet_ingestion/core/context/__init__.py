# src/vet_ingestion/core/context/__init__.py

from .enums import OwnerRole, Species, TokenKind, VisitState, LineClass
from .records import OwnerCandidate, PetRecord, Visit, ParsedDocument

__all__ = [
    "OwnerRole",
    "Species",
    "TokenKind",
    "VisitState",
    "LineClass",
    "OwnerCandidate",
    "PetRecord",
    "Visit",
    "ParsedDocument",
]
