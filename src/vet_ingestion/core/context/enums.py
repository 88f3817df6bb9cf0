# ============================================================================
# src/vet_ingestion/core/context/enums.py
# ============================================================================
"""
Extraction Enums
- Owner roles
- Species labels
- Token kinds produced by the tokenizer
- Visit segmenter states and line classes
"""

from enum import Enum


class OwnerRole(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


class Species(str, Enum):
    CAT = "Gatto"
    DOG = "Cane"


class TokenKind(str, Enum):
    # Listed in tie-break order: earlier members win when two tokens start
    # at the same offset
    TAX_CODE = "tax_code"
    EMAIL = "email"
    PHONE = "phone"
    MICROCHIP = "microchip"
    DATE = "date"
    SPECIES_CODE = "species_code"
    STREET = "street"
    STERILIZATION = "sterilization"
    SEX = "sex"
    COLOR = "color"


class VisitState(str, Enum):
    NO_CURRENT_VISIT = "no_current_visit"
    IN_DESCRIPTION = "in_description"
    IN_EXAM = "in_exam"


class LineClass(str, Enum):
    BLANK = "blank"
    DATE = "date"
    PRESCRIPTION = "prescription"
    EXAM = "exam"
    TEXT = "text"
