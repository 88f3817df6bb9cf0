# ============================================================================
# src/vet_ingestion/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from . import patterns
from .patterns import (
    DATE_LINE,
    DATE_ANY,
    DATE_LOOSE,
    PHONE,
    EMAIL,
    TAX_CODE,
    MICROCHIP,
    SPECIES_PREFIX,
    STERILIZATION,
    COLOR,
    EXAM_TRIGGER,
    PRESCRIPTION_TRIGGER,
    TRANSFER,
)
