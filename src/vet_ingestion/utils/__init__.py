# ============================================================================
# src/vet_ingestion/utils/__init__.py
# ============================================================================
"""
Utility modules for the ingestion engine.
"""

from .exceptions import (
    VetIngestionError,
    DocumentSourceError,
    DocumentNotFoundError,
    InvalidDocumentNameError,
    DecodingError,
    ConfigurationError,
)

from .logging import (
    setup_logging,
    log_performance,
    JsonFormatter,
)

from .text_normalizer import (
    normalize_date,
    normalize_dob,
    clean,
    collapse_whitespace,
)

from .encoding import decode_to_text

__all__ = [
    # Exceptions
    'VetIngestionError',
    'DocumentSourceError',
    'DocumentNotFoundError',
    'InvalidDocumentNameError',
    'DecodingError',
    'ConfigurationError',
    # Logging
    'setup_logging',
    'log_performance',
    'JsonFormatter',
    # Normalization
    'normalize_date',
    'normalize_dob',
    'clean',
    'collapse_whitespace',
    # Decoding
    'decode_to_text',
]
