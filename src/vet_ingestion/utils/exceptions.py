# ============================================================================
# src/vet_ingestion/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the veterinary record ingestion engine.

The extraction path itself never raises; these cover the layers around it
(document lookup, decoding, configuration).
"""


class VetIngestionError(Exception):
    """Base exception for all ingestion errors."""
    pass


class DocumentSourceError(VetIngestionError):
    """Error locating or reading a case-note document."""
    pass


class DocumentNotFoundError(DocumentSourceError):
    """Requested document does not exist."""
    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class InvalidDocumentNameError(DocumentSourceError):
    """Document name is empty or escapes the data directory."""
    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class DecodingError(VetIngestionError):
    """Input could not be handed to the decoder."""
    pass


class ConfigurationError(VetIngestionError):
    """Invalid configuration."""
    pass
