# ============================================================================
# src/vet_ingestion/config/extraction_config.py
# ============================================================================
"""
Extraction Window Settings
- Header region size for owner detection
- Owner token windows
- Address span and length bounds
- Breed fallback width
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class ExtractionSettings(BaseSettings):
    HEADER_WINDOW_CHARS: int = Field(
        default=900,
        ge=0,
        description="Leading characters scanned for owner identity tokens"
    )
    OWNER_WINDOW_BEFORE: int = Field(
        default=160,
        ge=0,
        description="Characters before an identity token searched for name/address"
    )
    OWNER_WINDOW_AFTER: int = Field(
        default=180,
        ge=0,
        description="Characters after an identity token searched for name/address"
    )
    ADDRESS_SPAN_CHARS: int = Field(
        default=180,
        ge=1,
        description="Maximum characters read after a street keyword"
    )
    ADDRESS_MIN_LENGTH: int = Field(
        default=8,
        ge=1,
        description="Shortest accepted address candidate"
    )
    ADDRESS_MAX_LENGTH: int = Field(
        default=120,
        ge=1,
        description="Longest accepted address candidate"
    )
    BREED_FALLBACK_WORDS: int = Field(
        default=4,
        ge=1,
        description="Words of the pre-date header used as breed when no name is found"
    )

    @model_validator(mode="after")
    def check_address_bounds(self):
        if self.ADDRESS_MIN_LENGTH > self.ADDRESS_MAX_LENGTH:
            raise ValueError("ADDRESS_MIN_LENGTH must not exceed ADDRESS_MAX_LENGTH")
        return self


extraction_settings = ExtractionSettings()
