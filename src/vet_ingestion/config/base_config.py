# ============================================================================
# src/vet_ingestion/config/base_config.py
# ============================================================================
"""
Base Configuration
- Directory holding the case-note documents
- Output directory for parsed JSON
"""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

from vet_ingestion.utils.exceptions import ConfigurationError


class BaseSettingsConfig(BaseSettings):
    # Case notes, one plain-text file per client
    DATA_DIR: Path = Field(
        default=Path("data"),
        description="Directory containing the case-note documents"
    )

    # Batch script output
    OUTPUT_DIR: Path = Field(
        default=Path("data/parsed"),
        description="Directory receiving one JSON file per parsed document"
    )

    DOCUMENT_SUFFIX: str = Field(
        default=".txt",
        description="File suffix of documents listed and parsed"
    )

    def create_directories(self):
        """Create all necessary directories if they don't exist"""
        for directory in (self.DATA_DIR, self.OUTPUT_DIR):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(f"Cannot create directory {directory}: {e}") from e


# Global instance
base_settings = BaseSettingsConfig()
