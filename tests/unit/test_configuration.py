# ============================================================================
# TEST: Configuration and Setup
# ============================================================================

import pytest
from pydantic import ValidationError

from vet_ingestion.config import (
    base_settings,
    extraction_settings,
    logging_settings,
    BaseSettingsConfig,
    ExtractionSettings,
    LoggingSettings,
)


def test_configuration():
    """Test that configuration loads correctly"""
    assert extraction_settings.HEADER_WINDOW_CHARS == 900
    assert extraction_settings.OWNER_WINDOW_BEFORE == 160
    assert extraction_settings.OWNER_WINDOW_AFTER == 180
    assert extraction_settings.ADDRESS_SPAN_CHARS == 180
    assert extraction_settings.ADDRESS_MIN_LENGTH == 8
    assert extraction_settings.ADDRESS_MAX_LENGTH == 120
    assert extraction_settings.BREED_FALLBACK_WORDS == 4

    assert base_settings.DOCUMENT_SUFFIX == ".txt"
    assert logging_settings.LOG_LEVEL == "INFO"


def test_environment_override(monkeypatch):
    """Test settings are read from the environment"""
    monkeypatch.setenv("HEADER_WINDOW_CHARS", "500")
    monkeypatch.setenv("LOG_JSON", "true")

    assert ExtractionSettings().HEADER_WINDOW_CHARS == 500
    assert LoggingSettings().LOG_JSON is True


def test_address_bounds_validator():
    """Test min address length may not exceed the max"""
    with pytest.raises(ValidationError):
        ExtractionSettings(ADDRESS_MIN_LENGTH=50, ADDRESS_MAX_LENGTH=20)


def test_negative_window_rejected():
    """Test window sizes cannot be negative"""
    with pytest.raises(ValidationError):
        ExtractionSettings(OWNER_WINDOW_BEFORE=-1)


def test_create_directories(tmp_path):
    """Test data and output directories are created"""
    settings = BaseSettingsConfig(DATA_DIR=tmp_path / "data", OUTPUT_DIR=tmp_path / "data" / "parsed")
    settings.create_directories()

    assert (tmp_path / "data").is_dir()
    assert (tmp_path / "data" / "parsed").is_dir()
