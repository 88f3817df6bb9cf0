# ============================================================================
# FILE: tests/unit/test_encoding.py
# ============================================================================
"""
Unit tests for byte-to-text decoding
"""

import pytest

from vet_ingestion.utils import encoding
from vet_ingestion.utils.encoding import decode_to_text, normalize_encoding_label
from vet_ingestion.utils.exceptions import DecodingError


def test_decode_utf8():
    """Test clean UTF-8 is returned as is"""
    assert decode_to_text("Città di Milano".encode("utf-8")) == "Città di Milano"


def test_decode_strips_bom():
    """Test a UTF-8 byte order mark is dropped"""
    data = b"\xef\xbb\xbf" + "Perché".encode("utf-8")
    assert decode_to_text(data) == "Perché"


def test_decode_empty():
    """Test empty input decodes to empty text"""
    assert decode_to_text(b"") == ""


def test_decode_rejects_text():
    """Test non-bytes input raises"""
    with pytest.raises(DecodingError):
        decode_to_text("già testo")


def test_decode_falls_back_to_cp1252(monkeypatch):
    """Test Windows-encoded notes decode when detection gives nothing"""
    monkeypatch.setattr(encoding, "detect_encoding", lambda data: None)

    assert decode_to_text("Città – più".encode("cp1252")) == "Città – più"


def test_decode_uses_detected_encoding(monkeypatch):
    """Test the detector's guess is used when UTF-8 is lossy"""
    monkeypatch.setattr(encoding, "detect_encoding", lambda data: "iso8859_15")

    assert decode_to_text("perché".encode("latin-1")) == "perché"


def test_decode_legacy_text_has_no_replacement_chars():
    """Test detection end to end on a longer Windows-encoded note"""
    text = "Il gatto è stato visitato in città più volte, perché tossisce. " * 10
    decoded = decode_to_text(text.encode("cp1252"))

    assert isinstance(decoded, str)
    assert "\ufffd" not in decoded
    assert "gatto" in decoded


@pytest.mark.parametrize("label,expected", [
    (None, "utf-8"),
    ("ascii", "utf-8"),
    ("utf_8", "utf-8"),
    ("UTF-8", "utf-8"),
    ("iso8859_15", "latin-1"),
    ("ISO-8859-1", "latin-1"),
    ("latin_1", "latin-1"),
    ("windows-1252", "cp1252"),
    ("cp1252", "cp1252"),
    ("cp1250", "cp1250"),
])
def test_normalize_encoding_label(label, expected):
    """Test detector labels map onto decoding codecs"""
    assert normalize_encoding_label(label) == expected
