# ============================================================================
# FILE: tests/unit/test_document_source.py
# ============================================================================
"""
Unit tests for document listing, lookup and parsing
"""

import pytest

from vet_ingestion.core.document_source import DocumentSource
from vet_ingestion.utils.exceptions import DocumentNotFoundError, InvalidDocumentNameError


def test_list_documents(document_source, data_dir):
    """Test only case-note files are listed, sorted by name"""
    documents = document_source.list_documents()

    assert [doc["name"] for doc in documents] == ["bianchi.txt", "rossi.txt"]
    assert documents[1]["size"] == (data_dir / "rossi.txt").stat().st_size


def test_list_missing_directory(tmp_path):
    """Test a missing data directory lists nothing"""
    assert DocumentSource(data_dir=tmp_path / "missing").list_documents() == []


@pytest.mark.parametrize("name", ["", "  ", "../rossi.txt", "sub/rossi.txt", "..\\rossi.txt", "..", "."])
def test_resolve_rejects_bad_names(document_source, name):
    """Test names that could leave the data directory are rejected"""
    with pytest.raises(InvalidDocumentNameError):
        document_source.resolve(name)


def test_resolve_missing_document(document_source):
    """Test unknown documents raise DocumentNotFoundError"""
    with pytest.raises(DocumentNotFoundError) as exc_info:
        document_source.resolve("verdi.txt")
    assert exc_info.value.name == "verdi.txt"


def test_parse_document(document_source, sample_note):
    """Test a stored note is decoded and parsed"""
    parsed, text = document_source.parse("rossi.txt")

    assert text == sample_note
    assert parsed.raw == sample_note
    assert parsed.owners[0].full_name == "Mario Rossi"
    assert parsed.pets[0].name == "Micio"


def test_parse_legacy_encoded_document(document_source):
    """Test a cp1252 note still parses"""
    parsed, text = document_source.parse("bianchi.txt", keep_raw=False)

    assert parsed.raw is None
    assert len(parsed.pets) == 1
    assert parsed.pets[0].dob == "2016-01-01"
