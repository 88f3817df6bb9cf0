# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from vet_ingestion.core.document_source import DocumentSource


@pytest.fixture
def sample_note():
    """One owner, one cat, one visit with exams and a prescription"""
    return "\n".join([
        "Mario Rossi RSSMRA80A01H501U",
        "Via Roma 12, 20100 Milano 3331234567",
        "mario.rossi@example.com",
        "",
        "GT EUROPEO M 12/04/2015 Micio sterilizzato",
        "microchip 380260000123456",
        "05/03/2024 visita di controllo",
        "buone condizioni generali",
        "PROFILO BASE completo",
        "R/ Metacam 0.5 ml",
    ])


@pytest.fixture
def two_owner_note():
    """Two unrelated owners typed far apart in the header"""
    return "\n".join([
        "Mario Rossi RSSMRA80A01H501U 3331234567",
        "nota " * 80,
        "Laura Bianchi laura.b@example.it 3409876543",
        "",
        "CN Labrador F Luna (la piccola) 03/2018 intero",
        "10/01/2024 vaccino",
    ])


@pytest.fixture
def transfer_note():
    """Header with an ownership transfer to a person with no contacts"""
    return "\n".join([
        "Mario Rossi RSSMRA80A01H501U 3331234567",
        "nota " * 60,
        "da 03/2019 ceduto a Laura Bianchi",
        "",
        "GT Persiano F 2016 Neve",
    ])


@pytest.fixture
def data_dir(tmp_path, sample_note):
    """Data directory holding a couple of case notes"""
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "rossi.txt").write_text(sample_note, encoding="utf-8")
    (directory / "bianchi.txt").write_bytes("Città di Milano\nGT Europeo F 2016 Neve".encode("cp1252"))
    (directory / "notes.md").write_text("not a case note", encoding="utf-8")
    return directory


@pytest.fixture
def document_source(data_dir):
    """Document source over the temporary data directory"""
    return DocumentSource(data_dir=data_dir)
