# ============================================================================
# FILE: tests/unit/test_text_normalizer.py
# ============================================================================
"""
Unit tests for date and whitespace normalization
"""

import pytest

from vet_ingestion.utils.text_normalizer import (
    clean,
    collapse_whitespace,
    normalize_date,
    normalize_dob,
)


@pytest.mark.parametrize("fragment,expected", [
    ("05/03/2024", "2024-03-05"),
    ("05/03/24", "2024-03-05"),
    ("1.2.2019 controllo", "2019-02-01"),
    ("  7-11-2021", "2021-11-07"),
    ("visita del 12/4/2020 ore 10", "2020-04-12"),
])
def test_normalize_date(fragment, expected):
    """Test day/month/year fragments become YYYY-MM-DD"""
    assert normalize_date(fragment) == expected


def test_normalize_date_without_date():
    """Test fragments with no date give None"""
    assert normalize_date("nessuna data") is None
    assert normalize_date("") is None
    assert normalize_date(None) is None


def test_normalize_date_is_not_range_checked():
    """Test shaped-but-invalid dates are kept as typed"""
    assert normalize_date("31/13/2024") == "2024-13-31"


@pytest.mark.parametrize("fragment,expected", [
    ("12/04/2015", "2015-04-12"),
    ("12-04-15", "2015-04-12"),
    ("03/2018", "2018-03-01"),
    ("3/2018", "2018-03-01"),
    ("2016", "2016-01-01"),
    (" 2016 ", "2016-01-01"),
])
def test_normalize_dob(fragment, expected):
    """Test birth dates with full, month/year and year precision"""
    assert normalize_dob(fragment) == expected


def test_normalize_dob_rejects_partial_match():
    """Test the whole fragment must be a date"""
    assert normalize_dob("nato nel 2016") is None
    assert normalize_dob("abc") is None
    assert normalize_dob("") is None


def test_clean():
    """Test runs of spaces and tabs collapse"""
    assert clean("  Labrador   retriever\t\tnero ") == "Labrador retriever nero"
    assert clean("riga uno\nriga due") == "riga uno\nriga due"
    assert clean(None) is None


def test_collapse_whitespace():
    """Test newlines are collapsed too"""
    assert collapse_whitespace("Via Roma 12,\n   Milano ") == "Via Roma 12, Milano"
    assert collapse_whitespace("") == ""
