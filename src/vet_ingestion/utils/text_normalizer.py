# ============================================================================
# src/vet_ingestion/utils/text_normalizer.py
# ============================================================================
"""
Text Normalization Utilities

Canonicalizes fragments matched in free-form case notes:
- Day/month/year dates -> YYYY-MM-DD (two-digit years land in the 2000s)
- Birth dates that may only carry month/year or a bare year
- Redundant horizontal whitespace

Day and month are NOT range-checked: "31/13/2024" becomes "2024-13-31".
Downstream review decides what to do with shaped-but-invalid dates.
"""

import re
from typing import Optional

from vet_ingestion.constants.patterns import DATE_LOOSE

DOB_FULL = re.compile(r'(\d{1,2})[./-](\d{1,2})[./-](\d{2,4})')
DOB_MONTH_YEAR = re.compile(r'(\d{1,2})/(\d{4})')
DOB_YEAR = re.compile(r'\d{4}')

_HORIZONTAL_RUNS = re.compile(r'[ \t]{2,}')
_WHITESPACE_RUNS = re.compile(r'\s+')


def _expand_year(year: str) -> str:
    return f"20{year}" if len(year) == 2 else year


def _canonical(year: str, month: str, day: str) -> str:
    return f"{_expand_year(year)}-{month.zfill(2)}-{day.zfill(2)}"


def normalize_date(fragment: str) -> Optional[str]:
    """
    Find the first day/month/year triple in a fragment and canonicalize it.

    Examples:
        "05/03/24" -> "2024-03-05"
        "  1.2.2019 controllo" -> "2019-02-01"
        "nessuna data" -> None
    """
    if not fragment:
        return None

    match = DATE_LOOSE.search(fragment)
    if not match:
        return None

    day, month, year = match.groups()
    return _canonical(year, month, day)


def normalize_dob(fragment: str) -> Optional[str]:
    """
    Canonicalize a birth date. The whole fragment must be one of:

    - day/month/year -> "YYYY-MM-DD"
    - month/year     -> "YYYY-MM-01"
    - year           -> "YYYY-01-01"
    """
    if not fragment:
        return None

    fragment = fragment.strip()

    m = DOB_FULL.fullmatch(fragment)
    if m:
        day, month, year = m.groups()
        return _canonical(year, month, day)

    m = DOB_MONTH_YEAR.fullmatch(fragment)
    if m:
        month, year = m.groups()
        return f"{year}-{month.zfill(2)}-01"

    if DOB_YEAR.fullmatch(fragment):
        return f"{fragment}-01-01"

    return None


def clean(text: Optional[str]) -> Optional[str]:
    """Collapse runs of spaces/tabs to a single space and trim."""
    if text is None:
        return None
    return _HORIZONTAL_RUNS.sub(' ', text).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run, newlines included, to one space."""
    return _WHITESPACE_RUNS.sub(' ', text or '').strip()
