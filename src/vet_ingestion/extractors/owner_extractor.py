# ============================================================================
# src/vet_ingestion/extractors/owner_extractor.py
# ============================================================================
"""
Owner Extractor

Recovers owner identities from the header of a case note.

Only the leading HEADER_WINDOW_CHARS characters are scanned: identity data
is typed at the top of the record, and visit text further down is full of
names and numbers that are not owners.

Steps:
1. Tokenize the header (fiscal codes, emails, phones, street keywords,
   stop tokens for addresses)
2. Every fiscal code / email / phone opens a window around itself and
   yields one mention: nearest fiscal code, all emails and phones, the
   nearest personal name and the longest address found in the window
3. Mentions sharing a fiscal code, name, email or phone are grouped
   (union-find) and folded into one OwnerCandidate per group
4. An ownership-transfer phrase ("ceduto a Mario Rossi") marks the new
   primary owner; otherwise the first owner is primary
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from vet_ingestion.config import extraction_settings, ExtractionSettings
from vet_ingestion.constants import patterns
from vet_ingestion.core.context import OwnerCandidate, OwnerRole, TokenKind
from vet_ingestion.core.tokenizer import ADDRESS_STOP_KINDS, Token, tokenize
from vet_ingestion.utils.text_normalizer import collapse_whitespace

logger = logging.getLogger(__name__)

IDENTITY_KINDS = (TokenKind.TAX_CODE, TokenKind.EMAIL, TokenKind.PHONE)
HEADER_KINDS = IDENTITY_KINDS + (TokenKind.STREET, TokenKind.SPECIES_CODE, TokenKind.DATE)

_NON_DIGITS = re.compile(r'\D')
_SPACES = re.compile(r'\s+')

# (start, end, text) of a name shape found in the header
NameSpan = Tuple[int, int, str]


def extract_owners(text: str, settings: Optional[ExtractionSettings] = None) -> List[OwnerCandidate]:
    """
    Extract owner candidates from the document header.

    Args:
        text: Full document text
        settings: Window sizes; defaults to the global extraction settings

    Returns:
        Merged owner candidates, exactly one of them primary; empty list
        when the header carries no identity token
    """
    settings = settings or extraction_settings
    header = (text or "")[:settings.HEADER_WINDOW_CHARS]

    tokens = tokenize(header, HEADER_KINDS)
    identity_tokens = [token for token in tokens if token.kind in IDENTITY_KINDS]
    names = _find_names(header)

    mentions = [
        _mention_around(header, token, tokens, names, settings)
        for token in identity_tokens
    ]
    owners = merge_candidates(mentions)

    apply_transfer(header, owners)
    ensure_primary(owners)

    logger.debug(
        f"Header: {len(identity_tokens)} identity tokens, "
        f"{len(mentions)} mentions, {len(owners)} owners"
    )
    return owners


# ---------------------------------------------------------------------------
# Mentions
# ---------------------------------------------------------------------------

def _mention_around(
    header: str,
    token: Token,
    tokens: List[Token],
    names: Dict[str, List[NameSpan]],
    settings: ExtractionSettings,
) -> OwnerCandidate:
    window_start = max(0, token.start - settings.OWNER_WINDOW_BEFORE)
    window_end = min(len(header), token.start + settings.OWNER_WINDOW_AFTER)
    # The triggering token always belongs to its own mention, even when longer than the window
    inside = [t for t in tokens if t is token or (t.start >= window_start and t.end <= window_end)]

    tax_codes = [t for t in inside if t.kind == TokenKind.TAX_CODE]
    nearest_tax = min(tax_codes, key=lambda t: _distance(t.start, t.end, token)) if tax_codes else None

    return OwnerCandidate(
        full_name=best_name_around(names, window_start, window_end, token),
        tax_code=nearest_tax.text if nearest_tax else None,
        emails=_unique(t.text for t in inside if t.kind == TokenKind.EMAIL),
        phones=_unique(normalize_phone(t.text) for t in inside if t.kind == TokenKind.PHONE),
        address=find_address(header, _streets_within(tokens, window_start, window_end), window_end, settings),
    )


def _streets_within(tokens: List[Token], start: int, end: int) -> List[Token]:
    """All stop tokens, but only the street keywords that open inside the window."""
    return [t for t in tokens if t.kind != TokenKind.STREET or start <= t.start < end]


def _distance(start: int, end: int, token: Token) -> int:
    if end <= token.start:
        return token.start - end
    if start >= token.end:
        return start - token.end
    return 0


def _unique(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def normalize_phone(phone: str) -> str:
    """Drop whitespace inside a matched phone number."""
    return _SPACES.sub("", phone)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

def _find_names(header: str) -> Dict[str, List[NameSpan]]:
    """Mixed-case and all-caps two-word name shapes of the whole header."""
    found: Dict[str, List[NameSpan]] = {"mixed": [], "upper": []}
    for key, pattern in (("mixed", patterns.NAME_MIXED), ("upper", patterns.NAME_UPPER)):
        for match in pattern.finditer(header):
            found[key].append((match.start(), match.end(), match.group(0)))
    return found


def best_name_around(
    names: Dict[str, List[NameSpan]],
    window_start: int,
    window_end: int,
    token: Token,
) -> Optional[str]:
    """
    Name closest to the identity token inside its window.

    "Mario Rossi" is preferred over "MARIO ROSSI"; all-caps shapes are only
    used when the window has no mixed-case name.
    """
    for key in ("mixed", "upper"):
        candidates = [
            span for span in names[key]
            if span[0] >= window_start and span[1] <= window_end
        ]
        if candidates:
            start, end, text = min(candidates, key=lambda span: _distance(span[0], span[1], token))
            return text
    return None


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

def find_address(
    text: str,
    tokens: List[Token],
    limit: int,
    settings: Optional[ExtractionSettings] = None,
) -> Optional[str]:
    """
    Longest plausible street address starting at a street keyword.

    Each candidate runs from the keyword for at most ADDRESS_SPAN_CHARS
    characters and is cut at the first phone, fiscal code, email, date or
    species code after the keyword.

    Args:
        text: Text the token offsets refer to
        tokens: Position-sorted tokens of ``text`` (street + stop kinds)
        limit: Offset candidates may not run past
        settings: Address bounds
    """
    settings = settings or extraction_settings
    stops = [t for t in tokens if t.kind in ADDRESS_STOP_KINDS]
    candidates = []

    for street in (t for t in tokens if t.kind == TokenKind.STREET):
        end = min(street.start + settings.ADDRESS_SPAN_CHARS, limit, len(text))
        for stop in stops:
            if street.start < stop.start < end:
                end = stop.start
                break

        candidate = text[street.start:end]
        for abbreviation, expansion in patterns.STREET_EXPANSIONS:
            candidate = abbreviation.sub(expansion, candidate, count=1)
        candidate = collapse_whitespace(candidate).rstrip(" ,;-")

        if _is_valid_address(candidate, settings):
            candidates.append(candidate)

    if not candidates:
        return None
    # max() keeps the first of equally long candidates
    return max(candidates, key=len)


def _is_valid_address(candidate: str, settings: ExtractionSettings) -> bool:
    return (
        any(ch.isdigit() for ch in candidate)
        and settings.ADDRESS_MIN_LENGTH <= len(candidate) <= settings.ADDRESS_MAX_LENGTH
        and "@" not in candidate
    )


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

def _phone_key(phone: str) -> str:
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) > 10 and digits.startswith("39"):
        digits = digits[2:]
    return digits


def _merge_keys(candidate: OwnerCandidate) -> List[Tuple[str, str]]:
    keys = []
    if candidate.tax_code:
        keys.append(("tax_code", candidate.tax_code.upper()))
    if candidate.full_name:
        keys.append(("name", candidate.full_name.casefold()))
    keys.extend(("email", email.lower()) for email in candidate.emails)
    keys.extend(("phone", _phone_key(phone)) for phone in candidate.phones)
    return keys


def merge_candidates(mentions: List[OwnerCandidate]) -> List[OwnerCandidate]:
    """
    Group mentions that share any key and fold each group into one owner.

    Grouping is the connected components of the "shares a fiscal code,
    name, email or phone" relation, so it does not depend on mention
    order. Groups come out in order of their first mention; inside a group
    mentions are folded first to last.
    """
    parent = list(range(len(mentions)))

    def find(index: int) -> int:
        while parent[index] != index:
            parent[index] = parent[parent[index]]
            index = parent[index]
        return index

    def union(a: int, b: int) -> None:
        root_a, root_b = find(a), find(b)
        if root_a != root_b:
            parent[max(root_a, root_b)] = min(root_a, root_b)

    owner_of_key: Dict[Tuple[str, str], int] = {}
    for index, mention in enumerate(mentions):
        for key in _merge_keys(mention):
            if key in owner_of_key:
                union(owner_of_key[key], index)
            else:
                owner_of_key[key] = index

    groups: Dict[int, List[int]] = {}
    for index in range(len(mentions)):
        groups.setdefault(find(index), []).append(index)

    owners = []
    for root in sorted(groups):
        owner = OwnerCandidate()
        for index in groups[root]:
            owner.absorb(mentions[index])
        owners.append(owner)
    return owners


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------

def apply_transfer(header: str, owners: List[OwnerCandidate]) -> None:
    """
    Promote the recipient of an ownership transfer to primary owner.

    "da 03/2019 ceduto a Mario Rossi" makes Mario Rossi primary with
    start date 2019-03-01, appending a new owner when no existing owner has
    that name. The recipient name is matched in any case. Only the first
    transfer phrase of the header is used.
    """
    match = patterns.TRANSFER.search(header)
    if not match:
        return

    month, year, new_name = match.groups()
    start_date = f"{year}-{month}-01" if month and year else None

    for owner in owners:
        if owner.full_name and owner.full_name.casefold() == new_name.casefold():
            owner.role = OwnerRole.PRIMARY
            owner.start_date = start_date
            logger.debug("Ownership transfer to an existing owner")
            return

    owners.append(OwnerCandidate(full_name=new_name, role=OwnerRole.PRIMARY, start_date=start_date))
    logger.debug("Ownership transfer to a new owner")


def ensure_primary(owners: List[OwnerCandidate]) -> None:
    """Make the first owner primary when no transfer named one."""
    if owners and not any(owner.role == OwnerRole.PRIMARY for owner in owners):
        owners[0].role = OwnerRole.PRIMARY
