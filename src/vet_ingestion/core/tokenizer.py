# ============================================================================
# src/vet_ingestion/core/tokenizer.py
# ============================================================================
"""
Tokenizer

Turns free text into a position-sorted stream of classified tokens
(dates, phones, emails, fiscal codes, species codes, keyword classes).
The extractors apply their rules over this stream instead of chaining
regex searches, so ordering and tie-breaks live in one place:

- tokens are sorted by start offset
- equal offsets are ordered by TokenKind declaration order
- then the shorter token first

Tokens of different kinds may overlap (a date inside an address span,
a phone inside a window); rules decide what to do with overlaps.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Pattern

from vet_ingestion.constants import patterns
from vet_ingestion.core.context.enums import TokenKind

logger = logging.getLogger(__name__)

RECOGNIZERS: Dict[TokenKind, Pattern] = {
    TokenKind.TAX_CODE: patterns.TAX_CODE,
    TokenKind.EMAIL: patterns.EMAIL,
    TokenKind.PHONE: patterns.PHONE,
    TokenKind.MICROCHIP: patterns.MICROCHIP,
    TokenKind.DATE: patterns.DATE_ANY,
    TokenKind.SPECIES_CODE: patterns.SPECIES_TOKEN,
    TokenKind.STREET: patterns.STREET,
    TokenKind.STERILIZATION: patterns.STERILIZATION,
    TokenKind.SEX: patterns.SEX,
    TokenKind.COLOR: patterns.COLOR,
}

_PRIORITY = {kind: index for index, kind in enumerate(TokenKind)}

# Tokens that end an address candidate
ADDRESS_STOP_KINDS = (
    TokenKind.PHONE,
    TokenKind.TAX_CODE,
    TokenKind.EMAIL,
    TokenKind.SPECIES_CODE,
    TokenKind.DATE,
)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    start: int
    end: int
    text: str


def tokenize(text: str, kinds: Optional[Iterable[TokenKind]] = None) -> List[Token]:
    """
    Run the selected recognizers over ``text``.

    Args:
        text: Input text (may be empty)
        kinds: Token kinds to recognize; all kinds when omitted

    Returns:
        Tokens sorted by (start, kind priority, end)
    """
    if not text:
        return []

    selected = list(kinds) if kinds is not None else list(TokenKind)
    tokens = [
        Token(kind, match.start(), match.end(), match.group(0))
        for kind in selected
        for match in RECOGNIZERS[kind].finditer(text)
    ]
    tokens.sort(key=lambda token: (token.start, _PRIORITY[token.kind], token.end))

    logger.debug(f"Tokenized {len(text)} chars into {len(tokens)} tokens")
    return tokens


def first_token(tokens: Iterable[Token], kind: TokenKind, start: int = 0) -> Optional[Token]:
    """First token of ``kind`` starting at or after ``start``."""
    for token in tokens:
        if token.kind == kind and token.start >= start:
            return token
    return None
