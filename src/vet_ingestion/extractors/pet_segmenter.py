# ============================================================================
# src/vet_ingestion/extractors/pet_segmenter.py
# ============================================================================
"""
Pet Segmenter

A case note lists one block per animal. A block starts on a line whose
first token is a species code and runs until the next such line:

    GT EUROPEO M Micio 12/04/2015 sterilizzato
    CN Labrador F Luna (la piccola) 03/2018 intero

Text before the first species-code line belongs to the owner header and
is ignored here.

The header line has no fixed field order. It is read around its first
date: color keyword before or after it, name right after it (or between
the sex marker and the date), breed from what remains before it.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

from vet_ingestion.config import extraction_settings, ExtractionSettings
from vet_ingestion.constants import patterns
from vet_ingestion.core.context import PetRecord, Species, TokenKind
from vet_ingestion.core.tokenizer import Token, first_token, tokenize
from vet_ingestion.extractors.visit_segmenter import extract_visits
from vet_ingestion.utils.text_normalizer import clean, normalize_dob

logger = logging.getLogger(__name__)

SPECIES_BY_CODE = {
    "GT": Species.CAT,
    "CT": Species.DOG,
    "CG": Species.DOG,
    "CN": Species.DOG,
}

HEADER_KINDS = (TokenKind.SEX, TokenKind.DATE, TokenKind.COLOR, TokenKind.STERILIZATION)

# (start, end, text)
Span = Tuple[int, int, str]


@dataclass
class PetHeader:
    species: Species
    name: Optional[str] = None
    breed: Optional[str] = None
    sex: Optional[str] = None
    dob: Optional[str] = None
    color: Optional[str] = None
    sterilized: Optional[bool] = None


def split_pet_blocks(text: str) -> List[str]:
    """Split a document into blocks, each starting at a species-code line."""
    blocks: List[str] = []
    current: Optional[List[str]] = None

    for line in (text or "").split("\n"):
        if patterns.SPECIES_PREFIX.match(line):
            if current is not None:
                blocks.append("\n".join(current))
            current = [line]
        elif current is not None:
            current.append(line)

    if current is not None:
        blocks.append("\n".join(current))
    return blocks


def extract_pets(text: str, settings: Optional[ExtractionSettings] = None) -> List[PetRecord]:
    """
    Extract one PetRecord per species-code block, visits included.

    Args:
        text: Full document text
        settings: Extraction settings; defaults to the global instance

    Returns:
        Pets in document order; empty when no line carries a species code
    """
    pets = []
    for block in split_pet_blocks(text):
        first_line, _, body = block.partition("\n")
        header = parse_pet_header(first_line.strip(), settings)
        if header is None:
            continue

        microchip = patterns.MICROCHIP.search(block)
        pets.append(PetRecord(
            species=header.species.value,
            name=header.name,
            breed=header.breed,
            sex=header.sex,
            dob=header.dob,
            color=header.color,
            sterilized=header.sterilized,
            microchip=microchip.group(0) if microchip else None,
            visits=extract_visits(body),
        ))

    logger.debug(f"Extracted {len(pets)} pets")
    return pets


def parse_pet_header(line: str, settings: Optional[ExtractionSettings] = None) -> Optional[PetHeader]:
    """
    Parse the first line of a pet block.

    Returns:
        PetHeader, or None when the line does not start with a species code
    """
    settings = settings or extraction_settings
    prefix = patterns.SPECIES_PREFIX.match(line or "")
    if not prefix:
        return None

    species = SPECIES_BY_CODE[prefix.group(1).upper()]
    rest = line[prefix.end():].strip()
    tokens = tokenize(rest, HEADER_KINDS)

    sex_token = first_token(tokens, TokenKind.SEX)
    birth = _find_birth_date(rest, tokens)

    if birth:
        date_start, date_end, date_text = birth
        before, after = rest[:date_start], rest[date_end:]
    else:
        date_start, date_text = len(rest), None
        before, after = rest, ""

    name = _name_after_date(after)
    if not name and sex_token and birth and sex_token.end <= date_start:
        name = _name_before_date(rest[sex_token.end:date_start])

    return PetHeader(
        species=species,
        name=name,
        breed=_breed(before, name, settings),
        sex=sex_token.text.upper() if sex_token else None,
        dob=normalize_dob(date_text) if date_text else None,
        color=_color(rest, tokens, date_start),
        sterilized=_sterilization(tokens),
    )


def _find_birth_date(rest: str, tokens: List[Token]) -> Optional[Span]:
    """First full date; failing that a month/year, failing that a bare year."""
    date = first_token(tokens, TokenKind.DATE)
    if date:
        return date.start, date.end, date.text
    for pattern in (patterns.DATE_MONTH_YEAR, patterns.DATE_YEAR):
        match = pattern.search(rest)
        if match:
            return match.start(), match.end(), match.group(0)
    return None


def _color(rest: str, tokens: List[Token], date_start: int) -> Optional[str]:
    # The color keyword and whatever follows it, up to the date when the
    # keyword precedes the date
    color = first_token(tokens, TokenKind.COLOR)
    if not color:
        return None
    end = date_start if color.start < date_start else len(rest)
    return clean(rest[color.start:end]) or None


def _cut_at(text: str, pattern: Pattern) -> str:
    match = pattern.search(text)
    return text[:match.start()] if match else text


def _name_after_date(after: str) -> Optional[str]:
    chunk = patterns.NAME_CHUNK.search(_cut_at(after, patterns.NAME_STOP))
    if chunk:
        return chunk.group(0).strip() or None
    return None


def _name_before_date(span: str) -> Optional[str]:
    """
    Name typed between the sex marker and the date.

    A parenthetical nickname keeps its word: "Luna (la piccola)".
    Otherwise the last two words are the name.
    """
    span = _cut_at(span, patterns.COLOR)
    paren = span.find("(")
    if paren >= 0:
        close = span.find(")")
        begin = span[:paren].rstrip().rfind(" ") + 1
        name = span[begin:close + 1] if close > paren else span[begin:]
    else:
        name = " ".join(span.split()[-2:])
    return name.strip() or None


def _remove_sex(text: str) -> str:
    return patterns.SEX.sub("", text).strip()


def _breed(before: str, name: Optional[str], settings: ExtractionSettings) -> Optional[str]:
    if name:
        index = before.lower().rfind(name.lower())
        part = before[:index] if index > 0 else before
    else:
        part = " ".join(before.split()[:settings.BREED_FALLBACK_WORDS])
    return clean(_remove_sex(part)) or None


def _sterilization(tokens: List[Token]) -> Optional[bool]:
    # "intero" is the only marker meaning not sterilized
    marker = first_token(tokens, TokenKind.STERILIZATION)
    if not marker:
        return None
    return marker.text.upper() != patterns.INTACT_MARKER
