# ============================================================================
# src/vet_ingestion/constants/patterns.py
# ============================================================================
"""
Pattern Library

Every recognizer used by the extractors, compiled once at import time.
Nothing here holds state, so the module is safe to share between threads.

Patterns avoid nested unbounded quantifiers; the identity patterns (email,
phone) use look-behinds so a run of word characters is only tried from its
first character.

Exam triggers must start a word (EXAM_TRIGGER is anchored on \\b), so a
keyword buried inside a longer word does not count: "secondo controllo" is
plain text, not an echo ("eco") exam. The transfer phrase is matched in any
case, recipient name included.
"""

import re

# Letters used in Italian personal names
UPPER = "A-ZÀ-ÖØ-Ý"
LOWER = "a-zß-öø-ÿ"
LETTERS = "A-Za-zÀ-ÖØ-öø-ÿ"

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

# A visit starts on a line whose first token is a date
DATE_LINE = re.compile(r'^\s*(\d{1,2})[./-](\d{1,2})[./-](\d{2,4})\b')

# Any day/month/year triple, no groups
DATE_ANY = re.compile(r'\b\d{1,2}[./-]\d{1,2}[./-]\d{2,4}\b')

# Same triple with groups, used by the normalizer
DATE_LOOSE = re.compile(r'\b(\d{1,2})[./-](\d{1,2})[./-](\d{2,4})\b')

# Birth-date fallbacks on the pet header when no full date is present
DATE_MONTH_YEAR = re.compile(r'(?<![\d/])\d{1,2}/\d{4}\b')
DATE_YEAR = re.compile(r'\b(?:19|20)\d{2}\b')

# ---------------------------------------------------------------------------
# Contacts / identifiers
# ---------------------------------------------------------------------------

# Italian mobile numbers, optional +39 prefix
PHONE = re.compile(r'(?<![\w+])(?:\+?39\s?)?3\d{8,10}\b')

EMAIL = re.compile(r'(?<![\w.+-])[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}\b')

# Codice fiscale: 6 letters, 2 digits, letter, 2 digits, letter, 3 digits, letter
TAX_CODE = re.compile(r'[A-Z]{6}\d{2}[A-Z]\d{2}[A-Z]\d{3}[A-Z]')

MICROCHIP = re.compile(r'\b\d{15}\b')

# ---------------------------------------------------------------------------
# Pet header
# ---------------------------------------------------------------------------

SPECIES_PREFIX = re.compile(r'^\s*(GT|CT|CG|CN)\b', re.IGNORECASE)

# Species code as an inline token, used to stop address scanning
SPECIES_TOKEN = re.compile(r'\b(?:GT|CT|CG|CN)(?=\s)')

SEX = re.compile(r'\b([MF])\b', re.IGNORECASE)

STERILIZATION = re.compile(r'\b(STERILIZZAT[OA]|CASTRAT[OA]|INTERO)\b', re.IGNORECASE)
INTACT_MARKER = "INTERO"

# Words that end the pet-name chunk after the birth date
NAME_STOP = re.compile(r'\b(?:STERILIZZAT[OA]|CASTRAT[OA]|INTERO|certa|incerta)\b', re.IGNORECASE)

NAME_CHUNK = re.compile(rf"[{LETTERS}'().-]+(?:\s+[{LETTERS}'().-]+){{0,3}}")

COLOR = re.compile(
    r'\b(nero|bianco|grigio|tigrato|fulvo|tricolore|pezzato|marrone|focato|'
    r'crema|blu|bruno|rosso|arancio|arancione)\b',
    re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Owners
# ---------------------------------------------------------------------------

# Words that open a capitalized pair but are not a first name
NOT_A_NAME = r"(?!(?i:sig|sigg|dott|dr|prof|via|viale|vicolo|vico|piazza|piazzale|corso|largo|strada|GT|CT|CG|CN)\b)"

# "Mario Rossi"
NAME_MIXED = re.compile(rf"\b{NOT_A_NAME}([{UPPER}][{LOWER}'().-]+)[ \t]+([{UPPER}][{LOWER}'().-]+)")

# "MARIO ROSSI"
NAME_UPPER = re.compile(rf"\b{NOT_A_NAME}([{UPPER}]{{2,}}(?:'[{UPPER}]+)?)[ \t]+([{UPPER}]{{2,}}(?:'[{UPPER}]+)?)\b")

STREET = re.compile(
    r'\b(via|viale|vicolo|vico|v\.?|piazzale|piazza|p\.?zza|p\.za|p\.?le|'
    r'corso|c\.?so|largo|l\.?go|strada|s\.?da)\b',
    re.IGNORECASE,
)

# Leading abbreviation -> expanded street type
STREET_EXPANSIONS = (
    (re.compile(r'^v\.', re.IGNORECASE), "Via"),
    (re.compile(r'^c\.?\s?so', re.IGNORECASE), "Corso"),
    (re.compile(r'^p\.?zza', re.IGNORECASE), "Piazza"),
    (re.compile(r'^p\.?le', re.IGNORECASE), "P.le"),
)

# "da 03/2019 ceduto a Mario Rossi"
TRANSFER = re.compile(
    r"(?:da\s+(\d{2})/(\d{4})\s+)?"
    r"(?:intestato a|cessione a|passaggio a|ceduto a)\s+"
    rf"([{LETTERS}][{LETTERS}'().-]+[ \t]+[{LETTERS}][{LETTERS}'().-]+)",
    re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Visit body
# ---------------------------------------------------------------------------

EXAM_TRIGGER = re.compile(
    r'\b(PROFILO|BASE\s+[A-Z]|EMOGRAMMA|BIOCHIMICO|PANNELLO|ESAME\s+(?:FECI|URINE)|'
    r'ISTOLOG|CITOLOG|TEST\b|ECO(?:CARDIO|\s*ADDOME|GRAFIA)?|RX\b|RADIOGRAFIA|TC\b|TAC\b)',
    re.IGNORECASE,
)

PRESCRIPTION_TRIGGER = re.compile(
    r'^(R/|Rev\b|Ricetta|Prescrizione|Faccio\b|Do\b|Aggiungo\b|Consiglio\b|'
    r'Metacam|Meloxidyl|Clavaseptin|Kesium|Afilaria|Frontline|Advantix|'
    r'Otopet|Otogent|Tranex|Arnica|Prevomax)',
    re.IGNORECASE,
)
