# ============================================================================
# src/vet_ingestion/utils/encoding.py
# ============================================================================
"""
Byte-to-text decoding for case-note files.

Files were typed on different machines over many years, so the same folder
mixes UTF-8, Windows code pages and Latin-1. Decoding order:

1. UTF-8 with BOM
2. Plain UTF-8, accepted when it produces no replacement characters
3. Statistical detection (charset_normalizer), label normalized
4. cp1252, then latin-1
5. The lossy UTF-8 interpretation, so callers always get text
"""

import logging
from typing import Optional

from charset_normalizer import from_bytes

from .exceptions import DecodingError

logger = logging.getLogger(__name__)

REPLACEMENT_CHAR = "\ufffd"
UTF8_BOM = b"\xef\xbb\xbf"
FALLBACK_ENCODINGS = ("cp1252", "latin-1")


def normalize_encoding_label(label: Optional[str]) -> str:
    """
    Map a detector label onto the codec actually used for decoding.

    Examples:
        None / "ascii" / "utf_8" -> "utf-8"
        "iso8859_15" / "ISO-8859-1" -> "latin-1"
        "windows-1252" / "cp1252" -> "cp1252"
    """
    enc = (label or "").lower().replace("_", "-")
    if not enc or enc == "ascii" or "utf-8" in enc:
        return "utf-8"
    if enc.startswith("iso-8859") or enc.startswith("iso8859") or enc in ("latin-1", "latin1"):
        return "latin-1"
    if enc in ("windows-1252", "cp1252"):
        return "cp1252"
    return enc


def _try_decode(data: bytes, encoding: str) -> Optional[str]:
    try:
        text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        logger.debug(f"Decoding with {encoding} failed: {e}")
        return None
    if REPLACEMENT_CHAR in text:
        return None
    return text


def detect_encoding(data: bytes) -> Optional[str]:
    """Best guess of the encoding of ``data``, or None if undetectable."""
    best = from_bytes(data).best()
    return best.encoding if best is not None else None


def decode_to_text(data: bytes) -> str:
    """
    Decode raw file bytes into a single best-effort string.

    Args:
        data: Raw file content

    Returns:
        Decoded text; never raises for bytes input

    Raises:
        DecodingError: If ``data`` is not bytes
    """
    if not isinstance(data, (bytes, bytearray)):
        raise DecodingError(f"Expected bytes, got {type(data).__name__}")

    data = bytes(data)

    if data.startswith(UTF8_BOM):
        return data.decode("utf-8-sig", errors="replace")

    utf8 = data.decode("utf-8", errors="replace")
    if REPLACEMENT_CHAR not in utf8:
        return utf8

    detected = normalize_encoding_label(detect_encoding(data))
    logger.debug(f"UTF-8 decoding is lossy, detector suggests {detected}")

    text = _try_decode(data, detected)
    if text is not None:
        return text

    for encoding in FALLBACK_ENCODINGS:
        text = _try_decode(data, encoding)
        if text is not None:
            logger.debug(f"Decoded with fallback encoding {encoding}")
            return text

    logger.warning("No clean decoding found, returning lossy UTF-8 text")
    return utf8
