# ============================================================================
# src/vet_ingestion/core/document_source.py
# ============================================================================
"""
Document Source

Case notes live as plain-text files in one data directory. This class
lists them, decodes them to text and runs the parser; the API and the
batch script both go through it.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from vet_ingestion.config import base_settings
from vet_ingestion.core.context import ParsedDocument
from vet_ingestion.core.parser import parse_document
from vet_ingestion.utils.encoding import decode_to_text
from vet_ingestion.utils.exceptions import DocumentNotFoundError, InvalidDocumentNameError
from vet_ingestion.utils.logging import log_performance

logger = logging.getLogger(__name__)


class DocumentSource:
    """
    Read-only access to the case notes of a data directory.

    Document names are bare file names; anything that could point outside
    the data directory is rejected.
    """

    def __init__(self, data_dir: Optional[Path] = None, suffix: Optional[str] = None):
        self.data_dir = Path(data_dir or base_settings.DATA_DIR)
        self.suffix = (suffix or base_settings.DOCUMENT_SUFFIX).lower()

    def list_documents(self) -> List[Dict[str, Any]]:
        """
        List available documents.

        Returns:
            [{"name": ..., "size": ...}] sorted by name; empty when the data
            directory does not exist
        """
        if not self.data_dir.is_dir():
            logger.warning(f"Data directory not found: {self.data_dir}")
            return []

        return [
            {"name": path.name, "size": path.stat().st_size}
            for path in sorted(self.data_dir.iterdir())
            if path.is_file() and path.name.lower().endswith(self.suffix)
        ]

    def resolve(self, name: str) -> Path:
        """
        Map a document name onto its file.

        Raises:
            InvalidDocumentNameError: Empty name, path separators or ".."
            DocumentNotFoundError: No such file in the data directory
        """
        if not name or not name.strip():
            raise InvalidDocumentNameError("Document name is required", name or "")
        if "/" in name or "\\" in name or "\x00" in name or name in (".", ".."):
            raise InvalidDocumentNameError(f"Invalid document name: {name!r}", name)

        path = self.data_dir / name
        if not path.is_file():
            raise DocumentNotFoundError(f"Document not found: {name}", name)
        return path

    def read_text(self, name: str) -> str:
        """Read and decode a document."""
        return decode_to_text(self.resolve(name).read_bytes())

    @log_performance(logger, "Document parse")
    def parse(self, name: str, keep_raw: bool = True) -> Tuple[ParsedDocument, str]:
        """
        Decode and parse a document.

        Returns:
            (parsed document, decoded text)
        """
        text = self.read_text(name)
        return parse_document(text, keep_raw=keep_raw), text
