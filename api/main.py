# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for the Veterinary Record Ingestion Engine

Lists the case notes of the data directory and runs extraction on request.
Results are returned for review; saving them is the caller's business.
"""

import sys
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vet_ingestion.config import logging_settings
from vet_ingestion.core.document_source import DocumentSource
from vet_ingestion.utils.exceptions import DocumentNotFoundError, InvalidDocumentNameError
from vet_ingestion.utils.logging import setup_logging

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Veterinary Record Ingestion API",
    description="API for extracting owners, pets and visits from free-form case notes",
    version="1.0.0",
)

# Review frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Models
# ============================================================================

class DocumentInfo(BaseModel):
    name: str
    size: int


class ParseResponse(BaseModel):
    parsed: Dict[str, Any]
    raw: str


# ============================================================================
# Dependencies
# ============================================================================

def get_document_source() -> DocumentSource:
    return DocumentSource()


# ============================================================================
# Routes
# ============================================================================

@app.get("/api/health")
async def health():
    """Health check for monitoring."""
    return {"status": "healthy"}


@app.get("/api/list", response_model=List[DocumentInfo])
def list_documents(source: DocumentSource = Depends(get_document_source)):
    """List the case notes available for extraction."""
    return source.list_documents()


@app.get("/api/parse", response_model=ParseResponse)
def parse(file: Optional[str] = None, source: DocumentSource = Depends(get_document_source)):
    """
    Decode and parse one case note.

    Args:
        file: Document name as returned by /api/list

    Returns:
        Parsed document (raw text echoed) and the decoded text
    """
    if not file:
        raise HTTPException(status_code=400, detail="file query param required")

    try:
        parsed, text = source.parse(file, keep_raw=True)
    except InvalidDocumentNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="file not found")
    except Exception as e:
        logger.error(f"Parse failed for {file}: {e}")
        raise HTTPException(status_code=500, detail=f"Parse failed: {str(e)}")

    return {"parsed": parsed.to_dict(), "raw": text}


if __name__ == "__main__":
    import uvicorn

    setup_logging(
        level=logging_settings.LOG_LEVEL,
        log_file=logging_settings.LOG_FILE,
        format_json=logging_settings.LOG_JSON,
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
