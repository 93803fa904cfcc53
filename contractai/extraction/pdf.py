"""PDF text extraction with PyMuPDF. Treated as a black box by the pipeline."""
from __future__ import annotations

import logging

import fitz  # PyMuPDF

from contractai.extraction.errors import ExtractionError

logger = logging.getLogger(__name__)


def extract_text(data: bytes) -> str:
    """Return the text layer of every page, pages separated by a blank line."""
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            if doc.needs_pass:
                raise ExtractionError("The PDF is password-protected.", code="PDF_ENCRYPTED")
            pages = [page.get_text() for page in doc]
    except ExtractionError:
        raise
    except Exception as e:  # noqa: BLE001
        logger.warning("PDF parsing failed: %s", e)
        raise ExtractionError(
            "Failed to parse the PDF. The file might be corrupted, password-protected, "
            "or in an unsupported format.",
            code="PDF_UNREADABLE",
        ) from e
    return "\n\n".join(p.strip() for p in pages if p and p.strip())
