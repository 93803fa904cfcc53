"""Turn a DocumentSubmission into the immutable Document the orchestrator consumes."""
from __future__ import annotations

import base64
import binascii
import logging
from typing import Callable

from contractai.extraction.errors import ExtractionError
from contractai.extraction.models import Document, DocumentSubmission, DocumentType
from contractai.extraction.pdf import extract_text
from contractai.extraction.settings import ExtractionSettings

logger = logging.getLogger(__name__)


def _decode_base64(content: str) -> bytes:
    payload = content.strip()
    # Accept data URLs: "data:application/pdf;base64,...."
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ExtractionError("Content is not valid base64", code="BAD_ENCODING") from e


def prepare_document(
    submission: DocumentSubmission,
    settings: ExtractionSettings | None = None,
    *,
    pdf_extractor: Callable[[bytes], str] = extract_text,
) -> Document:
    """Decode, extract and sanity-check submitted content. Raises ExtractionError."""
    settings = settings or ExtractionSettings()
    if not submission.content.strip():
        raise ExtractionError("No content provided", code="NO_CONTENT")
    if submission.encoding == "base64":
        data = _decode_base64(submission.content)
        if len(data) > settings.max_document_bytes:
            raise ExtractionError(
                f"Document exceeds the {settings.max_document_bytes // (1024 * 1024)} MB limit",
                code="TOO_LARGE",
            )
        if submission.type == DocumentType.PDF:
            text = pdf_extractor(data)
            logger.info("extracted %d chars from PDF %r", len(text), submission.name)
            if len(text.strip()) < settings.min_pdf_text_chars:
                raise ExtractionError(
                    "The PDF appears to be scanned or have restricted permissions. "
                    "Please upload a searchable PDF document.",
                    code="PDF_NO_TEXT",
                )
        else:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ExtractionError("Text file is not valid UTF-8", code="BAD_ENCODING") from e
    else:
        text = submission.content
        if len(text.encode("utf-8")) > settings.max_document_bytes:
            raise ExtractionError(
                f"Document exceeds the {settings.max_document_bytes // (1024 * 1024)} MB limit",
                code="TOO_LARGE",
            )

    if len(text.strip()) < settings.min_text_chars:
        raise ExtractionError(
            "No meaningful text could be extracted. Please upload a text-based document, "
            "not a scanned image.",
            code="NO_TEXT",
        )
    return Document(content=text, type=submission.type, name=submission.name)
