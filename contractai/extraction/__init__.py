"""Document intake: submission model, PDF text extraction, size and content checks."""
from contractai.extraction.errors import ExtractionError
from contractai.extraction.models import Document, DocumentSubmission, DocumentType
from contractai.extraction.service import prepare_document
from contractai.extraction.settings import ExtractionSettings

__all__ = [
    "Document",
    "DocumentSubmission",
    "DocumentType",
    "ExtractionError",
    "ExtractionSettings",
    "prepare_document",
]
