"""Document submission (wire) and Document (what the orchestrator consumes)."""
from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, Enum):
    PDF = "pdf"
    TEXT = "text"


class DocumentSubmission(BaseModel):
    """Request body of POST /api/analyze. PDFs carry extracted text or a base64 payload."""

    model_config = ConfigDict(extra="ignore")

    type: DocumentType = DocumentType.TEXT
    content: str = ""
    name: str = Field(default="Untitled Contract", max_length=512)
    encoding: Literal["text", "base64"] = "text"


class Document(BaseModel):
    """Immutable once handed to the orchestrator."""

    model_config = ConfigDict(frozen=True)

    content: str
    type: DocumentType = DocumentType.TEXT
    name: str = "Untitled Contract"

    @property
    def mime_type(self) -> str:
        return "application/pdf" if self.type == DocumentType.PDF else "text/plain"
