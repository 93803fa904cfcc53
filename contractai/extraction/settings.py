"""Extraction limits. Env prefix: EXTRACT_."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EXTRACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_document_bytes: int = Field(default=100 * 1024 * 1024, ge=1, description="Decoded payload ceiling")
    min_pdf_text_chars: int = Field(
        default=1000, ge=0, description="Shorter PDF text is treated as scanned or restricted"
    )
    min_text_chars: int = Field(default=100, ge=0, description="Minimum meaningful text after extraction")
