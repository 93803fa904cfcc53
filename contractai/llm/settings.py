"""Completion adapter configuration. Env prefix: LLM_. Key: LLM_API_KEY (falls back to OPENAI_API_KEY)."""
from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Settings for the LiteLLM client. All overridable via LLM_* env vars."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    model: str = Field(default="gpt-4-turbo-preview", description="LiteLLM model string")
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_API_KEY", "OPENAI_API_KEY"),
        description="Provider API key",
    )
    api_base: str | None = Field(default=None, description="Optional provider base URL")
    require_api_key: bool = Field(
        default=True,
        description="Treat a missing api_key as an unconfigured capability (disable for local models)",
    )
    concurrency_limit: int = Field(default=8, ge=1, description="Max concurrent completion calls per event loop")
    default_timeout_s: float = Field(default=30.0, gt=0, description="Default per-call deadline")
    drop_unsupported_params: bool = Field(
        default=True,
        description="Drop OpenAI params not supported by provider",
    )
    log_previews: bool = Field(default=False, description="Log redacted response previews at DEBUG")

    @field_validator("model")
    @classmethod
    def model_not_blank(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("LLM_MODEL must be non-empty")
        return v.strip()

    @property
    def is_configured(self) -> bool:
        """True when the capability can be called (credential present or not required)."""
        return bool(self.api_key) or not self.require_api_key
