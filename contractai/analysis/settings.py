"""Analysis pipeline configuration. Env prefix: ANALYSIS_."""
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Budgets, retry policy, pacing and streaming knobs for ContractAnalyzer."""

    model_config = SettingsConfigDict(
        env_prefix="ANALYSIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Chunking / condensation budgets (estimated tokens)
    chunk_max_tokens: int = Field(default=24_000, ge=1, description="Ceiling per input chunk")
    condense_threshold_tokens: int = Field(
        default=60_000, ge=1, description="Combined summary above this is condensed"
    )
    condense_chunk_tokens: int = Field(default=24_000, ge=1, description="Ceiling per condensation piece")
    max_condense_passes: int = Field(default=3, ge=1, description="Condensation rounds while still over threshold")

    # Output token limits and sampling
    chunk_summary_max_tokens: int = Field(default=1_000, ge=1)
    condense_max_tokens: int = Field(default=2_000, ge=1)
    analysis_max_tokens: int = Field(default=2_000, ge=1)
    summary_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    analysis_temperature: float = Field(default=0.2, ge=0.0, le=0.3)
    analysis_variant: Literal["minimal", "detailed"] = Field(
        default="minimal", description="minimal: string arrays; detailed: sections + financialTerms"
    )

    # Deadlines
    call_timeout_s: float = Field(default=30.0, gt=0, description="Deadline for chunk/condense calls")
    analysis_timeout_s: float = Field(default=60.0, gt=0, description="Deadline for the final analysis call")
    request_budget_s: float = Field(default=600.0, gt=0, description="Overall wall-clock budget per request")

    # Retry policy
    max_attempts: int = Field(default=3, ge=1, description="Attempts per call inside the retry controller")
    max_chunk_attempts: int = Field(default=5, ge=1, description="Retry-controller rounds per chunk")
    backoff_base_s: float = Field(default=1.0, ge=0, description="Transient backoff: base * 2**n")
    backoff_max_s: float = Field(default=30.0, ge=0)
    rate_limit_cooldown_s: float = Field(default=10.0, ge=0)
    chunk_retry_delay_s: float = Field(default=1.0, ge=0, description="Pause before retrying a failed chunk")
    inter_call_delay_s: float = Field(default=1.0, ge=0, description="Pacing between sequential chunk calls")

    # Streaming
    ping_interval_s: float = Field(default=5.0, gt=0)

    @model_validator(mode="after")
    def validate_budgets(self) -> "AnalysisSettings":
        if self.backoff_max_s < self.backoff_base_s:
            raise ValueError("backoff_max_s must be >= backoff_base_s")
        return self
