"""Typed request/response models for the completion adapter (Pydantic v2)."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class LLMMessage(BaseModel):
    """Single message in OpenAI-style format."""

    role: Literal["system", "user", "assistant"]
    content: str


class CompletionRequest(BaseModel):
    """One chat completion: system persona + user prompt. model_dump() is stable for hashing."""

    system_prompt: str
    user_prompt: str
    max_output_tokens: int | None = Field(default=None, ge=1)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    json_mode: bool = False
    timeout_s: float | None = Field(default=None, gt=0)
    metadata: dict[str, str] = Field(default_factory=dict)

    def messages(self) -> list[LLMMessage]:
        return [
            LLMMessage(role="system", content=self.system_prompt),
            LLMMessage(role="user", content=self.user_prompt),
        ]


class LLMUsage(BaseModel):
    """Token usage."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


class CompletionResponse(BaseModel):
    """Normalized response from the provider."""

    text: str
    model: str
    latency_ms: int
    usage: LLMUsage | None = None
    finish_reason: str | None = None
    raw: dict[str, Any] | None = None
