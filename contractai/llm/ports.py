"""Port interface for the completion capability. The pipeline depends on this, not on LiteLLM."""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionClientPort(Protocol):
    """Provider-agnostic text generation. Implementations must be stateless and safe to share."""

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
        json_mode: bool = False,
        timeout_s: float | None = None,
    ) -> str:
        """Return generated text. Raises LLMError (LLMRateLimited, LLMTimeout, ...) on failure."""
        ...
