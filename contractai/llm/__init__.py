"""
Completion adapter: single typed async interface for text generation.
Public API: LiteLLMClient, CompletionClientPort, LLMSettings and the LLMError family.
Other modules must not call LiteLLM or provider SDKs directly.
"""
from contractai.llm.client_litellm import LiteLLMClient
from contractai.llm.errors import (
    ErrorClass,
    LLMAuthError,
    LLMBadRequest,
    LLMEmptyResponse,
    LLMError,
    LLMRateLimited,
    LLMResponseInvalid,
    LLMTimeout,
    LLMUnavailable,
)
from contractai.llm.ports import CompletionClientPort
from contractai.llm.settings import LLMSettings
from contractai.llm.types import CompletionRequest, CompletionResponse, LLMMessage, LLMUsage

__all__ = [
    "LiteLLMClient",
    "CompletionClientPort",
    "LLMSettings",
    "CompletionRequest",
    "CompletionResponse",
    "LLMMessage",
    "LLMUsage",
    "ErrorClass",
    "LLMError",
    "LLMTimeout",
    "LLMRateLimited",
    "LLMBadRequest",
    "LLMAuthError",
    "LLMUnavailable",
    "LLMResponseInvalid",
    "LLMEmptyResponse",
]
