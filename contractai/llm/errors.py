"""Error taxonomy for the completion adapter. Codes are stable for logs and pipeline decisions."""
from __future__ import annotations

from enum import Enum


class ErrorClass(str, Enum):
    """How the retry controller treats a failure."""

    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    FATAL = "fatal"


class LLMError(Exception):
    """Base for all completion errors. details must not leak secrets."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "UNKNOWN",
        retryable: bool = False,
        model: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retryable = retryable
        self.model = model
        self.details = details or ""

    @property
    def error_class(self) -> ErrorClass:
        return ErrorClass.TRANSIENT if self.retryable else ErrorClass.FATAL


class LLMTimeout(LLMError):
    """Request exceeded its deadline and was cancelled."""

    def __init__(self, message: str = "LLM request timed out", **kwargs: object) -> None:
        super().__init__(message, code="TIMEOUT", retryable=True, **kwargs)


class LLMRateLimited(LLMError):
    """Rate limit (429), TPM or quota exceeded."""

    def __init__(self, message: str = "LLM rate limited", **kwargs: object) -> None:
        super().__init__(message, code="RATE_LIMITED", retryable=True, **kwargs)

    @property
    def error_class(self) -> ErrorClass:
        return ErrorClass.RATE_LIMITED


class LLMBadRequest(LLMError):
    """Invalid request (e.g. context length, params)."""

    def __init__(self, message: str = "LLM bad request", **kwargs: object) -> None:
        super().__init__(message, code="BAD_REQUEST", retryable=False, **kwargs)


class LLMAuthError(LLMError):
    """Authentication or authorization failure."""

    def __init__(self, message: str = "LLM auth error", **kwargs: object) -> None:
        super().__init__(message, code="AUTH_ERROR", retryable=False, **kwargs)


class LLMUnavailable(LLMError):
    """Service unavailable (5xx, connection, etc.)."""

    def __init__(self, message: str = "LLM unavailable", **kwargs: object) -> None:
        super().__init__(message, code="UNAVAILABLE", retryable=True, **kwargs)


class LLMResponseInvalid(LLMError):
    """Response failed validation (unparsable JSON, wrong shape)."""

    def __init__(self, message: str = "LLM response invalid", **kwargs: object) -> None:
        super().__init__(message, code="RESPONSE_INVALID", retryable=False, **kwargs)


class LLMEmptyResponse(LLMError):
    """Provider returned no text. Retried: a repeat call usually produces output."""

    def __init__(self, message: str = "LLM returned an empty completion", **kwargs: object) -> None:
        super().__init__(message, code="EMPTY_RESPONSE", retryable=True, **kwargs)
