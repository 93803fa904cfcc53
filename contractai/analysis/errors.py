"""Analysis pipeline exceptions. Codes are stable and end up in error events and logs."""


class AnalysisError(Exception):
    """Base exception for pipeline failures."""

    def __init__(self, message: str, *, code: str = "ANALYSIS_ERROR") -> None:
        super().__init__(message)
        self.code = code


class InvalidInputError(AnalysisError):
    """Empty or missing document content. Fatal, never retried."""

    def __init__(self, message: str = "No content provided", *, code: str = "INVALID_INPUT") -> None:
        super().__init__(message, code=code)


class CapabilityNotConfiguredError(InvalidInputError):
    """Completion capability has no credential."""

    def __init__(self, message: str = "Text generation API key is not configured") -> None:
        super().__init__(message, code="NOT_CONFIGURED")


class ChunkFailedError(AnalysisError):
    """A chunk never succeeded within its per-chunk attempt bound."""

    def __init__(self, index: int, total: int, attempts: int) -> None:
        super().__init__(
            f"Failed to process chunk {index} of {total} after {attempts} attempts",
            code="CHUNK_FAILED",
        )
        self.index = index
        self.total = total
        self.attempts = attempts


class AnalysisTimeoutError(AnalysisError):
    """Overall wall-clock budget for one request was exceeded."""

    def __init__(self, budget_s: float) -> None:
        super().__init__(f"Analysis exceeded the {budget_s:.0f}s time budget", code="BUDGET_EXCEEDED")
        self.budget_s = budget_s
