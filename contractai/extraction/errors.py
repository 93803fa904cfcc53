"""Extraction exceptions (surfaced to the caller as a non-stream 400)."""


class ExtractionError(Exception):
    """Document could not be turned into usable text."""

    def __init__(self, message: str, *, code: str = "EXTRACTION_FAILED") -> None:
        super().__init__(message)
        self.code = code
