"""Structured call logging and preview redaction for the completion adapter."""
from __future__ import annotations

import hashlib
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# Contract text carries credentials, e-mail addresses and account numbers; previews mask all three.
_REDACTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bsk-[A-Za-z0-9_-]{20,}\b"), "[REDACTED]"),
    (re.compile(r"\bBearer\s+[A-Za-z0-9_.-]+", re.IGNORECASE), "[REDACTED]"),
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    (re.compile(r"\b\d(?:[ -]?\d){7,}\b"), "[NUMBER]"),
]
PREVIEW_MAX_CHARS = 200


def redact_preview(text: str, limit: int = PREVIEW_MAX_CHARS) -> str:
    """Mask secrets, e-mails and long digit runs, then truncate to limit characters."""
    out = text or ""
    for pattern, replacement in _REDACTIONS:
        out = pattern.sub(replacement, out)
    return out if len(out) <= limit else out[:limit] + "..."


def log_llm_call(
    *,
    model: str,
    latency_ms: int,
    status: str,
    stage: str | None = None,
    json_mode: bool = False,
    input_tokens: int | None = None,
    output_tokens: int | None = None,
    error_code: str | None = None,
) -> None:
    """One llm_call record per completion. Prompt text and keys are never part of it."""
    optional = {
        "stage": stage,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "error_code": error_code,
    }
    extra: dict[str, Any] = {"model": model, "latency_ms": latency_ms, "status": status, "json_mode": json_mode}
    extra.update({k: v for k, v in optional.items() if v is not None})
    level = logging.INFO if status == "SUCCEEDED" else logging.WARNING
    logger.log(level, "llm_call", extra=extra)


def stable_hash(content: str) -> str:
    """SHA256 hex digest; correlates prompts across log lines without storing them."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
