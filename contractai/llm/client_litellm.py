"""
LiteLLM client wrapper: normalize request/response, deadline, semaphore, exception mapping.
Exception mapping (LiteLLM -> LLMError):
  - litellm.exceptions.APITimeoutError / Timeout, or our own deadline -> LLMTimeout
  - litellm.exceptions.RateLimitError (429, TPM/quota) -> LLMRateLimited
  - litellm.exceptions.AuthenticationError / PermissionDeniedError -> LLMAuthError
  - litellm.exceptions.BadRequestError / ContextWindowExceededError -> LLMBadRequest
  - litellm.exceptions.APIError / ServiceUnavailableError / APIConnectionError -> LLMUnavailable
  - anything else -> LLMUnavailable (transient)
An empty completion is LLMEmptyResponse (transient); malformed JSON is judged by the caller.
Retries are not done here; the analysis retry controller owns them.
"""
from __future__ import annotations

import asyncio
import logging
import time
import weakref
from typing import Any

from litellm import acompletion

from contractai.llm.errors import (
    LLMAuthError,
    LLMBadRequest,
    LLMEmptyResponse,
    LLMError,
    LLMRateLimited,
    LLMTimeout,
    LLMUnavailable,
)
from contractai.llm.settings import LLMSettings
from contractai.llm.telemetry import log_llm_call, redact_preview, stable_hash
from contractai.llm.types import CompletionRequest, CompletionResponse, LLMUsage

logger = logging.getLogger(__name__)


def _map_exception(e: Exception, model: str) -> LLMError:
    """Map LiteLLM/provider exceptions to LLMError. Uses class name so it works across import paths."""
    if isinstance(e, LLMError):
        return e
    exc_name = type(e).__name__
    if exc_name in ("APITimeoutError", "Timeout", "TimeoutError"):
        return LLMTimeout(details=exc_name, model=model)
    if exc_name == "RateLimitError" or getattr(e, "status_code", None) == 429:
        return LLMRateLimited(details=exc_name, model=model)
    if exc_name in ("AuthenticationError", "PermissionDeniedError"):
        return LLMAuthError(details=exc_name, model=model)
    if exc_name in ("BadRequestError", "InvalidRequestError", "ContextWindowExceededError", "NotFoundError"):
        return LLMBadRequest(str(e), details=exc_name, model=model)
    if exc_name in ("ServiceUnavailableError", "APIConnectionError", "APIError", "InternalServerError"):
        return LLMUnavailable(str(e), details=exc_name, model=model)
    # Anything unrecognised is treated as a transient provider failure; only
    # bad requests, auth errors and invalid responses are fatal.
    return LLMUnavailable(str(e) or exc_name, details=exc_name, model=model)


def _request_to_kwargs(req: CompletionRequest, model: str, timeout_s: float) -> dict[str, Any]:
    """Build LiteLLM completion kwargs from CompletionRequest."""
    kwargs: dict[str, Any] = {
        "model": model,
        "messages": [m.model_dump() for m in req.messages()],
        "timeout": timeout_s,
    }
    if req.temperature is not None:
        kwargs["temperature"] = req.temperature
    if req.max_output_tokens is not None:
        kwargs["max_tokens"] = req.max_output_tokens
    if req.json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    return kwargs


def _response_from_completion(raw: Any, model: str, latency_ms: int) -> CompletionResponse:
    """Build CompletionResponse from a LiteLLM response object."""
    text = ""
    usage = None
    finish_reason = None
    if getattr(raw, "choices", None):
        c0 = raw.choices[0]
        msg = getattr(c0, "message", None)
        if msg is not None:
            text = getattr(msg, "content", None) or ""
        else:
            text = getattr(c0, "text", None) or ""
        finish_reason = getattr(c0, "finish_reason", None)
    if getattr(raw, "usage", None):
        u = raw.usage
        usage = LLMUsage(
            input_tokens=getattr(u, "prompt_tokens", 0) or 0,
            output_tokens=getattr(u, "completion_tokens", 0) or 0,
            total_tokens=getattr(u, "total_tokens", 0) or 0,
        )
    raw_dict: dict[str, Any] | None = raw.model_dump() if hasattr(raw, "model_dump") else None
    return CompletionResponse(
        text=text,
        model=model,
        latency_ms=latency_ms,
        usage=usage,
        finish_reason=finish_reason,
        raw=raw_dict,
    )


class LiteLLMClient:
    """Async LiteLLM wrapper implementing CompletionClientPort: semaphore, deadline, normalization."""

    def __init__(self, settings: LLMSettings | None = None) -> None:
        self._settings = settings or LLMSettings()
        # One semaphore per event loop: asyncio primitives cannot be shared across loops.
        self._sems: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Semaphore] = (
            weakref.WeakKeyDictionary()
        )

    @property
    def settings(self) -> LLMSettings:
        return self._settings

    def _semaphore(self) -> asyncio.Semaphore:
        loop = asyncio.get_running_loop()
        sem = self._sems.get(loop)
        if sem is None:
            sem = self._sems[loop] = asyncio.Semaphore(self._settings.concurrency_limit)
        return sem

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
        """Return generated text for one system+user exchange. Raises LLMError on failure."""
        req = CompletionRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            json_mode=json_mode,
            timeout_s=timeout_s,
        )
        resp = await self.acompletion(req)
        return resp.text

    async def acompletion(self, req: CompletionRequest) -> CompletionResponse:
        """Execute one completion under the semaphore and a hard deadline."""
        model = self._settings.model
        timeout = req.timeout_s or self._settings.default_timeout_s
        kwargs = _request_to_kwargs(req, model, timeout)
        if self._settings.drop_unsupported_params:
            kwargs["drop_params"] = True
        if self._settings.api_base is not None:
            kwargs["api_base"] = self._settings.api_base
        if self._settings.api_key is not None:
            kwargs["api_key"] = self._settings.api_key
        stage = req.metadata.get("stage")
        logger.debug("llm request prompt_sha256=%s", stable_hash(req.user_prompt))

        async with self._semaphore():
            t0 = time.perf_counter()
            try:
                # The provider may not honour its own timeout; cancel from our side.
                raw = await asyncio.wait_for(acompletion(**kwargs), timeout=timeout)
            except asyncio.TimeoutError:
                err: LLMError = LLMTimeout(
                    f"LLM request exceeded {timeout:.0f}s deadline", details="deadline", model=model
                )
                self._log_failure(err, model, t0, stage, req.json_mode)
                raise err
            except Exception as e:  # noqa: BLE001
                err = _map_exception(e, model)
                self._log_failure(err, model, t0, stage, req.json_mode)
                raise err from e
            latency_ms = int((time.perf_counter() - t0) * 1000)

        resp = _response_from_completion(raw, model, latency_ms)
        if not resp.text.strip():
            err = LLMEmptyResponse(model=model, details=resp.finish_reason)
            self._log_failure(err, model, t0, stage, req.json_mode)
            raise err
        log_llm_call(
            model=model,
            latency_ms=latency_ms,
            status="SUCCEEDED",
            stage=stage,
            json_mode=req.json_mode,
            input_tokens=resp.usage.input_tokens if resp.usage else None,
            output_tokens=resp.usage.output_tokens if resp.usage else None,
        )
        if self._settings.log_previews:
            logger.debug("llm response preview: %s", redact_preview(resp.text))
        return resp

    @staticmethod
    def _log_failure(err: LLMError, model: str, t0: float, stage: str | None, json_mode: bool) -> None:
        log_llm_call(
            model=model,
            latency_ms=int((time.perf_counter() - t0) * 1000),
            status="FAILED",
            stage=stage,
            json_mode=json_mode,
            error_code=err.code,
        )
