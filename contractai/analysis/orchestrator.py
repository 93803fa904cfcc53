"""
ContractAnalyzer: chunk -> summarize each chunk (retry) -> combine -> condense if needed
-> final JSON analysis -> validate -> complete -> best-effort persist.

stream() runs the pipeline in its own task and yields progress events from a ProgressEmitter;
every failure inside the pipeline becomes exactly one error event.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable

from pydantic import BaseModel

from contractai.analysis.chunking import join_chunks, split_into_chunks
from contractai.analysis.contracts import ContractSinkPort
from contractai.analysis.errors import (
    AnalysisError,
    AnalysisTimeoutError,
    CapabilityNotConfiguredError,
    ChunkFailedError,
    InvalidInputError,
)
from contractai.analysis.prompts import analysis_messages, chunk_messages, condense_messages
from contractai.analysis.retry import RetryPolicy, Sleep, classify_error, pace, with_retry
from contractai.analysis.schema import AnalysisResult, analysis_to_dict, parse_analysis
from contractai.analysis.settings import AnalysisSettings
from contractai.analysis.tokens import estimate_tokens
from contractai.db.schemas.contract import ContractCreate
from contractai.extraction.models import Document
from contractai.llm.errors import ErrorClass, LLMError
from contractai.llm.ports import CompletionClientPort
from contractai.llm.settings import LLMSettings
from contractai.streaming.emitter import ProgressEmitter
from contractai.streaming.events import is_terminal

logger = logging.getLogger(__name__)


@dataclass
class AnalysisOutcome:
    """Result of one successful pipeline run."""

    summary: str
    analysis: AnalysisResult
    chunk_count: int
    condensed: bool = False
    chunk_summaries: list[str] = field(default_factory=list)

    def analysis_dict(self) -> dict[str, Any]:
        return analysis_to_dict(self.analysis)


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _error_code(exc: BaseException) -> str:
    if isinstance(exc, (AnalysisError, LLMError)):
        return exc.code
    return "UNKNOWN"


class ContractAnalyzer:
    """Drives the large-document analysis pipeline. One instance may serve many requests."""

    def __init__(
        self,
        client: CompletionClientPort,
        settings: AnalysisSettings | None = None,
        *,
        llm_settings: LLMSettings | None = None,
        sink: ContractSinkPort | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._settings = settings or AnalysisSettings()
        self._llm_settings = llm_settings
        self._sink = sink
        self._sleep = sleep
        self._policy = RetryPolicy(
            backoff_base_s=self._settings.backoff_base_s,
            backoff_max_s=self._settings.backoff_max_s,
            rate_limit_cooldown_s=self._settings.rate_limit_cooldown_s,
        )

    @property
    def settings(self) -> AnalysisSettings:
        return self._settings

    def validate(self, document: Document) -> None:
        """Fail fast, before any model call. Raises InvalidInputError."""
        if self._llm_settings is not None and not self._llm_settings.is_configured:
            raise CapabilityNotConfiguredError()
        if document is None or not (document.content or "").strip():
            raise InvalidInputError("No content provided")

    async def stream(self, document: Document, *, user_id: str | None = None) -> AsyncIterator[BaseModel]:
        """
        Lazy, finite, non-restartable sequence of progress events ending in complete or error.

        The terminal `complete` event is yielded before the result is saved, so the
        consumer sees it without waiting on the sink. The stream ends only once that
        best-effort save has finished or failed; closing the stream after `complete`
        also waits for it. Closing earlier cancels the pipeline.
        """
        emitter = ProgressEmitter(ping_interval_s=self._settings.ping_interval_s)
        task = asyncio.create_task(self._drive(document, emitter, user_id), name="contract-analysis")
        terminal = False
        try:
            async for event in emitter:
                terminal = is_terminal(event)
                yield event
            await task
        finally:
            if terminal and not task.done():
                # Only the save remains; let it finish.
                await task
            elif not task.done():
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task

    async def run(self, document: Document, *, user_id: str | None = None) -> AnalysisOutcome:
        """Run without streaming. Raises the typed error instead of emitting it."""
        outcome = await self._with_budget(self._pipeline(document, None))
        await self._persist(document, outcome, user_id)
        return outcome

    async def _drive(self, document: Document, emitter: ProgressEmitter, user_id: str | None) -> None:
        outcome: AnalysisOutcome | None = None
        async with emitter:
            try:
                outcome = await self._with_budget(self._pipeline(document, emitter))
            except (AnalysisError, LLMError) as e:
                logger.warning("analysis of %r failed: %s (%s)", document.name, e, _error_code(e))
                await emitter.error(_error_message(e), code=_error_code(e))
            except Exception as e:  # noqa: BLE001
                logger.exception("analysis of %r failed unexpectedly", document.name)
                await emitter.error(_error_message(e), code=_error_code(e))
            else:
                await emitter.complete(outcome.summary, outcome.analysis_dict())
        if outcome is not None:
            await self._persist(document, outcome, user_id)

    async def _with_budget(self, pipeline: Awaitable[AnalysisOutcome]) -> AnalysisOutcome:
        """Overall wall-clock budget. Distinct from per-call deadlines (those surface as LLMTimeout)."""
        budget = self._settings.request_budget_s
        task = asyncio.ensure_future(pipeline)
        try:
            done, _ = await asyncio.wait({task}, timeout=budget)
            if not done:
                raise AnalysisTimeoutError(budget)
            return task.result()
        finally:
            if not task.done():
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task

    async def _pipeline(self, document: Document, emitter: ProgressEmitter | None) -> AnalysisOutcome:
        s = self._settings
        self.validate(document)

        chunks = split_into_chunks(document.content, s.chunk_max_tokens)
        if not chunks:
            raise InvalidInputError("No content provided")
        logger.info("analyzing %r: %d chars, %d chunk(s)", document.name, len(document.content), len(chunks))
        await self._status(emitter, f"Processing {_plural(len(chunks), 'chunk')}...")

        summaries = await self._summarize_chunks(chunks, emitter)
        combined = join_chunks(summaries)
        final_summary, condensed = await self._condense_if_needed(combined, emitter)

        logger.info("generating final analysis (%d estimated tokens)", estimate_tokens(final_summary))
        analysis = await self._final_analysis(final_summary)
        return AnalysisOutcome(
            summary=final_summary,
            analysis=analysis,
            chunk_count=len(chunks),
            condensed=condensed,
            chunk_summaries=summaries,
        )

    async def _summarize_chunks(self, chunks: list[str], emitter: ProgressEmitter | None) -> list[str]:
        total = len(chunks)
        summaries: list[str] = []
        for i, chunk in enumerate(chunks, start=1):
            summaries.append(await self._summarize_one(chunk, i, total, emitter))
            await self._progress(emitter, f"Processed chunk {i} of {total}", round(i / total * 100, 1))
            if i < total:
                await pace(self._settings.inter_call_delay_s, self._sleep)
        return summaries

    async def _summarize_one(self, chunk: str, index: int, total: int, emitter: ProgressEmitter | None) -> str:
        """Bounded per-chunk rounds on top of the retry controller; fatal errors end the request."""
        s = self._settings
        system, user = chunk_messages(chunk, index, total)
        last_error: Exception | None = None
        for attempt in range(1, s.max_chunk_attempts + 1):
            try:
                return await self._call(
                    system,
                    user,
                    max_output_tokens=s.chunk_summary_max_tokens,
                    temperature=s.summary_temperature,
                    timeout_s=s.call_timeout_s,
                    label=f"chunk {index}/{total}",
                )
            except Exception as e:  # noqa: BLE001
                if classify_error(e) == ErrorClass.FATAL:
                    raise
                last_error = e
                logger.warning("chunk %d/%d round %d/%d failed: %s", index, total, attempt, s.max_chunk_attempts, e)
                if attempt < s.max_chunk_attempts:
                    await self._status(emitter, f"Retrying chunk {index}...")
                    await pace(s.chunk_retry_delay_s, self._sleep)
        raise ChunkFailedError(index, total, s.max_chunk_attempts) from last_error

    async def _condense_if_needed(self, combined: str, emitter: ProgressEmitter | None) -> tuple[str, bool]:
        s = self._settings
        summary = combined
        passes = 0
        while estimate_tokens(summary) > s.condense_threshold_tokens and passes < s.max_condense_passes:
            passes += 1
            pieces = split_into_chunks(summary, s.condense_chunk_tokens)
            await self._status(emitter, f"Condensing summaries ({_plural(len(pieces), 'part')})...")
            condensed: list[str] = []
            for j, piece in enumerate(pieces, start=1):
                system, user = condense_messages(piece)
                condensed.append(
                    await self._call(
                        system,
                        user,
                        max_output_tokens=s.condense_max_tokens,
                        temperature=s.summary_temperature,
                        timeout_s=s.call_timeout_s,
                        label=f"condense {j}/{len(pieces)}",
                    )
                )
                if j < len(pieces):
                    await pace(s.inter_call_delay_s, self._sleep)
            summary = join_chunks(condensed)
            logger.info("condensation pass %d: %d -> %d estimated tokens", passes, estimate_tokens(combined), estimate_tokens(summary))
        return summary, passes > 0

    async def _final_analysis(self, summary: str) -> AnalysisResult:
        s = self._settings
        system, user = analysis_messages(summary, s.analysis_variant)
        raw = await self._call(
            system,
            user,
            max_output_tokens=s.analysis_max_tokens,
            temperature=s.analysis_temperature,
            json_mode=True,
            timeout_s=s.analysis_timeout_s,
            label="final analysis",
        )
        # Shape errors are fatal: the caller is told to retry rather than wait.
        return parse_analysis(raw, s.analysis_variant)

    async def _call(
        self,
        system: str,
        user: str,
        *,
        max_output_tokens: int,
        temperature: float,
        timeout_s: float,
        json_mode: bool = False,
        label: str,
    ) -> str:
        return await with_retry(
            lambda: self._client.complete(
                system,
                user,
                max_output_tokens=max_output_tokens,
                temperature=temperature,
                json_mode=json_mode,
                timeout_s=timeout_s,
            ),
            max_attempts=self._settings.max_attempts,
            policy=self._policy,
            sleep=self._sleep,
            label=label,
        )

    async def _persist(self, document: Document, outcome: AnalysisOutcome, user_id: str | None) -> None:
        """Best-effort: the caller already has its result, so failures are logged only."""
        if self._sink is None:
            return
        record = ContractCreate(
            user_id=user_id,
            name=document.name,
            file_type=document.mime_type,
            content=document.content,
            summary=outcome.summary,
            analysis=outcome.analysis_dict(),
        )
        try:
            contract_id = await self._sink.save_contract(record)
        except Exception:  # noqa: BLE001
            logger.exception("failed to persist analysis of %r", document.name)
            return
        logger.info("persisted analysis of %r as contract %s", document.name, contract_id)

    @staticmethod
    async def _status(emitter: ProgressEmitter | None, message: str) -> None:
        if emitter is not None:
            await emitter.status(message)

    @staticmethod
    async def _progress(emitter: ProgressEmitter | None, message: str, percent: float) -> None:
        if emitter is not None:
            await emitter.progress(message, percent)
