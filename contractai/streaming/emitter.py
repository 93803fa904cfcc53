"""
Progress Stream Emitter: single-writer FIFO channel of progress events plus a keep-alive ping task.

Guarantees:
  - emits are serialized by one lock (pipeline task and ping task share the channel);
  - exactly one terminal event (complete or error); nothing, pings included, after it;
  - the channel is closed exactly once on every exit path of ``async with``.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Any, AsyncIterator

from pydantic import BaseModel

from contractai.streaming.events import (
    CompleteEvent,
    ErrorEvent,
    PingEvent,
    ProgressEvent,
    StatusEvent,
    is_terminal,
)

logger = logging.getLogger(__name__)

_CLOSED = object()


class StreamClosedError(RuntimeError):
    """Emit attempted after the terminal event."""


class ProgressEmitter:
    """Async context manager and async iterable of events."""

    def __init__(self, ping_interval_s: float = 5.0) -> None:
        self._ping_interval_s = ping_interval_s
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._lock = asyncio.Lock()
        self._ping_task: asyncio.Task | None = None
        self._terminal = False
        self._closed = False
        self._drained = False

    @property
    def terminated(self) -> bool:
        return self._terminal

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "ProgressEmitter":
        if self._ping_task is None and not self._closed:
            self._ping_task = asyncio.create_task(self._ping_loop(), name="progress-ping")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if not self._terminal:
            if exc is not None:
                logger.error("stream body failed before a terminal event: %r", exc)
                self._finish(ErrorEvent(message=str(exc) or "Unknown error"))
            else:
                self._finish(ErrorEvent(message="Stream ended without a result"))
        await self.close()
        return False

    async def _ping_loop(self) -> None:
        while True:
            await asyncio.sleep(self._ping_interval_s)
            async with self._lock:
                if self._terminal:
                    return
                self._queue.put_nowait(PingEvent())

    def _finish(self, event: BaseModel) -> None:
        self._queue.put_nowait(event)
        self._terminal = True

    async def emit(self, event: BaseModel) -> None:
        """Queue one event. A complete/error event stops pings and closes the channel."""
        async with self._lock:
            if self._terminal:
                raise StreamClosedError(f"cannot emit {getattr(event, 'type', event)!r} after terminal event")
            if is_terminal(event):
                self._finish(event)
            else:
                self._queue.put_nowait(event)
        if self._terminal:
            await self.close()

    async def status(self, message: str) -> None:
        await self.emit(StatusEvent(message=message))

    async def progress(self, message: str, percent: float) -> None:
        await self.emit(ProgressEvent(message=message, progress=percent))

    async def complete(self, summary: str, analysis: dict[str, Any]) -> None:
        await self.emit(CompleteEvent(summary=summary, analysis=analysis))

    async def error(self, message: str, code: str | None = None) -> None:
        await self.emit(ErrorEvent(message=message, code=code))

    async def close(self) -> None:
        """Stop pings and end iteration. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._terminal = True
        task = self._ping_task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[BaseModel]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[BaseModel]:
        # Non-restartable: once the close marker is consumed iteration ends immediately.
        while not self._drained:
            item = await self._queue.get()
            if item is _CLOSED:
                self._drained = True
                return
            yield item
