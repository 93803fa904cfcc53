"""Bridge an async event stream onto a WSGI (sync) response body."""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Iterator

from pydantic import BaseModel

from contractai.streaming.ndjson import encode_event

logger = logging.getLogger(__name__)


def iter_ndjson(make_stream: Callable[[], AsyncIterator[BaseModel]]) -> Iterator[bytes]:
    """
    Drive the async generator on a private event loop, one event per WSGI chunk.
    The loop runs only while waiting for the next event, which is when the pipeline
    and ping tasks make progress. Closing this generator (client gone) cancels the pipeline,
    or, once the terminal event is out, waits for the pending save.
    """
    loop = asyncio.new_event_loop()
    stream = make_stream()
    try:
        while True:
            try:
                event = loop.run_until_complete(stream.__anext__())
            except StopAsyncIteration:
                break
            yield encode_event(event)
    finally:
        try:
            loop.run_until_complete(stream.aclose())
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.run_until_complete(loop.shutdown_default_executor())
        except Exception:  # noqa: BLE001
            logger.exception("error while closing progress stream")
        finally:
            loop.close()
