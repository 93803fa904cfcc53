"""Newline-delimited JSON framing for the progress stream."""
from __future__ import annotations

import codecs
import json
from typing import Any

from pydantic import BaseModel

NDJSON_MEDIA_TYPE = "application/x-ndjson"


def encode_event(event: BaseModel) -> bytes:
    """One compact JSON record terminated by a newline."""
    return (event.model_dump_json(exclude_none=True) + "\n").encode("utf-8")


class NDJSONDecoder:
    """Incremental decoder: buffers partial reads and keeps a trailing partial line across feeds."""

    def __init__(self) -> None:
        self._buffer = ""
        # Multi-byte characters may be split across network reads.
        self._utf8 = codecs.getincrementaldecoder("utf-8")()

    def feed(self, data: bytes | str) -> list[dict[str, Any]]:
        if isinstance(data, bytes):
            data = self._utf8.decode(data)
        self._buffer += data
        *lines, self._buffer = self._buffer.split("\n")
        return [json.loads(line) for line in lines if line.strip()]

    @property
    def pending(self) -> str:
        """Unterminated tail, if any."""
        return self._buffer
