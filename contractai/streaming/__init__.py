"""Progress stream: event models, NDJSON framing and the emitter."""
from contractai.streaming.emitter import ProgressEmitter, StreamClosedError
from contractai.streaming.events import (
    CompleteEvent,
    ErrorEvent,
    PingEvent,
    ProgressEvent,
    StatusEvent,
    StreamEvent,
    event_from_dict,
    is_terminal,
)
from contractai.streaming.ndjson import NDJSON_MEDIA_TYPE, NDJSONDecoder, encode_event

__all__ = [
    "ProgressEmitter",
    "StreamClosedError",
    "StreamEvent",
    "StatusEvent",
    "ProgressEvent",
    "CompleteEvent",
    "ErrorEvent",
    "PingEvent",
    "event_from_dict",
    "is_terminal",
    "NDJSON_MEDIA_TYPE",
    "NDJSONDecoder",
    "encode_event",
]
