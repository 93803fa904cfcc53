"""NDJSON framing and event model validation."""
import pytest
from pydantic import ValidationError

from contractai.streaming.events import (
    CompleteEvent,
    ErrorEvent,
    PingEvent,
    ProgressEvent,
    StatusEvent,
    event_from_dict,
    is_terminal,
)
from contractai.streaming.ndjson import NDJSONDecoder, encode_event


def test_encode_event_is_one_compact_line() -> None:
    assert encode_event(StatusEvent(message="Processing 3 chunks...")) == (
        b'{"type":"status","message":"Processing 3 chunks..."}\n'
    )
    assert encode_event(PingEvent()) == b'{"type":"ping"}\n'


def test_error_code_omitted_when_absent() -> None:
    assert encode_event(ErrorEvent(message="boom")) == b'{"type":"error","message":"boom"}\n'


def test_error_code_included_when_set() -> None:
    assert encode_event(ErrorEvent(message="Failed to process chunk 2 of 3", code="CHUNK_FAILED")) == (
        b'{"type":"error","message":"Failed to process chunk 2 of 3","code":"CHUNK_FAILED"}\n'
    )


def test_progress_bounds() -> None:
    with pytest.raises(ValidationError):
        ProgressEvent(message="bad", progress=100.5)


def test_terminal_types() -> None:
    assert is_terminal(CompleteEvent(summary="s", analysis={}))
    assert is_terminal(ErrorEvent(message="e"))
    assert not is_terminal(PingEvent())
    assert not is_terminal(StatusEvent(message="m"))


def test_decoder_handles_split_lines_and_multibyte_chars() -> None:
    wire = encode_event(StatusEvent(message="Bearbeitung läuft")) + encode_event(
        ProgressEvent(message="Processed chunk 1 of 1", progress=100.0)
    )
    cut = wire.index("ä".encode("utf-8")) + 1  # inside the two-byte sequence
    decoder = NDJSONDecoder()

    assert decoder.feed(wire[:cut]) == []
    assert decoder.pending.startswith('{"type":"status"')
    records = decoder.feed(wire[cut:])
    assert [r["type"] for r in records] == ["status", "progress"]
    assert records[0]["message"] == "Bearbeitung läuft"
    assert decoder.pending == ""


def test_event_from_dict_dispatches_on_type() -> None:
    event = event_from_dict({"type": "progress", "message": "m", "progress": 33.3})
    assert isinstance(event, ProgressEvent)
    assert event.progress == 33.3
    with pytest.raises(ValidationError):
        event_from_dict({"type": "unknown"})
