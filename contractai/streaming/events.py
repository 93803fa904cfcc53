"""Progress Event models: a pydantic discriminated union on "type"."""
from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class StatusEvent(BaseModel):
    type: Literal["status"] = "status"
    message: str


class ProgressEvent(BaseModel):
    type: Literal["progress"] = "progress"
    message: str
    progress: float = Field(ge=0, le=100)


class CompleteEvent(BaseModel):
    type: Literal["complete"] = "complete"
    summary: str
    analysis: dict[str, Any]


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    message: str
    code: str | None = None


class PingEvent(BaseModel):
    type: Literal["ping"] = "ping"


StreamEvent = Annotated[
    Union[StatusEvent, ProgressEvent, CompleteEvent, ErrorEvent, PingEvent],
    Field(discriminator="type"),
]

TERMINAL_TYPES = frozenset({"complete", "error"})

_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)


def is_terminal(event: BaseModel) -> bool:
    return getattr(event, "type", None) in TERMINAL_TYPES


def event_from_dict(data: dict[str, Any]) -> StreamEvent:
    """Validate a decoded wire record back into its event model."""
    return _event_adapter.validate_python(data)
