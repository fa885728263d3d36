from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class Turn(BaseModel):
    """One prior message in the conversation.

    Attributes:
        role: Who spoke, "user" or "assistant".
        content: The message text.
    """

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: The new user message, stripped of surrounding whitespace.
        history: Prior turns, oldest first.
    """

    message: str = ""
    history: list[Turn] = Field(default_factory=list)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: Any) -> str:
        """Coerce to text and strip whitespace before validation."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("history", mode="before")
    @classmethod
    def default_history(cls, v: Any) -> Any:
        """Anything other than a list counts as no history."""
        if isinstance(v, list):
            return v
        return []


class TextEvent(BaseModel):
    """An incremental fragment of the reply."""

    model_config = ConfigDict(extra="forbid")

    text: str


class ErrorEvent(BaseModel):
    """A failure reported inside an open stream."""

    model_config = ConfigDict(extra="forbid")

    error: str


class DoneEvent(BaseModel):
    """Explicit end-of-stream marker."""

    model_config = ConfigDict(extra="forbid")

    done: Literal[True]


StreamEvent = TextEvent | ErrorEvent | DoneEvent

_stream_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)


def parse_stream_event(data: Any) -> StreamEvent:
    """Validate a decoded JSON frame into exactly one event variant.

    Raises:
        pydantic.ValidationError: If the frame matches no variant.
    """
    return _stream_event_adapter.validate_python(data)


def encode_sse(event: StreamEvent) -> str:
    """Render an event as one SSE frame."""
    return f"data: {event.model_dump_json()}\n\n"


class HealthResponse(BaseModel):
    """Body of GET /health."""

    ok: bool
    model: str
