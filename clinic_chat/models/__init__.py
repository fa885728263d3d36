"""Pydantic models for API requests, responses and stream events.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Turn: One prior message in the conversation
    - ChatRequest: Incoming chat request payload
    - TextEvent / ErrorEvent / DoneEvent: Frames of the reply stream
    - HealthResponse: Service health payload
"""

from clinic_chat.models.schemas import (
    ChatRequest,
    DoneEvent,
    ErrorEvent,
    HealthResponse,
    StreamEvent,
    TextEvent,
    Turn,
    encode_sse,
    parse_stream_event,
)

__all__ = [
    "ChatRequest",
    "DoneEvent",
    "ErrorEvent",
    "HealthResponse",
    "StreamEvent",
    "TextEvent",
    "Turn",
    "encode_sse",
    "parse_stream_event",
]
