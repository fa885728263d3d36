"""Streaming relay between the chat endpoint and the Anthropic Messages API.

The provider streams SSE frames with a rich vocabulary. The relay reads them
through the shared FrameDecoder and re-emits only three event shapes:
text fragments, errors and an end marker. Every failure after the stream has
opened is turned into an error event followed by a done event, so the client
connection always terminates.
"""

import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from clinic_chat.audit import AuditLog
from clinic_chat.config import Settings
from clinic_chat.models.schemas import ChatRequest, DoneEvent, ErrorEvent, StreamEvent, TextEvent
from clinic_chat.parsing.sse import FrameDecoder
from clinic_chat.relay.prompts import build_system_prompt, load_clinic_data

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "No Anthropic API key configured. Add ANTHROPIC_API_KEY to .env."


def interpret_upstream_frame(frame: Any) -> list[StreamEvent]:
    """Map one provider frame to the events it produces.

    Only text deltas, message_stop and error frames matter; every other
    frame maps to nothing.
    """
    if not isinstance(frame, dict):
        return []

    frame_type = frame.get("type")

    if frame_type == "content_block_delta":
        delta = frame.get("delta")
        if not isinstance(delta, dict) or delta.get("type") != "text_delta":
            return []
        text = delta.get("text")
        if not isinstance(text, str):
            logger.warning(f"Ignoring text delta without text: {frame!r}")
            return []
        return [TextEvent(text=text)]

    if frame_type == "message_stop":
        return [DoneEvent(done=True)]

    if frame_type == "error":
        error = frame.get("error")
        message = ""
        if isinstance(error, dict):
            message = error.get("message") or ""
        if not message and error:
            message = json.dumps(error)
        message = message or "Stream error"
        logger.error(f"Upstream stream error: {message}")
        return [ErrorEvent(error=message), DoneEvent(done=True)]

    return []


class RelayService:
    """Forwards chat requests upstream and yields simplified stream events.

    Wraps the provider call with:
    - The clinic system prompt and output length cap
    - A scripted reply when no API key is configured
    - Best-effort logging of upstream failures
    """

    def __init__(
        self,
        settings: Settings,
        audit: AuditLog,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the relay.

        Args:
            settings: Relay configuration.
            audit: Sink for upstream failure records.
            transport: Optional httpx transport for the upstream client.
        """
        self._settings = settings
        self._audit = audit
        self._transport = transport
        self._system_prompt = build_system_prompt(load_clinic_data(settings.clinic_data_path))

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def build_payload(self, request: ChatRequest) -> dict[str, Any]:
        """Build the provider request body: prior turns plus the new message."""
        messages = [turn.model_dump() for turn in request.history]
        messages.append({"role": "user", "content": request.message})
        return {
            "model": self._settings.model,
            "system": self._system_prompt,
            "messages": messages,
            "max_tokens": self._settings.max_tokens,
            "stream": True,
        }

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self._settings.api_key,
            "anthropic-version": self._settings.api_version,
        }

    async def stream_events(self, request: ChatRequest) -> AsyncGenerator[StreamEvent]:
        """Stream reply events for a chat request.

        Args:
            request: Validated request with a non-empty message.

        Yields:
            TextEvent, ErrorEvent and DoneEvent in transmission order.
        """
        if not self._settings.has_api_key:
            yield TextEvent(text=MISSING_KEY_MESSAGE)
            yield DoneEvent(done=True)
            return

        try:
            async with (
                httpx.AsyncClient(
                    timeout=self._settings.upstream_timeout, transport=self._transport
                ) as client,
                client.stream(
                    "POST",
                    self._settings.api_url,
                    json=self.build_payload(request),
                    headers=self._headers(),
                ) as response,
            ):
                if not response.is_success:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    logger.error(f"Upstream returned {response.status_code}: {body}")
                    self._audit.record_upstream_status(response.status_code, body)
                    yield ErrorEvent(error=f"API error {response.status_code}: {body}")
                    yield DoneEvent(done=True)
                    return

                decoder = FrameDecoder()
                async for chunk in response.aiter_bytes():
                    for frame in decoder.feed(chunk):
                        for event in interpret_upstream_frame(frame):
                            yield event

        except Exception as e:
            logger.exception("Upstream request failed")
            self._audit.record_upstream_exception(e)
            yield ErrorEvent(error=str(e) or type(e).__name__)
            yield DoneEvent(done=True)
