"""Builders for simulated provider streams."""

import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx

from clinic_chat.parsing.sse import FrameDecoder

MESSAGE_START = {"type": "message_start", "message": {"id": "msg_test", "role": "assistant"}}
MESSAGE_STOP = {"type": "message_stop"}
PING = {"type": "ping"}


def text_delta(text: str) -> dict[str, Any]:
    return {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}}


def provider_stream(*frames: dict[str, Any]) -> bytes:
    """Encode frames the way the provider does: event line, data line, blank line."""
    return "".join(
        f"event: {frame['type']}\ndata: {json.dumps(frame)}\n\n" for frame in frames
    ).encode()


async def in_chunks(data: bytes, size: int) -> AsyncIterator[bytes]:
    for start in range(0, len(data), size):
        yield data[start : start + size]


class FakeProvider:
    """MockTransport handler that records requests and replays a canned reply."""

    def __init__(
        self,
        body: bytes | Callable[[], AsyncIterator[bytes]] = b"",
        status_code: int = 200,
        error: Exception | None = None,
    ) -> None:
        self.body = body
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        content = self.body() if callable(self.body) else self.body
        return httpx.Response(
            self.status_code,
            content=content,
            headers={"content-type": "text/event-stream"},
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def decode_frames(body: bytes) -> list[Any]:
    return FrameDecoder().feed(body)
