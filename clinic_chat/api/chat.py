"""Chat endpoint streaming relay events as server-sent events.

Validation failures are answered synchronously; once the stream is open,
every outcome is reported in-band and the HTTP status stays 200.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response, StreamingResponse

from clinic_chat.audit import AuditLog
from clinic_chat.models.schemas import ChatRequest, StreamEvent, encode_sse
from clinic_chat.relay.chat_relay import RelayService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def get_relay_service(request: Request) -> RelayService:
    return request.app.state.relay


def get_audit_log(request: Request) -> AuditLog:
    return request.app.state.audit


async def _sse_frames(events: AsyncIterator[StreamEvent]) -> AsyncGenerator[str]:
    async for event in events:
        yield encode_sse(event)


@router.post("/chat")
async def chat(
    payload: ChatRequest,
    relay: RelayService = Depends(get_relay_service),
    audit: AuditLog = Depends(get_audit_log),
) -> Response:
    """Relay a message and prior turns to the model, streaming the reply.

    Args:
        payload: The new message and the conversation so far.

    Returns:
        400 with {"error": "Empty message"} for a blank message, otherwise
        a text/event-stream of `data: <json>` frames.
    """
    if not payload.message:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Empty message"},
        )

    audit.record_request(payload.message)
    logger.info(f"Chat request with {len(payload.history)} prior turns")

    return StreamingResponse(
        _sse_frames(relay.stream_events(payload)),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
