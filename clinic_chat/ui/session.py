"""Client-side conversation state and reply stream consumption.

A ChatSession owns one transcript and runs one exchange at a time against
the relay's /chat endpoint. Rendering is delegated to a ChatView so the
same exchange logic drives the NiceGUI page and the tests.
"""

import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from clinic_chat.models.schemas import ErrorEvent, TextEvent, Turn, parse_stream_event
from clinic_chat.parsing.sse import FrameDecoder

logger = logging.getLogger(__name__)

NO_RESPONSE_MESSAGE = "No response received. Please restart the server and try again."
CONNECTION_FAILURE_MESSAGE = "Could not reach the server. Please try again."
ERROR_MESSAGE = "Sorry, something went wrong: {error}"


class ReplyBubble(Protocol):
    """The assistant bubble a reply streams into."""

    def render_markdown(self, text: str) -> None: ...

    def show_text(self, text: str) -> None: ...


class ChatView(Protocol):
    """Presentation hooks used during an exchange."""

    def show_user_message(self, text: str) -> None: ...

    def open_reply_bubble(self) -> ReplyBubble: ...

    def set_typing(self, visible: bool) -> None: ...

    def set_send_enabled(self, enabled: bool) -> None: ...


class ChatSession:
    """Transcript and single-flight exchange runner for one page visit."""

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.history: list[Turn] = []
        self.is_streaming: bool = False
        self._base_url = base_url
        self._transport = transport

    async def send(self, text: str, view: ChatView) -> bool:
        """Submit a message and stream the reply into the view.

        Args:
            text: Raw user input.
            view: Where the exchange is rendered.

        Returns:
            False if the submission was ignored (blank input or an exchange
            already in flight), True once the exchange has concluded.
        """
        text = text.strip()
        if not text or self.is_streaming:
            return False

        self.is_streaming = True
        view.show_user_message(text)
        view.set_send_enabled(False)
        view.set_typing(True)

        # The relay appends the new message itself, so send the prior turns only.
        history_to_send = [turn.model_dump() for turn in self.history]
        self.history.append(Turn(role="user", content=text))

        bubble = view.open_reply_bubble()
        accumulated = ""
        error_shown = False

        try:
            async with (
                httpx.AsyncClient(
                    base_url=self._base_url, transport=self._transport, timeout=None
                ) as client,
                client.stream(
                    "POST",
                    "/chat",
                    json={"message": text, "history": history_to_send},
                    headers={"Accept": "text/event-stream"},
                ) as response,
            ):
                decoder = FrameDecoder()
                async for chunk in response.aiter_bytes():
                    for frame in decoder.feed(chunk):
                        try:
                            event = parse_stream_event(frame)
                        except ValidationError:
                            logger.warning(f"Ignoring unexpected frame: {frame!r}")
                            continue

                        if isinstance(event, TextEvent) and event.text:
                            if not accumulated:
                                view.set_typing(False)
                            accumulated += event.text
                            bubble.render_markdown(accumulated)
                        elif isinstance(event, ErrorEvent):
                            logger.error(f"Reply stream error: {event.error}")
                            bubble.show_text(ERROR_MESSAGE.format(error=event.error))
                            error_shown = True

            if accumulated:
                self.history.append(Turn(role="assistant", content=accumulated))
            # An error already in the bubble stays; the no-response text
            # only replaces a bubble that never showed anything.
            elif not error_shown:
                bubble.show_text(NO_RESPONSE_MESSAGE)

        except httpx.HTTPError as e:
            logger.error(f"Chat request failed: {e}")
            bubble.show_text(CONNECTION_FAILURE_MESSAGE)

        finally:
            self.is_streaming = False
            view.set_typing(False)
            view.set_send_enabled(True)

        return True
