"""Relay between the chat endpoint and the upstream LLM provider.

Responsibilities:
    - Building the provider request from history and the new message
    - Injecting the clinic system prompt
    - Re-framing the provider's event stream into text/error/done events
    - Turning every failure into a terminal error event

Maintains clean separation from the HTTP layer.
"""

from clinic_chat.relay.chat_relay import MISSING_KEY_MESSAGE, RelayService, interpret_upstream_frame

__all__ = ["MISSING_KEY_MESSAGE", "RelayService", "interpret_upstream_frame"]
