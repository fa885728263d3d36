"""Line-buffered decoding of server-sent event streams.

Used on both ends of the relay: the server decodes the provider's stream
and the chat page decodes the relay's stream with the same code.
"""

import codecs
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

# Constants
DATA_PREFIX = "data: "
END_MARKER = "[DONE]"


class FrameParseError(ValueError):
    """Raised when a data line does not carry valid JSON."""

    pass


def decode_line(line: str) -> Any | None:
    """Decode one complete SSE line.

    Args:
        line: A single line without its trailing newline.

    Returns:
        The decoded JSON payload, or None for lines that carry no frame
        (comments, other fields, empty payloads, the end marker).

    Raises:
        FrameParseError: If the payload is not valid JSON.
    """
    if not line.startswith(DATA_PREFIX):
        return None

    raw = line[len(DATA_PREFIX) :].strip()
    if not raw or raw == END_MARKER:
        return None

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise FrameParseError(f"Malformed frame payload: {raw!r}") from e


class FrameDecoder:
    """Incremental decoder turning stream reads into JSON frames.

    Bytes are decoded as UTF-8 across read boundaries, split on newlines,
    and every complete line is decoded. The trailing partial line stays
    buffered until the next read completes it.
    """

    def __init__(self) -> None:
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline."""
        return self._buffer

    def feed(self, chunk: bytes | str) -> list[Any]:
        """Append one read and return the frames it completed.

        Malformed payloads are logged and skipped.
        """
        if isinstance(chunk, bytes):
            chunk = self._text.decode(chunk)
        self._buffer += chunk

        *lines, self._buffer = self._buffer.split("\n")

        frames: list[Any] = []
        for line in lines:
            try:
                payload = decode_line(line)
            except FrameParseError as e:
                logger.warning(f"Skipping frame: {e}")
                continue
            if payload is not None:
                frames.append(payload)
        return frames
