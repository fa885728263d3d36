"""Stream parsing utilities shared by the relay and the chat page.

Responsibilities:
    - Incremental UTF-8 decoding of network reads
    - Splitting on line boundaries while holding back partial lines
    - Decoding `data:` lines into JSON frames

A malformed frame never ends a stream; it is logged and dropped.
"""

from clinic_chat.parsing.sse import FrameDecoder, FrameParseError, decode_line

__all__ = ["FrameDecoder", "FrameParseError", "decode_line"]
