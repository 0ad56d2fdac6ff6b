"""Line codec for the wire protocol.

Inbound lines are decoded from JSON; outbound messages are encoded as
compact single-line JSON and checked against the channel's buffer size.
"""

import json
from typing import Any, Optional, Union

from pydantic import BaseModel

from ..errors import EncodingOverflow, MalformedMessage


LINE_TERMINATORS = "\r\n"


def decode_line(raw: Union[str, bytes]) -> Any:
    """Decodes one inbound line.

    Args:
        raw: The line as received, with or without its terminator.

    Returns:
        The decoded JSON value, or None for a blank line.

    Raises:
        MalformedMessage: If the bytes are not UTF-8 or not valid JSON.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedMessage(f"Line is not valid UTF-8: {e}") from e

    text = raw.rstrip(LINE_TERMINATORS)
    if not text.strip():
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedMessage(f"Line is not valid JSON: {e.msg}") from e
    except (ValueError, RecursionError) as e:
        # Integer digit limit, or nesting deeper than the decoder allows.
        raise MalformedMessage(f"Line cannot be decoded: {e}") from e


def encode_message(message: BaseModel, max_bytes: Optional[int] = None) -> str:
    """Encodes a wire message as one compact JSON line (without newline).

    Args:
        message: The message model to encode. Unset optional fields are
            left out.
        max_bytes: Capacity of the outbound buffer, counting the newline
            the transport appends. None means unbounded.

    Returns:
        The encoded line.

    Raises:
        EncodingOverflow: If the line would not fit the buffer.
    """
    line = json.dumps(
        message.model_dump(mode="json", exclude_none=True),
        separators=(",", ":"),
        ensure_ascii=False,
    )
    if max_bytes is not None:
        size = len(line.encode("utf-8")) + 1
        if size > max_bytes:
            raise EncodingOverflow(size, max_bytes)
    return line
