"""
Byte codec for the transport channel.

The remote session reserves all 256 byte values, so every logical byte maps
to exactly one raw octet in a binary WebSocket message and back again.
Nothing is ever re-encoded as multi-byte text.
"""

from typing import Iterable, Union

ByteSource = Union[bytes, bytearray, memoryview, str, Iterable[int]]


def encode(data: ByteSource) -> bytes:
    """
    Convert a sequence of byte values into a binary transport message.

    Args:
        data: Raw bytes, an iterable of ints in [0, 255], or a binary string
              whose code points are all below 256.

    Returns:
        The message payload, one octet per input value.

    Raises:
        ValueError: If any value falls outside [0, 255].
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)

    if isinstance(data, str):
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ValueError(
                f"Character {data[exc.start]!r} at index {exc.start} is not a byte value"
            ) from exc

    values = list(data)
    for index, value in enumerate(values):
        if not isinstance(value, int) or not 0 <= value <= 255:
            raise ValueError(f"Value {value!r} at index {index} is not a byte value")
    return bytes(values)


def decode(message: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Convert one inbound transport message into its byte values.

    Binary messages come back verbatim. A text message is surfaced as the
    UTF-8 octets it travelled as.
    """
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)
