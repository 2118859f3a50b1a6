"""
Token Encoding Helpers
======================

Byte-level helpers shared by the signers:

- URL-safe base64 with the ``=`` padding stripped on encode and re-added on decode
- Plain concatenation of byte fields (callers insert separators themselves)
- Minimal big-endian encoding of unsigned 64-bit timestamps
"""

import base64
import binascii
import re
from typing import Union

from .error_handling import BadData

# Characters that may appear in an encoded signature or timestamp field
BASE64_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_="

_BASE64_FIELD = re.compile(rb"[A-Za-z0-9_-]*")

TIMESTAMP_WIDTH = 8

BytesLike = Union[str, bytes, bytearray, memoryview]


def want_bytes(value: BytesLike, encoding: str = "utf-8") -> bytes:
    """Return ``value`` as bytes, encoding text with ``encoding``."""
    if isinstance(value, str):
        return value.encode(encoding)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Expected str or bytes-like value, got {type(value).__name__}")


def bytes_combine(*parts: bytes) -> bytes:
    """Concatenate byte sequences in order."""
    return b"".join(parts)


def base64_encode(data: BytesLike) -> bytes:
    """URL-safe base64 encode ``data`` and strip all trailing ``=`` characters."""
    return base64.urlsafe_b64encode(want_bytes(data)).rstrip(b"=")


def base64_decode(data: BytesLike) -> bytes:
    """
    Decode URL-safe base64 produced by base64_encode.

    The input must be unpadded, as produced by base64_encode. It is padded
    back to a multiple of four before decoding; input whose length is already
    a multiple of four still gets a single ``=`` appended, which the decoder
    ignores. Tokens issued by older signers rely on this.

    Args:
        data: Encoded field without padding

    Returns:
        Decoded bytes

    Raises:
        BadData: If the input is not valid URL-safe base64
    """
    data = want_bytes(data)

    # Encoded fields never carry padding, so each field has exactly one form
    if b"=" in data:
        raise BadData("Unexpected base64 padding", {"length": len(data)})

    if _BASE64_FIELD.fullmatch(data) is None:
        raise BadData("Invalid base64-encoded data", {"length": len(data)})

    pad_len = -len(data) % 4 or 1

    try:
        decoded = base64.urlsafe_b64decode(data + b"=" * pad_len)
    except (binascii.Error, ValueError) as e:
        raise BadData("Invalid base64-encoded data", {"length": len(data)}) from e

    # Unused low bits in the last character must be zero
    if base64_encode(decoded) != data:
        raise BadData("Non-canonical base64-encoded data", {"length": len(data)})

    return decoded


def int_to_bytes(num: int) -> bytes:
    """
    Encode an unsigned 64-bit integer as minimal big-endian bytes.

    Leading zero bytes are stripped but at least one byte is kept, so ``0``
    encodes to ``b"\\x00"``.

    Raises:
        OverflowError: If ``num`` is negative or does not fit in 64 bits
    """
    return num.to_bytes(TIMESTAMP_WIDTH, "big", signed=False).lstrip(b"\x00") or b"\x00"


def bytes_to_int(data: bytes) -> int:
    """
    Decode big-endian bytes produced by int_to_bytes.

    The input is left-padded with zero bytes to exactly eight bytes before parsing.

    Raises:
        ValueError: If ``data`` is empty or longer than eight bytes
    """
    if not 0 < len(data) <= TIMESTAMP_WIDTH:
        raise ValueError(
            f"Expected 1 to {TIMESTAMP_WIDTH} bytes, got {len(data)}"
        )
    return int.from_bytes(data.rjust(TIMESTAMP_WIDTH, b"\x00"), "big", signed=False)
