# nfc_raw/codec/hex_codec.py

"""Conversion between user supplied hex text and payload bytes."""

import re

from nfc_raw.core.exceptions import OddLengthHexError

_NON_HEX = re.compile(r'[^0-9A-Fa-f]')


def parse_hex(text: str) -> bytes:
    """
    Parses free-form hex text into bytes.

    Every character outside [0-9A-Fa-f] is dropped first, so "48 65 6C",
    "48:65:6C" and "48-65-6c" all decode the same way. A '0x' prefix is not
    special-cased: its '0' stays a digit.

    Args:
        text: The text typed by the user.

    Returns:
        The decoded bytes. Text without any hex digit decodes to b''.

    Raises:
        OddLengthHexError: If the cleaned string has an odd number of digits.
    """
    cleaned = _NON_HEX.sub('', text)
    if not cleaned:
        return b''
    if len(cleaned) % 2 != 0:
        raise OddLengthHexError(cleaned)
    return bytes.fromhex(cleaned)


def encode_hex(data: bytes) -> str:
    """Uppercase hex, two characters per byte, no separators."""
    return data.hex().upper()


def encode_ascii(data: bytes) -> str:
    """Printable ASCII preview of `data`; bytes outside 32..126 become '.'."""
    return ''.join(chr(b) if 32 <= b <= 126 else '.' for b in data)
