# nfc_raw/protocols/framing.py

from typing import Tuple

from nfc_raw.protocols.pn532 import constants as pn532_const
from nfc_raw.core.exceptions import FrameParseError, ChecksumError

# --- Checksum Calculation ---

def calculate_checksum(data: bytes) -> int:
    """
    Calculates a PN532 checksum byte.

    Used both for LCS (over the LEN byte) and DCS (over TFI + data): the
    checksum is the byte that makes the sum of the covered bytes and itself
    equal to 0x00 modulo 256.

    Args:
        data: The covered bytes.

    Returns:
        The checksum byte (as an integer 0-255).
    """
    return (-sum(data)) & 0xFF

# --- Frame Building ---

def build_frame(command: int, params: bytes = b'') -> bytes:
    """
    Constructs a PN532 normal information frame (host to PN532).

    Layout: 00 00 FF LEN LCS D4 CMD PARAMS... DCS 00

    Args:
        command: The PN532 command code.
        params: The command parameters. Defaults to empty bytes.

    Returns:
        The complete frame.

    Raises:
        ValueError: If the command code or the payload length is out of range.
    """
    if not (0x00 <= command <= 0xFF):
        raise ValueError(f"Invalid command: {command}. Must be between 0x00 and 0xFF.")

    data = bytes([pn532_const.TFI_HOST_TO_PN532, command]) + bytes(params)
    if len(data) > 0xFF:
        # Extended information frames are not needed for page sized exchanges
        raise ValueError(f"Frame data length {len(data)} exceeds normal frame maximum (255 bytes).")

    length = len(data)
    return (
        pn532_const.FRAME_START
        + bytes([length, calculate_checksum(bytes([length]))])
        + data
        + bytes([calculate_checksum(data), pn532_const.POSTAMBLE])
    )

# --- Frame Parsing ---

def is_ack(data: bytes) -> bool:
    return data == pn532_const.ACK_FRAME


def parse_frame(data: bytes) -> Tuple[int, bytes, int, int]:
    """
    Parses the first normal information frame found in `data`.

    Args:
        data: Raw bytes received from the PN532, possibly with leading junk.

    Returns:
        Tuple (tfi, payload, consumed_length, start_index) where `payload` is
        everything after the TFI byte (response code first).

    Raises:
        FrameParseError: If no complete frame can be found.
        ChecksumError: If LCS or DCS do not match.
    """
    if not data or len(data) < pn532_const.MIN_FRAME_LENGTH:
        raise FrameParseError(
            f"Data length {len(data)} is less than minimum frame length {pn532_const.MIN_FRAME_LENGTH}.",
            frame_part=data
        )

    start_index = data.find(pn532_const.FRAME_START)
    if start_index == -1:
        raise FrameParseError("Frame start '00 00 FF' not found.", frame_part=data)

    header_end = start_index + len(pn532_const.FRAME_START) + pn532_const.LENGTH_FIELD_LENGTH
    if len(data) < header_end:
        raise FrameParseError(
            f"Insufficient data after frame start found at index {start_index}.",
            frame_part=data[start_index:]
        )

    # ACK (LEN 00, LCS FF) and NACK (LEN FF, LCS 00) break the LCS rule
    length = data[header_end - 2]
    length_checksum = data[header_end - 1]
    if length == 0 or (length, length_checksum) == (0xFF, 0x00):
        raise FrameParseError("Frame carries no data (ACK/NACK where a response was expected).", frame_part=data[start_index:])
    if (length + length_checksum) & 0xFF != 0:
        raise ChecksumError(calculate_checksum(bytes([length])), length_checksum, data[start_index:header_end])

    total_length = header_end - start_index + length + pn532_const.CHECKSUM_LENGTH + 1
    if len(data) < start_index + total_length:
        raise FrameParseError(
            f"Incomplete frame. Declared length {length} requires {total_length} bytes, "
            f"but only {len(data) - start_index} bytes available after frame start.",
            frame_part=data[start_index:]
        )

    body = data[header_end:header_end + length]
    received_checksum = data[header_end + length]
    calculated_checksum = calculate_checksum(body)
    if calculated_checksum != received_checksum:
        raise ChecksumError(calculated_checksum, received_checksum, data[start_index:start_index + total_length])

    return body[0], bytes(body[1:]), total_length, start_index
