# nfc_raw/core/exceptions.py

"""Custom exceptions for the nfc_raw library."""

from typing import Optional

from nfc_raw.protocols.pn532 import constants as pn532_const


class NfcRawError(Exception):
    """Base exception class for all nfc_raw errors."""
    def __init__(self, message="An unspecified NFC error occurred."):
        super().__init__(message)


# --- Input Validation Exceptions ---

class OddLengthHexError(NfcRawError):
    """Raised when cleaned hex text has an odd number of digits."""
    def __init__(self, cleaned: str):
        super().__init__(
            f"Hex text has an odd number of digits ({len(cleaned)}). "
            f"Use pairs like: 48 65 6C 6C 6F"
        )
        self.cleaned = cleaned


class InvalidStartPageError(NfcRawError):
    """Raised when a write would target one of the reserved pages 0-3."""
    def __init__(self, start_page: int, first_user_page: int = 4):
        super().__init__(f"Start page must be >= {first_user_page}, got {start_page}.")
        self.start_page = start_page


class NotSupportedTagError(NfcRawError):
    """
    The presented tag does not expose plain paged memory
    (e.g. a MIFARE Classic or ISO-DEP card was found instead of an Ultralight).
    """
    def __init__(self, message="Tag is not a MIFARE Ultralight compatible tag."):
        super().__init__(message)


# --- Transport Layer Exceptions ---

class TransportError(NfcRawError):
    """
    Base exception for errors related to the tag session transport
    (Serial, Mock). It often wraps a lower-level exception.
    """
    def __init__(self, message="Transport layer error.", original_exception: Exception | None = None):
        """
        Args:
            message: A description of the transport error.
            original_exception: The underlying exception that caused this error (e.g., from pyserial).
        """
        super().__init__(message)
        self.original_exception = original_exception

    def __str__(self):
        base_msg = super().__str__()
        if self.original_exception:
            orig_exc_type = type(self.original_exception).__name__
            orig_exc_msg = str(self.original_exception)
            return f"{base_msg} Original exception: [{orig_exc_type}] {orig_exc_msg}"
        return base_msg


class ConnectionError(TransportError):
    """Exception raised when opening the reader or activating a tag fails."""
    def __init__(self, message="Failed to establish connection.", original_exception: Exception | None = None):
        super().__init__(message, original_exception)


class SerialConnectionError(ConnectionError):
    """
    Specific connection error related to the serial port of the reader.
    Common reasons include:
    - Port does not exist.
    - Insufficient permissions to access the port.
    - Port is already in use by another application.
    """
    def __init__(self, port: str | None = None, message="Serial connection error.", original_exception: Exception | None = None):
        msg = "Serial connection error"
        if port:
            msg += f" on port '{port}'"
        msg += f": {message}"
        super().__init__(msg, original_exception)
        self.port = port


class ReadError(TransportError):
    """Exception raised when reading a page block from the tag fails."""
    def __init__(self, message="Failed to read data from tag.", original_exception: Exception | None = None):
        super().__init__(message, original_exception)


class WriteError(TransportError):
    """Exception raised when writing a page to the tag fails."""
    def __init__(self, message="Failed to write data to tag.", original_exception: Exception | None = None):
        super().__init__(message, original_exception)


class TimeoutError(TransportError):
    """
    Exception raised when the reader does not acknowledge or answer a command
    in time. Usually the tag left the field or the reader is not responding.
    """
    def __init__(self, message="Operation timed out waiting for reader response."):
        super().__init__(message, original_exception=None)


class CommandError(TransportError):
    """
    Exception representing a non-zero status byte reported by the PN532
    for an InDataExchange with the tag (NAK, timeout, CRC error...).
    """
    def __init__(self, status_code: Optional[int] = None, message: Optional[str] = None):
        self.status_code = status_code
        self.error_message = "Unknown error"

        final_message: str
        if message:
            final_message = message
        elif status_code is not None:
            self.error_message = pn532_const.PN532_STATUS_MESSAGES.get(
                status_code & pn532_const.STATUS_ERROR_MASK,
                f"Unknown PN532 status code: 0x{status_code:02X}"
            )
            final_message = f"Reader Error (0x{status_code:02X}): {self.error_message}"
        else:
            final_message = "Command execution failed with unspecified error."

        super().__init__(final_message)


# --- Protocol Layer Exceptions ---

class ProtocolError(NfcRawError):
    """Exception related to reader frame building, parsing, or validation."""
    def __init__(self, message="Protocol error."):
        super().__init__(message)


class ChecksumError(ProtocolError):
    """Exception raised when a frame's length or data checksum does not match."""
    def __init__(self, calculated_checksum: int, received_checksum: int, frame: bytes):
        message = (
            f"Checksum mismatch. Calculated: 0x{calculated_checksum:02X}, "
            f"Received: 0x{received_checksum:02X}."
            f" Frame (hex): {frame[:32].hex(' ').upper()}{'...' if len(frame)>32 else ''}"
        )
        super().__init__(message)
        self.calculated_checksum = calculated_checksum
        self.received_checksum = received_checksum
        self.frame = frame


class FrameParseError(ProtocolError):
    """Exception raised during the parsing of a received frame's structure."""
    def __init__(self, message="Failed to parse frame structure.", frame_part: bytes | None = None):
        msg = f"Frame parsing error: {message}"
        if frame_part:
            msg += f" Near bytes: {frame_part[:32].hex(' ').upper()}{'...' if len(frame_part)>32 else ''}"
        super().__init__(msg)
        self.frame_part = frame_part
