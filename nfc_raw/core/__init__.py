"""Core components of the nfc_raw library."""

from .exceptions import (
    NfcRawError,
    OddLengthHexError,
    InvalidStartPageError,
    NotSupportedTagError,
    TransportError,
    ReadError,
    WriteError,
    CommandError,
    ProtocolError
)
from .status import ConnectionStatus
from .request import RawReadRequest, RawWriteRequest, byte_info
from .raw_tag import RawTagClient, RawReadResult, RawWriteResult

__all__ = [
    'RawTagClient',
    'RawReadResult',
    'RawWriteResult',
    'RawReadRequest',
    'RawWriteRequest',
    'byte_info',
    'ConnectionStatus',
    'NfcRawError',
    'OddLengthHexError',
    'InvalidStartPageError',
    'NotSupportedTagError',
    'TransportError',
    'ReadError',
    'WriteError',
    'CommandError',
    'ProtocolError'
]
