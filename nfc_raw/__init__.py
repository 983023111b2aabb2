"""nfc_raw - RAW page access to Ultralight-class NFC tags."""

from .core import (
    RawTagClient,
    RawReadRequest,
    RawWriteRequest,
    ConnectionStatus,
    NfcRawError,
    OddLengthHexError,
    InvalidStartPageError,
    NotSupportedTagError,
    TransportError
)
from .codec import (
    parse_hex,
    encode_hex,
    encode_ascii,
    pages_needed,
    effective_page_count,
    compose,
    assemble,
    TagDump,
    format_hex,
    format_ascii
)
from .transport import (
    BaseTagSession,
    MockTagSession,
    Pn532SerialSession
)
from .utils.tag_utils import TagInfo

__version__ = '0.1.0'

__all__ = [
    # Client
    'RawTagClient',
    'RawReadRequest',
    'RawWriteRequest',
    'ConnectionStatus',
    # Exceptions
    'NfcRawError',
    'OddLengthHexError',
    'InvalidStartPageError',
    'NotSupportedTagError',
    'TransportError',
    # Codec
    'parse_hex',
    'encode_hex',
    'encode_ascii',
    'pages_needed',
    'effective_page_count',
    'compose',
    'assemble',
    'TagDump',
    'format_hex',
    'format_ascii',
    # Sessions
    'BaseTagSession',
    'MockTagSession',
    'Pn532SerialSession',
    'TagInfo',
]
