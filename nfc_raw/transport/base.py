# nfc_raw/transport/base.py

from abc import ABC, abstractmethod
from typing import Any, Optional

from nfc_raw.utils.tag_utils import TagInfo


class BaseTagSession(ABC):
    """
    Abstract base class for a session with one paged-memory tag.

    A session is opened once per tag interaction, used for a sequence of
    block reads or page writes, then closed. Calls are synchronous; any
    timeout belongs to the concrete transport.
    """

    def __init__(self, connection_details: Optional[dict[str, Any]] = None):
        """
        Initializes the session base.

        Args:
            connection_details: A dictionary containing parameters needed to
                                reach the reader (e.g., {'port': '/dev/ttyUSB0', 'baudrate': 115200}
                                for a serial PN532).
        """
        self._connection_details = connection_details if connection_details is not None else {}
        self._connected = False
        self._tag_info: Optional[TagInfo] = None

    @abstractmethod
    def connect(self) -> None:
        """
        Opens the reader and activates the tag in the field.

        Raises:
            ConnectionError: If the reader cannot be opened.
            NotSupportedTagError: If the tag found has no plain paged memory.
        """

    @abstractmethod
    def close(self) -> None:
        """Releases the tag and the reader. Safe to call even if not connected."""

    @abstractmethod
    def read_block(self, address: int) -> bytes:
        """
        Reads the 4 pages (16 bytes) starting at `address`.

        Raises:
            TransportError: If not connected or the read fails.
        """

    @abstractmethod
    def write_page(self, address: int, data: bytes) -> None:
        """
        Writes one 4-byte page at `address`.

        Raises:
            TransportError: If not connected or the write fails.
        """

    def is_connected(self) -> bool:
        """Returns True if a tag is currently activated, False otherwise."""
        return self._connected

    @property
    def tag_info(self) -> Optional[TagInfo]:
        """UID and technology labels of the activated tag, None before connect()."""
        return self._tag_info

    @property
    def connection_details(self) -> dict[str, Any]:
        """Returns the connection details provided during initialization."""
        return self._connection_details

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
