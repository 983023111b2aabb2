# nfc_raw/transport/mock.py

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from nfc_raw.codec.page_math import PAGE_SIZE, PAGES_PER_READ
from nfc_raw.core.exceptions import NotSupportedTagError, ReadError, TransportError, WriteError
from nfc_raw.transport.base import BaseTagSession
from nfc_raw.utils.tag_utils import TagInfo, ULTRALIGHT_TECH_LIST

logger = logging.getLogger(__name__)

NTAG213_TOTAL_PAGES = 45
DEFAULT_UID = bytes.fromhex("04A22B1A3C5D80")
# Capability container of a blank NTAG213
DEFAULT_CC_PAGE = bytes.fromhex("E1101200")


class MockTagSession(BaseTagSession):
    """
    A mock tag session for testing and simulation.

    Holds an in-memory page image of an Ultralight-class tag. READ rolls over
    to page 0 past the last page, like the real tag does. Every call is logged
    so tests can inspect the exact access pattern, and failures can be
    injected per page address.
    """

    def __init__(
        self,
        connection_details: Optional[Dict[str, Any]] = None,
        name: str = "Mock",
        total_pages: int = NTAG213_TOTAL_PAGES,
        uid: bytes = DEFAULT_UID,
        tech_list: Optional[List[str]] = None,
        supported: bool = True,
    ):
        """
        Initializes the Mock session.

        Args:
            connection_details: Not used but kept for interface compatibility.
            name: A name for this mock instance for logging purposes.
            total_pages: Size of the simulated tag memory in pages.
            uid: UID reported once connected.
            tech_list: Technology labels reported once connected.
            supported: False simulates a tag without paged memory; connect() then fails.
        """
        super().__init__(connection_details)
        self._name = name
        self._total_pages = total_pages
        self._uid = uid
        self._tech_list = list(tech_list) if tech_list is not None else list(ULTRALIGHT_TECH_LIST)
        self._supported = supported
        self._memory = bytearray(total_pages * PAGE_SIZE)
        uid_bytes = uid[:9]
        self._memory[0:len(uid_bytes)] = uid_bytes
        if total_pages > 3:
            self._memory[3 * PAGE_SIZE:4 * PAGE_SIZE] = DEFAULT_CC_PAGE

        # Call logs
        self.read_calls: List[int] = []
        self.write_calls: List[Tuple[int, bytes]] = []
        self.connect_count = 0
        self.close_count = 0

        # Failure injection
        self._fail_read_at: Set[int] = set()
        self._fail_write_at: Set[int] = set()
        self._fail_close = False

        logger.info(f"MockTagSession '{self._name}' initialized ({total_pages} pages).")

    def connect(self) -> None:
        """Simulates activating the tag."""
        self.connect_count += 1
        if self._connected:
            logger.warning(f"[{self._name}] Already connected.")
            return
        if not self._supported:
            raise NotSupportedTagError(f"[{self._name}] Tag is not MifareUltralight.")
        self._connected = True
        self._tag_info = TagInfo(uid=self._uid, tech_list=self._tech_list)
        logger.info(f"[{self._name}] Mock tag {self._tag_info.uid_hex} activated.")

    def close(self) -> None:
        """Simulates releasing the tag."""
        self.close_count += 1
        self._connected = False
        if self._fail_close:
            raise TransportError(f"[{self._name}] Simulated close failure.")
        logger.info(f"[{self._name}] Mock session closed.")

    def read_block(self, address: int) -> bytes:
        if not self.is_connected():
            raise TransportError(f"[{self._name}] Cannot read: Not connected.")
        self.read_calls.append(address)
        if address in self._fail_read_at:
            raise ReadError(f"[{self._name}] Simulated read failure at page {address}.")
        if not 0 <= address < self._total_pages:
            raise ReadError(f"[{self._name}] NAK: page {address} is outside tag memory.")

        block = bytearray()
        for index in range(PAGES_PER_READ):
            block.extend(self.page((address + index) % self._total_pages))
        logger.debug(f"[{self._name}] READ {address}: {block.hex(' ').upper()}")
        return bytes(block)

    def write_page(self, address: int, data: bytes) -> None:
        if not self.is_connected():
            raise TransportError(f"[{self._name}] Cannot write: Not connected.")
        self.write_calls.append((address, bytes(data)))
        if address in self._fail_write_at:
            raise WriteError(f"[{self._name}] Simulated write failure at page {address}.")
        if len(data) != PAGE_SIZE:
            raise WriteError(f"[{self._name}] Page write needs {PAGE_SIZE} bytes, got {len(data)}.")
        if not 0 <= address < self._total_pages:
            raise WriteError(f"[{self._name}] NAK: page {address} is outside tag memory.")
        offset = address * PAGE_SIZE
        self._memory[offset:offset + PAGE_SIZE] = data
        logger.debug(f"[{self._name}] WRITE {address}: {bytes(data).hex(' ').upper()}")

    # --- Mock Control Methods ---

    def page(self, address: int) -> bytes:
        """Returns the current content of one page."""
        offset = address * PAGE_SIZE
        return bytes(self._memory[offset:offset + PAGE_SIZE])

    def load(self, start_page: int, data: bytes) -> None:
        """Preloads memory starting at `start_page`, bypassing the call logs."""
        offset = start_page * PAGE_SIZE
        if offset + len(data) > len(self._memory):
            raise ValueError(f"{len(data)} bytes at page {start_page} do not fit in {self._total_pages} pages.")
        self._memory[offset:offset + len(data)] = data

    def fail_read_at(self, *addresses: int) -> None:
        self._fail_read_at.update(addresses)

    def fail_write_at(self, *addresses: int) -> None:
        self._fail_write_at.update(addresses)

    def fail_on_close(self, enabled: bool = True) -> None:
        self._fail_close = enabled
