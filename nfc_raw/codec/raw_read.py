# nfc_raw/codec/raw_read.py

import logging
from typing import Callable, List, Tuple

from nfc_raw.codec.dump import TagDump
from nfc_raw.codec.page_math import PAGE_SIZE, PAGES_PER_READ
from nfc_raw.core.exceptions import ReadError

logger = logging.getLogger(__name__)

BlockReader = Callable[[int], bytes]


def assemble(start_page: int, page_count: int, read_block: BlockReader) -> TagDump:
    """
    Reads `page_count` pages starting at `start_page` using 4-page block reads.

    The READ command always returns 16 bytes (4 pages), whatever the number
    of pages still wanted. Calls start at `start_page` and advance by 4; each
    call contributes min(remaining, 4) pages from the front of its block and
    the unused tail of the final block is discarded.

    Args:
        start_page: First page to read.
        page_count: Number of pages wanted. <= 0 yields an empty dump.
        read_block: Callable performing one hardware READ at an address.

    Returns:
        TagDump with exactly `page_count` entries in ascending address order.

    Raises:
        ReadError: If a block is too short for the pages it has to supply.
        Any exception raised by `read_block` propagates unchanged.
    """
    pages: List[Tuple[int, bytes]] = []
    remaining = page_count
    address = start_page

    while remaining > 0:
        block = read_block(address)
        count = min(remaining, PAGES_PER_READ)
        if len(block) < count * PAGE_SIZE:
            raise ReadError(
                f"Short block at page {address}: got {len(block)} bytes, "
                f"need {count * PAGE_SIZE}."
            )
        logger.debug(f"Block at page {address}: {block.hex(' ').upper()} (using {count} page(s))")
        for index in range(count):
            pages.append((address + index, bytes(block[index * PAGE_SIZE:(index + 1) * PAGE_SIZE])))
        address += PAGES_PER_READ
        remaining -= count

    return TagDump(tuple(pages))
