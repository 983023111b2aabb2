# nfc_raw/codec/raw_write.py

import logging
from typing import Callable, List, Tuple

from nfc_raw.codec.page_math import FIRST_USER_PAGE, PAGE_SIZE, chunk_pages
from nfc_raw.core.exceptions import InvalidStartPageError

logger = logging.getLogger(__name__)

PageWriter = Callable[[int, bytes], None]


def compose(start_page: int, page_count: int, payload: bytes) -> List[Tuple[int, bytes]]:
    """
    Lays `payload` out over `page_count` consecutive pages.

    Page i receives payload bytes [i*4, i*4+4); positions past the end of the
    payload are zero filled. When the pages cannot hold the whole payload the
    excess bytes are dropped: a short explicit page count is a truncating
    write, not an error.

    Args:
        start_page: First page to write. Pages 0-3 are reserved.
        page_count: Number of pages to produce.
        payload: The bytes to lay out.

    Returns:
        List of (page address, 4-byte buffer) in ascending address order.

    Raises:
        InvalidStartPageError: If start_page < 4. Raised before any page is produced.
    """
    if start_page < FIRST_USER_PAGE:
        raise InvalidStartPageError(start_page, FIRST_USER_PAGE)
    if page_count <= 0:
        return []

    capacity = page_count * PAGE_SIZE
    if len(payload) > capacity:
        logger.warning(
            f"Truncating write: {len(payload)} bytes do not fit in {page_count} page(s), "
            f"dropping the last {len(payload) - capacity} byte(s)."
        )

    buffers = chunk_pages(payload[:capacity])
    # Over-sized writes: pad with empty pages up to page_count
    buffers.extend(bytes(PAGE_SIZE) for _ in range(page_count - len(buffers)))
    return [(start_page + index, buffer) for index, buffer in enumerate(buffers)]


def write_pages(write_page: PageWriter, pages: List[Tuple[int, bytes]]) -> None:
    """
    Writes composed pages one by one in the given (ascending) order.

    The first failure raised by `write_page` aborts the loop and propagates
    unchanged; pages already written stay written.
    """
    for address, buffer in pages:
        logger.debug(f"Writing page {address}: {buffer.hex(' ').upper()}")
        write_page(address, buffer)
    logger.debug(f"Wrote {len(pages)} page(s).")
