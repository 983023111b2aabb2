# nfc_raw/codec/page_math.py

"""Page geometry of Ultralight-class tags and the arithmetic built on it."""

from typing import List, Optional

# --- Memory Layout Constants ---
PAGE_SIZE = 4                          # Bytes per page, also the write unit
PAGES_PER_READ = 4                     # Pages returned by one READ command
BLOCK_SIZE = PAGE_SIZE * PAGES_PER_READ  # 16 bytes per READ
FIRST_USER_PAGE = 4                    # Pages 0-3: UID, lock bytes, OTP


def pages_needed(byte_count: int) -> int:
    """
    Number of pages required to hold `byte_count` bytes.

    Returns 0 for an empty payload, ceil(byte_count / 4) otherwise.

    Raises:
        ValueError: If byte_count is negative.
    """
    if byte_count < 0:
        raise ValueError(f"Byte count cannot be negative: {byte_count}")
    return -(-byte_count // PAGE_SIZE)


def effective_page_count(explicit: Optional[int], byte_count: int) -> int:
    """
    Page count actually used for a write.

    An explicit count > 0 wins verbatim, even when it is smaller than the
    payload (truncating write) or larger (zero padded write). Anything else
    (None, 0, negative) falls back to pages_needed(byte_count).
    """
    if explicit is not None and explicit > 0:
        return explicit
    return pages_needed(byte_count)


def chunk_pages(data: bytes) -> List[bytes]:
    """Splits `data` into 4-byte page buffers, zero padding the last one."""
    chunks = []
    for offset in range(0, len(data), PAGE_SIZE):
        chunk = data[offset:offset + PAGE_SIZE]
        chunks.append(chunk.ljust(PAGE_SIZE, b'\x00'))
    return chunks
