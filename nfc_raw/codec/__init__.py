"""RAW page codec for Ultralight-class tags."""

from .hex_codec import parse_hex, encode_hex, encode_ascii
from .page_math import (
    PAGE_SIZE,
    PAGES_PER_READ,
    BLOCK_SIZE,
    FIRST_USER_PAGE,
    pages_needed,
    effective_page_count,
    chunk_pages
)
from .dump import TagDump, format_hex, format_ascii
from .raw_write import compose, write_pages
from .raw_read import assemble

__all__ = [
    'parse_hex',
    'encode_hex',
    'encode_ascii',
    'PAGE_SIZE',
    'PAGES_PER_READ',
    'BLOCK_SIZE',
    'FIRST_USER_PAGE',
    'pages_needed',
    'effective_page_count',
    'chunk_pages',
    'TagDump',
    'format_hex',
    'format_ascii',
    'compose',
    'write_pages',
    'assemble'
]
