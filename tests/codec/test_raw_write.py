# tests/codec/test_raw_write.py

import logging
from unittest.mock import MagicMock, call

import pytest

from nfc_raw.codec import raw_write
from nfc_raw.core.exceptions import InvalidStartPageError, WriteError

# --- compose ---

def test_compose_pads_final_and_extra_pages():
    pages = raw_write.compose(start_page=4, page_count=2, payload=bytes([0x01, 0x02, 0x03]))
    assert pages == [
        (4, bytes([0x01, 0x02, 0x03, 0x00])),
        (5, bytes([0x00, 0x00, 0x00, 0x00])),
    ]

def test_compose_exact_fit():
    pages = raw_write.compose(start_page=10, page_count=2, payload=b'ABCDEFGH')
    assert pages == [(10, b'ABCD'), (11, b'EFGH')]

@pytest.mark.parametrize("start_page", [0, 1, 2, 3, -1])
def test_compose_rejects_reserved_pages(start_page):
    with pytest.raises(InvalidStartPageError, match="Start page must be >= 4") as exc_info:
        raw_write.compose(start_page=start_page, page_count=1, payload=b'\x01')
    assert exc_info.value.start_page == start_page

def test_compose_truncating_write_drops_excess(caplog):
    """A page count smaller than the payload needs keeps only what fits."""
    with caplog.at_level(logging.WARNING, logger="nfc_raw.codec.raw_write"):
        pages = raw_write.compose(start_page=4, page_count=1, payload=b'Hello World')
    assert pages == [(4, b'Hell')]
    assert "Truncating write" in caplog.text

def test_compose_zero_pages():
    assert raw_write.compose(start_page=4, page_count=0, payload=b'') == []

def test_compose_every_page_is_four_bytes_and_consecutive():
    pages = raw_write.compose(start_page=7, page_count=9, payload=bytes(range(13)))
    assert [address for address, _ in pages] == list(range(7, 16))
    assert all(len(buffer) == 4 for _, buffer in pages)
    assert b''.join(buffer for _, buffer in pages) == bytes(range(13)) + bytes(36 - 13)

# --- write_pages ---

def test_write_pages_in_order():
    write_page = MagicMock()
    pages = [(4, b'ABCD'), (5, b'EFGH'), (6, b'I\x00\x00\x00')]
    raw_write.write_pages(write_page, pages)
    assert write_page.call_args_list == [call(4, b'ABCD'), call(5, b'EFGH'), call(6, b'I\x00\x00\x00')]

def test_write_pages_aborts_on_first_failure():
    write_page = MagicMock(side_effect=[None, WriteError("tag lost"), None])
    pages = [(4, b'AAAA'), (5, b'BBBB'), (6, b'CCCC')]
    with pytest.raises(WriteError, match="tag lost"):
        raw_write.write_pages(write_page, pages)
    # No attempt on page 6, no retry of page 5
    assert write_page.call_count == 2
