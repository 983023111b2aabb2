# tests/codec/test_raw_read.py

from unittest.mock import MagicMock, call

import pytest

from nfc_raw.codec import raw_read
from nfc_raw.core.exceptions import ReadError


def block_for(address: int) -> bytes:
    """Fake 16-byte block whose pages are filled with their own address."""
    return b''.join(bytes([address + i] * 4) for i in range(4))


@pytest.fixture
def read_block():
    return MagicMock(side_effect=block_for)


def test_assemble_partial_block(read_block):
    """3 pages: one call, the 4th page of the block is discarded."""
    dump = raw_read.assemble(start_page=4, page_count=3, read_block=read_block)
    read_block.assert_called_once_with(4)
    assert dump.pages == ((4, bytes([4] * 4)), (5, bytes([5] * 4)), (6, bytes([6] * 4)))

def test_assemble_spans_two_blocks(read_block):
    """6 pages: calls at 4 and 8, consuming 4 then 2 pages."""
    dump = raw_read.assemble(start_page=4, page_count=6, read_block=read_block)
    assert read_block.call_args_list == [call(4), call(8)]
    assert [address for address, _ in dump] == [4, 5, 6, 7, 8, 9]
    assert dump.pages[5] == (9, bytes([9] * 4))

def test_assemble_exact_blocks(read_block):
    dump = raw_read.assemble(start_page=0, page_count=8, read_block=read_block)
    assert read_block.call_args_list == [call(0), call(4)]
    assert len(dump) == 8

def test_assemble_unaligned_start(read_block):
    dump = raw_read.assemble(start_page=5, page_count=5, read_block=read_block)
    assert read_block.call_args_list == [call(5), call(9)]
    assert [address for address, _ in dump] == [5, 6, 7, 8, 9]

@pytest.mark.parametrize("page_count", [0, -3])
def test_assemble_nothing_requested(read_block, page_count):
    dump = raw_read.assemble(start_page=4, page_count=page_count, read_block=read_block)
    read_block.assert_not_called()
    assert len(dump) == 0

def test_assemble_propagates_reader_failure():
    failure = ReadError("tag removed")
    read_block = MagicMock(side_effect=[block_for(4), failure])
    with pytest.raises(ReadError) as exc_info:
        raw_read.assemble(start_page=4, page_count=8, read_block=read_block)
    assert exc_info.value is failure
    assert read_block.call_count == 2 # No retry

def test_assemble_short_block():
    read_block = MagicMock(return_value=bytes(8))
    with pytest.raises(ReadError, match="Short block"):
        raw_read.assemble(start_page=4, page_count=3, read_block=read_block)

def test_assemble_short_block_enough_for_request():
    """
    Tolerates a reader answering fewer than 16 bytes: only the pages
    actually consumed have to be present.
    """
    read_block = MagicMock(return_value=b'ABCDEFGH')
    dump = raw_read.assemble(start_page=4, page_count=2, read_block=read_block)
    assert dump.data == b'ABCDEFGH'
