# tests/transport/test_mock_session.py

import pytest

from nfc_raw.core.exceptions import NotSupportedTagError, ReadError, TransportError, WriteError
from nfc_raw.transport.base import BaseTagSession
from nfc_raw.transport.mock import DEFAULT_CC_PAGE, DEFAULT_UID, MockTagSession


@pytest.fixture
def session() -> MockTagSession:
    return MockTagSession(name="Unit", total_pages=16)


def test_is_a_tag_session(session):
    assert isinstance(session, BaseTagSession)
    assert session.connection_details == {}
    assert session.tag_info is None

def test_initial_memory_image(session):
    assert session.page(0) + session.page(1)[:3] == DEFAULT_UID
    assert session.page(3) == DEFAULT_CC_PAGE
    assert session.page(4) == bytes(4)

def test_connect_sets_tag_info(session):
    session.connect()
    assert session.is_connected()
    assert session.tag_info.uid == DEFAULT_UID
    assert session.tag_info.tech_list == ("android.nfc.tech.NfcA", "android.nfc.tech.MifareUltralight")

def test_connect_twice_is_noop(session):
    session.connect()
    session.connect()
    assert session.connect_count == 2
    assert session.is_connected()

def test_unsupported_tag():
    session = MockTagSession(supported=False, tech_list=["android.nfc.tech.IsoDep"])
    with pytest.raises(NotSupportedTagError):
        session.connect()
    assert not session.is_connected()

def test_context_manager(session):
    with session as active:
        assert active is session
        assert session.is_connected()
    assert not session.is_connected()
    assert session.close_count == 1

def test_read_requires_connection(session):
    with pytest.raises(TransportError, match="Not connected"):
        session.read_block(4)
    with pytest.raises(TransportError, match="Not connected"):
        session.write_page(4, b'ABCD')

def test_read_block_returns_four_pages(session):
    session.load(4, b'0123456789ABCDEF')
    session.connect()
    assert session.read_block(4) == b'0123456789ABCDEF'
    assert session.read_calls == [4]

def test_read_block_rolls_over(session):
    session.load(15, b'LAST')
    session.connect()
    block = session.read_block(14)
    assert block[4:8] == b'LAST'
    assert block[8:12] == session.page(0)

def test_read_block_outside_memory(session):
    session.connect()
    with pytest.raises(ReadError, match="outside tag memory"):
        session.read_block(16)

def test_write_page(session):
    session.connect()
    session.write_page(6, b'WXYZ')
    assert session.page(6) == b'WXYZ'
    assert session.write_calls == [(6, b'WXYZ')]

@pytest.mark.parametrize("address, data, message", [
    (4, b'ABC', "needs 4 bytes"),
    (16, b'ABCD', "outside tag memory"),
])
def test_write_page_rejected(session, address, data, message):
    session.connect()
    with pytest.raises(WriteError, match=message):
        session.write_page(address, data)

def test_injected_failures(session):
    session.fail_read_at(8)
    session.fail_write_at(5)
    session.connect()
    session.read_block(4)
    with pytest.raises(ReadError, match="Simulated read failure"):
        session.read_block(8)
    with pytest.raises(WriteError, match="Simulated write failure"):
        session.write_page(5, b'ABCD')
    assert session.page(5) == bytes(4)

def test_close_failure_still_disconnects(session):
    session.fail_on_close()
    session.connect()
    with pytest.raises(TransportError, match="Simulated close failure"):
        session.close()
    assert not session.is_connected()

def test_load_overflow(session):
    with pytest.raises(ValueError, match="do not fit"):
        session.load(15, b'12345')
