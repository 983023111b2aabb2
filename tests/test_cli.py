# tests/test_cli.py

from unittest.mock import MagicMock, patch

import pytest

from nfc_raw import cli
from nfc_raw.core.raw_tag import RawTagClient
from nfc_raw.core.request import encode_payload
from nfc_raw.transport.mock import MockTagSession
from nfc_raw.transport.pn532_serial import Pn532SerialSession
from nfc_raw.utils.serial_scanner import PortInfo


@pytest.fixture
def session() -> MockTagSession:
    return MockTagSession(name="CLI")


@pytest.fixture
def mock_client(session):
    with patch('nfc_raw.cli._make_client', return_value=RawTagClient(session)) as make_client:
        yield make_client


def test_info_text(capsys):
    assert cli.main(["info", "Hello"]) == 0
    assert capsys.readouterr().out.strip() == "5 bytes (pages needed: 2)"

def test_info_bad_hex(capsys):
    assert cli.main(["info", "--hex", "ABC"]) == 0
    assert capsys.readouterr().out.strip() == "0 bytes (pages needed: 0)"

def test_read(session, mock_client, capsys):
    session.load(4, b'Hello World!')
    assert cli.main(["read", "--start", "4", "--pages", "3"]) == 0

    out = capsys.readouterr().out
    assert "Tag UID: 04A22B1A3C5D80" in out
    assert "RAW dump (hex):\n04: 48 65 6C 6C\n05: 6F 20 57 6F\n06: 72 6C 64 21\n\nRAW (ascii):\nHello World!" in out
    assert session.read_calls == [4]

def test_write_hex(session, mock_client, capsys):
    assert cli.main(["write", "--hex", "01 02 03", "--pages", "2"]) == 0
    assert "RAW WRITE OK (pages 4..5)" in capsys.readouterr().out
    assert session.page(4) == bytes([0x01, 0x02, 0x03, 0x00])

def test_write_rejects_reserved_page_before_tag(mock_client, capsys):
    assert cli.main(["write", "Hi", "--start", "2"]) == 1
    mock_client.assert_not_called()

def test_write_rejects_odd_hex(mock_client):
    assert cli.main(["write", "--hex", "ABC"]) == 1
    mock_client.assert_not_called()

def test_read_error_returns_one(session, mock_client):
    session.fail_read_at(4)
    assert cli.main(["read"]) == 1
    assert session.close_count == 1

def test_make_client_uses_given_port():
    args = cli._get_args(["-p", "/dev/ttyUSB3", "-b", "9600", "read"])
    client = cli._make_client(args)
    assert client.session.connection_details == {'port': '/dev/ttyUSB3', 'baudrate': 9600, 'timeout': 1.0}

def test_make_client_detects_port():
    ports = [
        PortInfo(device="/dev/ttyUSB0", description="FT232R", bridge="FTDI"),
    ]
    args = cli._get_args(["read"])
    with patch('nfc_raw.cli.scan_serial_ports', return_value=ports):
        client = cli._make_client(args)
    assert client.session.connection_details['port'] == "/dev/ttyUSB0"

def test_no_port_found(capsys):
    with patch('nfc_raw.cli.scan_serial_ports', return_value=[PortInfo(device="/dev/ttyS0", description="")]):
        assert cli.main(["read"]) == 1

def test_ports_listing(capsys):
    ports = [
        PortInfo(device="/dev/ttyUSB0", description="FT232R", bridge="FTDI", accessible=True),
        PortInfo(device="/dev/ttyS0", description="ttyS0", error="Permission denied"),
    ]
    with patch('nfc_raw.cli.scan_serial_ports', return_value=ports):
        assert cli.main(["ports"]) == 0
    out = capsys.readouterr().out
    assert "/dev/ttyUSB0 [FTDI] - FT232R - accessible" in out
    assert "/dev/ttyS0 - ttyS0 - not accessible (Permission denied)" in out

def test_command_required():
    with pytest.raises(SystemExit):
        cli.main([])


def _fake_connect(self):
    self._serial = MagicMock()
    self._connected = True


@pytest.fixture
def pn532_without_hardware():
    """Real Pn532SerialSession over a patched link: every exchange answers 16 zero bytes."""
    with patch.object(Pn532SerialSession, 'connect', _fake_connect), \
         patch.object(Pn532SerialSession, 'close', lambda self: None), \
         patch.object(Pn532SerialSession, '_exchange', return_value=bytes(16)) as exchange:
        yield exchange


@pytest.mark.parametrize("argv", [
    ["-p", "/dev/ttyUSB0", "read", "--start", "254", "--pages", "8"],
    ["-p", "/dev/ttyUSB0", "write", "X", "--start", "253", "--pages", "5"],
])
def test_page_address_beyond_reader_range_returns_one(pn532_without_hardware, argv):
    assert cli.main(argv) == 1
    # Pages up to 255 went out, nothing past it
    for call_args in pn532_without_hardware.call_args_list:
        assert call_args.args[0][1] <= 0xFF

def test_write_status_line_reuses_validated_payload(mock_client, capsys):
    with patch('nfc_raw.core.request.encode_payload', wraps=encode_payload) as encode:
        assert cli.main(["write", "--hex", "01 02 03", "--pages", "2"]) == 0
    # Once for the status line, once inside the client
    assert encode.call_count == 2
    assert "RAW WRITE: 3 bytes -> 2 page(s)" in capsys.readouterr().out
