# nfc_raw/cli.py

"""Command line front-end: raw read/write of Ultralight-class tags through a PN532."""

import logging
import sys
from argparse import ArgumentParser, Namespace
from typing import List, Optional

from nfc_raw.codec.page_math import effective_page_count
from nfc_raw.core.exceptions import NfcRawError
from nfc_raw.core.raw_tag import RawTagClient
from nfc_raw.core.request import RawReadRequest, RawWriteRequest, byte_info
from nfc_raw.transport.pn532_serial import DEFAULT_SERIAL_SETTINGS, Pn532SerialSession
from nfc_raw.utils.serial_scanner import scan_serial_ports

logger = logging.getLogger("nfc_raw.cli")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _get_args(argv: Optional[List[str]] = None) -> Namespace:
    parser = ArgumentParser(prog="nfc-raw", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every frame and page")
    parser.add_argument("-p", "--port", help="Serial port of the PN532 (e.g. /dev/ttyUSB0, COM3)")
    parser.add_argument("-b", "--baudrate", type=int, default=DEFAULT_SERIAL_SETTINGS['baudrate'])
    parser.add_argument("-t", "--timeout", type=float, default=DEFAULT_SERIAL_SETTINGS['timeout'],
                        help="Seconds to wait for each reader answer")
    commands = parser.add_subparsers(dest="command", required=True)

    read = commands.add_parser("read", help="Dump pages of the tag")
    read.add_argument("--start", default=None, help="First page (default 4)")
    read.add_argument("--pages", default=None, help="Number of pages (default 4)")

    write = commands.add_parser("write", help="Write text or hex bytes to the tag")
    write.add_argument("data", help="Text to write, or hex digits with --hex")
    write.add_argument("--hex", action="store_true", help="Interpret DATA as hex (e.g. '48 65 6C 6C 6F')")
    write.add_argument("--start", default=None, help="First page (default 4, must be >= 4)")
    write.add_argument("--pages", default=None,
                       help="Pages to write (default: as many as DATA needs; fewer truncates, more zero-pads)")

    info = commands.add_parser("info", help="Show how many bytes/pages DATA takes, without a tag")
    info.add_argument("data")
    info.add_argument("--hex", action="store_true")

    commands.add_parser("ports", help="List serial ports")

    return parser.parse_args(argv)


def _make_client(args: Namespace) -> RawTagClient:
    if not args.port:
        ports = [p for p in scan_serial_ports() if p.likely_reader]
        if not ports:
            raise NfcRawError("No serial port given and no PN532 bridge found. Use --port.")
        args.port = ports[0].device
        logger.info(f"Using detected port {args.port} ({ports[0].bridge})")
    session = Pn532SerialSession({'port': args.port, 'baudrate': args.baudrate, 'timeout': args.timeout})
    return RawTagClient(session)


def _read(args: Namespace) -> None:
    request = RawReadRequest.from_form(args.start, args.pages)
    print("RAW READ: hold Ultralight tag...")
    result = _make_client(args).read_raw(request)
    if result.tag_info:
        print(result.tag_info)
    print(f"RAW dump (hex):\n{result.dump.hex_text}\n\nRAW (ascii):\n{result.dump.ascii_text}")


def _write(args: Namespace) -> None:
    request = RawWriteRequest.from_form(args.data, args.hex, args.start, args.pages)
    # Reject bad input before asking for a tag
    payload = request.validate()
    page_count = effective_page_count(request.page_count, len(payload))
    print(f"RAW WRITE: {len(payload)} bytes -> {page_count} page(s). Hold tag...")
    result = _make_client(args).write_raw(request)
    if result.tag_info:
        print(result.tag_info)
    print(f"RAW WRITE OK ({result.summary()})")


def _ports(args: Namespace) -> None:
    ports = scan_serial_ports(check_access=True)
    if not ports:
        print("No ports found.")
        return
    for p in ports:
        status_str = "accessible" if p.accessible else f"not accessible ({p.error})"
        bridge = f" [{p.bridge}]" if p.bridge else ""
        print(f"{p.device}{bridge} - {p.description} - {status_str}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _get_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    try:
        if args.command == "read":
            _read(args)
        elif args.command == "write":
            _write(args)
        elif args.command == "info":
            print(byte_info(args.data, args.hex))
        elif args.command == "ports":
            _ports(args)
    except NfcRawError as e:
        logger.error(f"NFC error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
