# examples/raw_read_write_example.py

import logging

from nfc_raw.core.exceptions import NfcRawError
from nfc_raw.core.raw_tag import RawTagClient
from nfc_raw.core.request import RawReadRequest, RawWriteRequest, byte_info
from nfc_raw.transport.mock import MockTagSession
from nfc_raw.transport.pn532_serial import Pn532SerialSession

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s"
)
logger = logging.getLogger("RawReadWriteExample")

# --- Configuration ---
USE_MOCK = True          # Set to False to talk to a real PN532
SERIAL_PORT = 'COM3'     # Replace with your port (e.g. /dev/ttyUSB0)
SERIAL_BAUD_RATE = 115200

# --- Read/write parameters ---
START_PAGE = 4           # Pages 0-3 are reserved
TEXT_TO_WRITE = "Hello NFC"


def main():
    if USE_MOCK:
        session = MockTagSession(name="Example")
    else:
        session = Pn532SerialSession({'port': SERIAL_PORT, 'baudrate': SERIAL_BAUD_RATE})
    client = RawTagClient(session)

    logger.info(f"Payload: {byte_info(TEXT_TO_WRITE, is_hex=False)}")
    try:
        write_result = client.write_raw(RawWriteRequest(text=TEXT_TO_WRITE, start_page=START_PAGE))
        logger.info(f"Written {write_result.byte_count} bytes ({write_result.summary()})")

        read_result = client.read_raw(RawReadRequest(start_page=START_PAGE, page_count=write_result.page_count))
        if read_result.tag_info:
            print(read_result.tag_info)
        print(f"RAW dump (hex):\n{read_result.dump.hex_text}\n\nRAW (ascii):\n{read_result.dump.ascii_text}")
    except NfcRawError as e:
        logger.error(f"Operation failed: {e}")


if __name__ == "__main__":
    main()
