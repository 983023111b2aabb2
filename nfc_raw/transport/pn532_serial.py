# nfc_raw/transport/pn532_serial.py

import logging
import time
from typing import Any, Dict, Optional

import serial

from nfc_raw.codec.page_math import BLOCK_SIZE, PAGE_SIZE
from nfc_raw.core.exceptions import (
    NfcRawError, TransportError, ConnectionError, SerialConnectionError,
    ReadError, WriteError, TimeoutError, CommandError, FrameParseError, NotSupportedTagError
)
from nfc_raw.protocols import framing
from nfc_raw.protocols.pn532 import constants as pn532_const
from nfc_raw.transport.base import BaseTagSession
from nfc_raw.utils.tag_utils import TagInfo, ULTRALIGHT_TECH_LIST

logger = logging.getLogger(__name__)

DEFAULT_SERIAL_SETTINGS = {
    'baudrate': 115200,
    'bytesize': serial.EIGHTBITS,
    'parity': serial.PARITY_NONE,
    'stopbits': serial.STOPBITS_ONE,
    'timeout': 1.0, # Per read() call; bounds every wait for ACK/response
    'xonxoff': False,
    'rtscts': False,
    'dsrdtr': False,
}

WAKEUP_DELAY = 0.1  # Seconds the PN532 needs after the HSU wakeup sequence
HEADER_LENGTH = len(pn532_const.FRAME_START) + pn532_const.LENGTH_FIELD_LENGTH


class Pn532SerialSession(BaseTagSession):
    """
    Tag session through a PN532 connected over HSU (UART), using pyserial.

    connect() wakes the PN532, puts the SAM in normal mode and activates one
    ISO14443A target. Only Type 2 tags (SAK 0x00, Ultralight / NTAG) are
    accepted. Page reads and writes are tunnelled with InDataExchange.
    """

    def __init__(self, connection_details: Dict[str, Any]):
        """
        Initializes the PN532 session.

        Args:
            connection_details: Dictionary containing serial port settings.
                Required: 'port' (e.g., '/dev/ttyUSB0', 'COM3')
                Optional: 'baudrate', 'timeout', etc.
                          Defaults are taken from DEFAULT_SERIAL_SETTINGS.
        """
        super().__init__(connection_details)

        if 'port' not in self._connection_details:
            raise ValueError("Missing 'port' in connection_details for Pn532SerialSession.")

        self._serial_settings = DEFAULT_SERIAL_SETTINGS.copy()
        self._serial_settings.update(self._connection_details)
        self._port = self._serial_settings.pop('port')
        self._serial: Optional[serial.Serial] = None

        logger.info(f"Pn532SerialSession initialized for port {self._port} with settings: {self._serial_settings}")

    def connect(self) -> None:
        """Opens the serial port and activates the tag in the field."""
        if self._connected:
            logger.warning(f"PN532 on {self._port} already connected.")
            return

        logger.info(f"Connecting to PN532 on {self._port}...")
        try:
            self._serial = serial.Serial(port=self._port, **self._serial_settings)
        except serial.SerialException as e:
            logger.error(f"Failed to open serial port {self._port}: {e}")
            self._serial = None
            raise SerialConnectionError(port=self._port, message=str(e), original_exception=e) from e

        try:
            self._wakeup()
            self._sam_configuration()
            self._tag_info = self._activate_target()
        except Exception:
            self._close_port()
            raise

        self._connected = True
        logger.info(f"Tag {self._tag_info.uid_hex} activated on {self._port}.")

    def close(self) -> None:
        """Releases the target and closes the serial port."""
        if self._serial is None:
            return
        try:
            if self._connected:
                self._send_command(pn532_const.CMD_IN_RELEASE, bytes([pn532_const.TARGET_NUMBER]))
        except NfcRawError as e:
            # Tag already gone; the port still has to be closed
            logger.warning(f"InRelease failed on {self._port}: {e}")
        finally:
            self._connected = False
            self._close_port()
            logger.info(f"PN532 session on {self._port} closed.")

    def read_block(self, address: int) -> bytes:
        """Sends READ (0x30) for `address` and returns the 16 bytes answered by the tag."""
        self._ensure_connected()
        if not 0 <= address <= 0xFF:
            raise ReadError(f"Page address out of range (0-255): {address}")

        data = self._exchange(bytes([pn532_const.MFU_CMD_READ, address]))
        if len(data) != BLOCK_SIZE:
            raise ReadError(f"READ at page {address} returned {len(data)} bytes, expected {BLOCK_SIZE}.")
        return data

    def write_page(self, address: int, data: bytes) -> None:
        """Sends WRITE (0xA2) of one page."""
        self._ensure_connected()
        if not 0 <= address <= 0xFF:
            raise WriteError(f"Page address out of range (0-255): {address}")
        if len(data) != PAGE_SIZE:
            raise WriteError(f"Page write needs exactly {PAGE_SIZE} bytes, got {len(data)}")

        self._exchange(bytes([pn532_const.MFU_CMD_WRITE, address]) + bytes(data))

    # --- PN532 commands ---

    def _wakeup(self) -> None:
        """Brings the PN532 out of HSU power-down."""
        try:
            self._serial.write(pn532_const.WAKEUP_SEQUENCE)
            self._serial.flush()
        except serial.SerialException as e:
            raise SerialConnectionError(port=self._port, message="Wakeup failed.", original_exception=e) from e
        time.sleep(WAKEUP_DELAY)
        self._serial.reset_input_buffer()

    def _sam_configuration(self) -> None:
        self._send_command(
            pn532_const.CMD_SAM_CONFIGURATION,
            bytes([pn532_const.SAM_MODE_NORMAL, pn532_const.SAM_TIMEOUT, pn532_const.SAM_USE_IRQ])
        )

    def _activate_target(self) -> TagInfo:
        """
        Runs InListPassiveTarget for one ISO14443A target.

        Response layout: NbTg Tg SENS_RES(2) SEL_RES NFCIDLength NFCID...

        Raises:
            ConnectionError: If no tag is in the field.
            NotSupportedTagError: If the tag is not a Type 2 (Ultralight) tag.
        """
        resp = self._send_command(
            pn532_const.CMD_IN_LIST_PASSIVE_TARGET,
            bytes([pn532_const.MAX_TARGETS, pn532_const.BRTY_ISO14443A_106])
        )
        if not resp or resp[0] == 0:
            raise ConnectionError(f"No tag found in the field of the reader on {self._port}.")
        if len(resp) < 6:
            raise FrameParseError("Target data too short.", frame_part=resp)

        sak = resp[4]
        uid_length = resp[5]
        uid = resp[6:6 + uid_length]
        if len(uid) != uid_length:
            raise FrameParseError(f"Target UID truncated: expected {uid_length} bytes.", frame_part=resp)

        logger.debug(f"Target found: SENS_RES={resp[2:4].hex().upper()} SAK=0x{sak:02X} UID={uid.hex().upper()}")
        if sak != pn532_const.SAK_ULTRALIGHT:
            raise NotSupportedTagError(f"Tag {uid.hex().upper()} (SAK 0x{sak:02X}) is not MifareUltralight.")
        return TagInfo(uid=bytes(uid), tech_list=ULTRALIGHT_TECH_LIST)

    def _exchange(self, tag_command: bytes) -> bytes:
        """
        Sends a raw tag command through InDataExchange.

        Raises:
            CommandError: If the PN532 reports a non-zero status.
        """
        resp = self._send_command(
            pn532_const.CMD_IN_DATA_EXCHANGE,
            bytes([pn532_const.TARGET_NUMBER]) + tag_command
        )
        if not resp:
            raise FrameParseError("InDataExchange response carries no status byte.")
        status = resp[0]
        if status & pn532_const.STATUS_ERROR_MASK:
            raise CommandError(status_code=status)
        return resp[1:]

    def _send_command(self, command: int, params: bytes = b'') -> bytes:
        """
        Sends one command frame, waits for the ACK and reads the response frame.

        Returns:
            The response data following the response code (command + 1).

        Raises:
            TimeoutError: If the ACK or the response does not arrive in time.
            FrameParseError / ChecksumError: If the response frame is malformed.
            TransportError: If the serial port fails.
        """
        frame = framing.build_frame(command, params)
        logger.debug(f"PN532 TX on {self._port}: {frame.hex(' ').upper()}")
        try:
            self._serial.write(frame)
            self._serial.flush()

            ack = self._serial.read(len(pn532_const.ACK_FRAME))
            if not framing.is_ack(ack):
                if not ack:
                    raise TimeoutError(f"No ACK from PN532 for command 0x{command:02X}.")
                raise FrameParseError(f"Expected ACK for command 0x{command:02X}.", frame_part=ack)

            header = self._serial.read(HEADER_LENGTH)
            if len(header) < HEADER_LENGTH:
                raise TimeoutError(f"No response from PN532 for command 0x{command:02X}.")
            # Data (LEN bytes) + DCS + POSTAMBLE
            body = self._serial.read(header[-2] + pn532_const.CHECKSUM_LENGTH + 1)
        except serial.SerialException as e:
            logger.error(f"Serial I/O failed on {self._port}: {e}")
            raise TransportError(f"Serial I/O failed on {self._port}", original_exception=e) from e

        response = header + body
        logger.debug(f"PN532 RX on {self._port}: {response.hex(' ').upper()}")
        if len(body) < header[-2] + pn532_const.CHECKSUM_LENGTH + 1:
            raise TimeoutError(f"Incomplete response from PN532 for command 0x{command:02X}.")

        tfi, payload, _, _ = framing.parse_frame(response)
        if tfi != pn532_const.TFI_PN532_TO_HOST or not payload or payload[0] != command + 1:
            raise FrameParseError(f"Unexpected response to command 0x{command:02X}.", frame_part=response)
        return payload[1:]

    def _ensure_connected(self) -> None:
        if not self._connected or self._serial is None:
            raise TransportError(f"Cannot access tag: PN532 on {self._port} not connected.")

    def _close_port(self) -> None:
        serial_port = self._serial
        self._serial = None
        if serial_port is None:
            return
        try:
            serial_port.close()
        except serial.SerialException as e:
            logger.error(f"Error closing serial port {self._port}: {e}")
