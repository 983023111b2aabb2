# nfc_raw/utils/serial_scanner.py
"""Finds serial ports a PN532 reader may be attached to."""

import logging
from dataclasses import dataclass
from typing import List, Optional

import serial
import serial.tools.list_ports

logger = logging.getLogger(__name__)

# USB-UART bridges commonly found on PN532 breakout boards
KNOWN_BRIDGE_VIDS = {
    0x0403: "FTDI",
    0x067B: "Prolific PL2303",
    0x10C4: "Silicon Labs CP210x",
    0x1A86: "WCH CH340",
}


@dataclass
class PortInfo:
    """Represents information about a detected serial port."""
    device: str                   # Port name (e.g., COM3, /dev/ttyUSB0)
    description: str              # Human-readable description
    vid: Optional[int] = None     # Vendor ID
    pid: Optional[int] = None     # Product ID
    serial_number: Optional[str] = None
    bridge: Optional[str] = None  # Known USB-UART bridge name, if recognised
    accessible: bool = False      # Whether the port could be opened successfully
    error: Optional[str] = None   # Error message if opening failed

    @property
    def likely_reader(self) -> bool:
        return self.bridge is not None


def _check_port_access(port_name: str) -> tuple[bool, Optional[str]]:
    """Tries to open a port to check accessibility.

    Returns:
        A tuple (accessible: bool, error_message: Optional[str]).
    """
    try:
        s = serial.Serial(port=port_name, timeout=0.1)
        s.close()
        return True, None
    except serial.SerialException as e:
        err_msg = str(e)
        if "Permission denied" in err_msg or "Access is denied" in err_msg:
            return False, "Permission denied"
        if "Device or resource busy" in err_msg:
            return False, "Busy"
        logger.debug(f"SerialException checking port {port_name}: {e}")
        return False, f"Cannot open ({type(e).__name__})"


def scan_serial_ports(check_access: bool = False) -> List[PortInfo]:
    """Lists available serial ports, recognised PN532 bridges first.

    Args:
        check_access: If True, briefly opens each port to check permissions.

    Returns:
        A list of PortInfo objects.
    """
    ports_found: List[PortInfo] = []

    for port in serial.tools.list_ports.comports():
        device = str(port.device) if port.device is not None else ""
        logger.debug(f"Found port: {device}")
        vid = port.vid if isinstance(port.vid, int) else None
        pid = port.pid if isinstance(port.pid, int) else None

        info = PortInfo(
            device=device,
            description=str(port.description) if port.description is not None else "",
            vid=vid,
            pid=pid,
            serial_number=str(port.serial_number) if port.serial_number is not None else None,
            bridge=KNOWN_BRIDGE_VIDS.get(vid) if vid is not None else None,
        )
        if check_access:
            info.accessible, info.error = _check_port_access(device)
            logger.debug(f"Access check for {device}: Accessible={info.accessible}, Error={info.error}")
        ports_found.append(info)

    ports_found.sort(key=lambda p: (not p.likely_reader, p.device))
    logger.info(f"Scan complete. Found {len(ports_found)} ports.")
    return ports_found
