# nfc_raw/protocols/pn532/constants.py

"""
Constants for the PN532 host interface (HSU/UART normal information frames)
and the MIFARE Ultralight / NTAG commands tunnelled through InDataExchange.
"""

# --- Frame Structure Constants ---
PREAMBLE: int = 0x00
START_CODE = b'\x00\xFF'
POSTAMBLE: int = 0x00
FRAME_START = bytes([PREAMBLE]) + START_CODE
LENGTH_FIELD_LENGTH = 2   # LEN + LCS
CHECKSUM_LENGTH = 1       # DCS
MIN_FRAME_LENGTH = len(FRAME_START) + LENGTH_FIELD_LENGTH + 1 + CHECKSUM_LENGTH + 1  # TFI at least

ACK_FRAME = b'\x00\x00\xFF\x00\xFF\x00'
NACK_FRAME = b'\x00\x00\xFF\xFF\x00\x00'

# --- Frame Identifiers ---
TFI_HOST_TO_PN532: int = 0xD4
TFI_PN532_TO_HOST: int = 0xD5

# --- Command Codes (Host -> PN532) ---
CMD_GET_FIRMWARE_VERSION: int = 0x02
CMD_SAM_CONFIGURATION: int = 0x14
CMD_IN_DATA_EXCHANGE: int = 0x40
CMD_IN_RELEASE: int = 0x52
CMD_IN_LIST_PASSIVE_TARGET: int = 0x4A

# --- Wakeup (HSU) ---
WAKEUP_SEQUENCE = b'\x55' * 16 + b'\x00\x00\xFF'

# --- SAMConfiguration parameters ---
SAM_MODE_NORMAL: int = 0x01
SAM_TIMEOUT: int = 0x14    # 50 ms units -> 1 s
SAM_USE_IRQ: int = 0x01

# --- InListPassiveTarget parameters ---
MAX_TARGETS: int = 0x01
BRTY_ISO14443A_106: int = 0x00
TARGET_NUMBER: int = 0x01  # Logical number of the first activated target

# --- Ultralight / NTAG tag commands ---
MFU_CMD_READ: int = 0x30   # Returns 4 pages (16 bytes) starting at the page
MFU_CMD_WRITE: int = 0xA2  # Writes exactly one page (4 bytes)

# SAK of a plain Type 2 (Ultralight / NTAG) tag
SAK_ULTRALIGHT: int = 0x00

# --- InDataExchange status byte ---
STATUS_ERROR_MASK: int = 0x3F

PN532_STATUS_MESSAGES = {
    0x00: "Success",
    0x01: "Time out, the target has not answered",
    0x02: "CRC error detected by the CIU",
    0x03: "Parity error detected by the CIU",
    0x04: "Erroneous bit count during anti-collision/select",
    0x05: "Framing error during MIFARE operation",
    0x06: "Abnormal bit-collision during bit wise anti-collision",
    0x07: "Communication buffer size insufficient",
    0x09: "RF buffer overflow detected by the CIU",
    0x0A: "RF field has not been switched on in time",
    0x0B: "RF protocol error",
    0x0D: "Temperature error, internal temperature sensor detected overheating",
    0x0E: "Internal buffer overflow",
    0x10: "Invalid parameter",
    0x13: "DEP protocol: the PN532 received an invalid or unsupported command",
    0x14: "MIFARE authentication error (NAK from the tag)",
    0x23: "ISO/IEC 14443-3: UID check byte is wrong",
    0x25: "DEP protocol: invalid device state",
    0x26: "Operation not allowed in this configuration",
    0x27: "Command is not acceptable in the current context",
    0x29: "The target has been released by the initiator",
    0x2A: "Card ID does not match, the card has been exchanged",
    0x2B: "The card previously activated has disappeared",
    0x2C: "Mismatch between the NFCID3 initiator and target in DEP",
    0x2D: "An over-current event has been detected",
    0x2E: "NAD missing in DEP frame",
}
