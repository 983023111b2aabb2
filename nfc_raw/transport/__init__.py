"""Tag session implementations for the nfc_raw library."""

from .base import BaseTagSession
from .mock import MockTagSession
from .pn532_serial import Pn532SerialSession

__all__ = [
    'BaseTagSession',
    'MockTagSession',
    'Pn532SerialSession'
]
