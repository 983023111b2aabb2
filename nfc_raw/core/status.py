# nfc_raw/core/status.py

from enum import Enum, auto

class ConnectionStatus(Enum):
    """Represents the state of the tag session driven by a client."""
    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    DISCONNECTING = auto()
    ERROR = auto() # The last operation failed

    def __str__(self):
        return self.name
