# nfc_raw/utils/tag_utils.py
from dataclasses import dataclass
from typing import Sequence, Tuple

from nfc_raw.codec.hex_codec import encode_hex

# Technology labels reported for a plain Type 2 tag (SAK 0x00)
ULTRALIGHT_TECH_LIST = [
    "android.nfc.tech.NfcA",
    "android.nfc.tech.MifareUltralight",
]


def short_tech_name(tech: str) -> str:
    """'android.nfc.tech.NfcA' -> 'NfcA'. Names without dots are returned as is."""
    return tech.rsplit('.', 1)[-1]


def format_tech_list(techs: Sequence[str]) -> str:
    return ', '.join(short_tech_name(tech) for tech in techs)


@dataclass(frozen=True)
class TagInfo:
    """Identifier and technology labels of the tag in the field. Presentation only."""
    uid: bytes
    tech_list: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'uid', bytes(self.uid))
        object.__setattr__(self, 'tech_list', tuple(self.tech_list))

    @property
    def uid_hex(self) -> str:
        return encode_hex(self.uid)

    @property
    def tech_summary(self) -> str:
        return format_tech_list(self.tech_list)

    def __str__(self) -> str:
        return f"Tag UID: {self.uid_hex}\nTech: {self.tech_summary}"
