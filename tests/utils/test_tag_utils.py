# tests/utils/test_tag_utils.py
import pytest

from nfc_raw.utils import tag_utils
from nfc_raw.utils.tag_utils import TagInfo

# --- Technology labels ---

@pytest.mark.parametrize("tech, expected", [
    ("android.nfc.tech.NfcA", "NfcA"),
    ("android.nfc.tech.MifareUltralight", "MifareUltralight"),
    ("IsoDep", "IsoDep"),
    ("", ""),
])
def test_short_tech_name(tech, expected):
    assert tag_utils.short_tech_name(tech) == expected

def test_format_tech_list():
    assert tag_utils.format_tech_list(tag_utils.ULTRALIGHT_TECH_LIST) == "NfcA, MifareUltralight"
    assert tag_utils.format_tech_list([]) == ""

# --- TagInfo ---

def test_tag_info_views():
    info = TagInfo(uid=bytes.fromhex("04a22b1a3c5d80"), tech_list=list(tag_utils.ULTRALIGHT_TECH_LIST))
    assert info.uid_hex == "04A22B1A3C5D80"
    assert info.tech_summary == "NfcA, MifareUltralight"
    assert str(info) == "Tag UID: 04A22B1A3C5D80\nTech: NfcA, MifareUltralight"

def test_tag_info_empty_tech_list():
    info = TagInfo(uid=b'\x01\x02\x03\x04')
    assert info.tech_list == ()
    assert str(info) == "Tag UID: 01020304\nTech: "

def test_tag_info_is_hashable():
    techs = list(tag_utils.ULTRALIGHT_TECH_LIST)
    info = TagInfo(uid=bytearray(b'\x04\xA2'), tech_list=techs)
    techs.append("android.nfc.tech.Ndef")  # Later changes to the caller's list do not leak in
    assert info.tech_list == ("android.nfc.tech.NfcA", "android.nfc.tech.MifareUltralight")
    assert info.uid == b'\x04\xA2'
    assert hash(info) == hash(TagInfo(uid=b'\x04\xA2', tech_list=tuple(tag_utils.ULTRALIGHT_TECH_LIST)))
    assert len({info, TagInfo(uid=b'\x04\xA2', tech_list=techs[:2])}) == 1
