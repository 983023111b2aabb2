# nfc_raw/core/request.py

"""
Explicit request values for one raw read or one raw write.

They carry everything an operation needs (start page, page count, payload
text and its encoding), so nothing has to be parked in shared state between
the moment the user asks for an operation and the moment a tag shows up.
"""

from dataclasses import dataclass
from typing import Optional

from nfc_raw.codec.hex_codec import parse_hex
from nfc_raw.codec.page_math import FIRST_USER_PAGE, effective_page_count, pages_needed
from nfc_raw.core.exceptions import InvalidStartPageError, OddLengthHexError

DEFAULT_START_PAGE = FIRST_USER_PAGE
DEFAULT_READ_PAGES = 4


def parse_int_or_none(text: Optional[str]) -> Optional[int]:
    """Lenient integer parsing for form fields: blank or invalid text gives None."""
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def encode_payload(text: str, is_hex: bool) -> bytes:
    """
    Converts form text into payload bytes.

    Raises:
        OddLengthHexError: If is_hex and the text has an odd number of hex digits.
    """
    if is_hex:
        return parse_hex(text)
    return text.encode('utf-8')


def byte_info(text: str, is_hex: bool) -> str:
    """
    Live feedback line for the payload field, e.g. '5 bytes (pages needed: 2)'.

    Hex text that cannot be parsed counts as 0 bytes.
    """
    try:
        byte_count = len(encode_payload(text, is_hex))
    except OddLengthHexError:
        byte_count = 0
    return f"{byte_count} bytes (pages needed: {pages_needed(byte_count)})"


@dataclass(frozen=True)
class RawReadRequest:
    start_page: int = DEFAULT_START_PAGE
    page_count: int = DEFAULT_READ_PAGES

    @classmethod
    def from_form(cls, start_text: Optional[str] = None, pages_text: Optional[str] = None) -> 'RawReadRequest':
        start = parse_int_or_none(start_text)
        pages = parse_int_or_none(pages_text)
        return cls(
            start_page=DEFAULT_START_PAGE if start is None else start,
            page_count=DEFAULT_READ_PAGES if pages is None else pages,
        )


@dataclass(frozen=True)
class RawWriteRequest:
    """
    A pending raw write.

    `page_count` None (or <= 0) means "as many pages as the payload needs";
    a positive value is used verbatim, padding or truncating the payload.
    """
    text: str
    is_hex: bool = False
    start_page: int = DEFAULT_START_PAGE
    page_count: Optional[int] = None

    @classmethod
    def from_form(
        cls,
        text: Optional[str],
        is_hex: bool = False,
        start_text: Optional[str] = None,
        pages_text: Optional[str] = None,
    ) -> 'RawWriteRequest':
        start = parse_int_or_none(start_text)
        return cls(
            text=text or '',
            is_hex=is_hex,
            start_page=DEFAULT_START_PAGE if start is None else start,
            page_count=parse_int_or_none(pages_text),
        )

    def payload(self) -> bytes:
        return encode_payload(self.text, self.is_hex)

    def resolved_page_count(self) -> int:
        return effective_page_count(self.page_count, len(self.payload()))

    def validate(self) -> bytes:
        """
        Checks the request before any tag is touched.

        Returns:
            The payload bytes.

        Raises:
            InvalidStartPageError: If start_page < 4.
            OddLengthHexError: If the hex payload cannot be parsed.
        """
        if self.start_page < FIRST_USER_PAGE:
            raise InvalidStartPageError(self.start_page, FIRST_USER_PAGE)
        return self.payload()
