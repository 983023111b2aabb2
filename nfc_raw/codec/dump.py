# nfc_raw/codec/dump.py

"""Result of a raw read and its human readable renderings."""

from dataclasses import dataclass
from typing import Iterator, Tuple

from nfc_raw.codec.hex_codec import encode_ascii
from nfc_raw.codec.page_math import PAGE_SIZE

Page = Tuple[int, bytes]


@dataclass(frozen=True)
class TagDump:
    """Ordered (page address, 4-byte buffer) pairs produced by one read."""
    pages: Tuple[Page, ...] = ()

    def __post_init__(self):
        # Accept any iterable of pairs but store an immutable tuple
        pages = tuple((int(address), bytes(buffer)) for address, buffer in self.pages)
        for address, buffer in pages:
            if len(buffer) != PAGE_SIZE:
                raise ValueError(f"Page {address} holds {len(buffer)} bytes, expected {PAGE_SIZE}.")
        object.__setattr__(self, 'pages', pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    @property
    def data(self) -> bytes:
        """All page buffers concatenated in dump order."""
        return b''.join(buffer for _, buffer in self.pages)

    @property
    def hex_text(self) -> str:
        return format_hex(self)

    @property
    def ascii_text(self) -> str:
        return format_ascii(self)


def format_page_line(address: int, buffer: bytes) -> str:
    """Renders one page as '04: DE AD BE EF'."""
    return f"{address:02d}: {buffer.hex(' ').upper()}"


def format_hex(dump: TagDump) -> str:
    """
    One line per page, joined by newlines, in dump order.

    The address is decimal and zero padded to two digits; page bytes are
    uppercase hex separated by single spaces.
    """
    return '\n'.join(format_page_line(address, buffer) for address, buffer in dump)


def format_ascii(dump: TagDump) -> str:
    """The 4-character ASCII previews of all pages, concatenated."""
    return ''.join(encode_ascii(buffer) for _, buffer in dump)
