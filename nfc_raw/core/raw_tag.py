# nfc_raw/core/raw_tag.py

import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from nfc_raw.codec.dump import TagDump
from nfc_raw.codec.page_math import effective_page_count
from nfc_raw.codec.raw_read import assemble
from nfc_raw.codec.raw_write import compose, write_pages
from nfc_raw.core.request import RawReadRequest, RawWriteRequest
from nfc_raw.core.status import ConnectionStatus
from nfc_raw.transport.base import BaseTagSession
from nfc_raw.utils.tag_utils import TagInfo

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class RawReadResult:
    dump: TagDump
    tag_info: Optional[TagInfo] = None


@dataclass(frozen=True)
class RawWriteResult:
    start_page: int
    page_count: int
    byte_count: int
    tag_info: Optional[TagInfo] = None

    @property
    def last_page(self) -> int:
        return self.start_page + self.page_count - 1

    def summary(self) -> str:
        """Human readable page range, e.g. 'pages 4..5'."""
        return f"pages {self.start_page}..{self.last_page}"


class RawTagClient:
    """
    Runs raw page reads and writes against one tag session.

    Each operation validates its request, connects the session, runs to
    completion on the calling thread and closes the session exactly once,
    whatever the outcome. Failures from the session are never retried.
    """

    def __init__(self, session: BaseTagSession):
        """
        Initializes the client.

        Args:
            session: An instance of a BaseTagSession implementation.
        """
        if not isinstance(session, BaseTagSession):
            raise TypeError("session must be an instance of BaseTagSession")

        self._session = session
        self._state: ConnectionStatus = ConnectionStatus.DISCONNECTED

        logger.debug(f"RawTagClient initialized with session: {type(session).__name__}")

    @property
    def status(self) -> ConnectionStatus:
        """Returns the connection status of the last operation."""
        return self._state

    @property
    def session(self) -> BaseTagSession:
        return self._session

    def _update_status(self, new_status: ConnectionStatus) -> None:
        if self._state != new_status:
            logger.debug(f"Client status changed: {self._state.name} -> {new_status.name}")
            self._state = new_status

    def _run(self, operation: Callable[[], T]) -> T:
        """Connects, runs `operation`, and always closes the session once."""
        self._update_status(ConnectionStatus.CONNECTING)
        failed = False
        try:
            self._session.connect()
            self._update_status(ConnectionStatus.CONNECTED)
            return operation()
        except BaseException:
            failed = True
            raise
        finally:
            self._close_session(failed)

    def _close_session(self, failed: bool) -> None:
        self._update_status(ConnectionStatus.DISCONNECTING)
        try:
            self._session.close()
        except Exception as e:
            # A failing close must not replace the operation's own result or error
            logger.warning(f"Ignoring error while closing {type(self._session).__name__}: {e}")
        self._update_status(ConnectionStatus.ERROR if failed else ConnectionStatus.DISCONNECTED)

    def read_raw(self, request: RawReadRequest) -> RawReadResult:
        """
        Reads `request.page_count` pages from `request.start_page`.

        Raises:
            NotSupportedTagError: If the session rejects the tag.
            TransportError: If a block read fails. The read is not retried.
        """
        logger.info(f"Raw read: {request.page_count} page(s) from page {request.start_page}")

        def operation() -> RawReadResult:
            dump = assemble(request.start_page, request.page_count, self._session.read_block)
            return RawReadResult(dump=dump, tag_info=self._session.tag_info)

        result = self._run(operation)
        logger.info(f"Raw read OK: {len(result.dump)} page(s)")
        return result

    def write_raw(self, request: RawWriteRequest) -> RawWriteResult:
        """
        Writes the request payload page by page.

        The request is validated and the pages are composed before the
        session is opened, so a bad start page or bad hex never touches
        the tag.

        Raises:
            InvalidStartPageError: If start_page < 4.
            OddLengthHexError: If the hex payload cannot be parsed.
            NotSupportedTagError: If the session rejects the tag.
            TransportError: On the first failed page write. Pages already
                written are not rolled back.
        """
        payload = request.validate()
        page_count = effective_page_count(request.page_count, len(payload))
        pages = compose(request.start_page, page_count, payload)
        logger.info(f"Raw write: {len(payload)} bytes -> {page_count} page(s) from page {request.start_page}")

        def operation() -> RawWriteResult:
            write_pages(self._session.write_page, pages)
            return RawWriteResult(
                start_page=request.start_page,
                page_count=page_count,
                byte_count=len(payload),
                tag_info=self._session.tag_info,
            )

        result = self._run(operation)
        logger.info(f"Raw write OK ({result.summary()})")
        return result

    def __repr__(self) -> str:
        return f"RawTagClient(session={type(self._session).__name__}, status={self._state})"
