import logging
from typing import Optional

from cinput.sources import ByteSource, FillStatus
from cinput.utils import MalformedEncodingException, SourceReadException

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 8192


def sequence_length(lead: int) -> int:
    """Number of bytes announced by a UTF-8 lead byte, 0 if it cannot start a character."""
    if lead < 0x80:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 0


class BufferedDecoder:
    """
    Pulls bytes from a ByteSource into a fixed buffer and hands out complete
    UTF-8 characters one at a time.

    A multi-byte sequence cut off by the end of the buffer is moved into a
    carry-over region and completed from the next refills, so it decodes the
    same for every buffer capacity. Malformed input ends the stream.
    """
    def __init__(self, source: ByteSource, capacity: int = DEFAULT_BUFFER_SIZE):
        if capacity < 1:
            raise ValueError(f"buffer capacity must be positive, got {capacity}")
        self._source = source
        self._buffer = bytearray(capacity)
        self._view = memoryview(self._buffer)
        self._fill_len: int = 0
        self._cursor: int = 0
        self._valid: bool = True
        self._pending = bytearray()
        self._expected: int = 0
        self._lookahead: Optional[str] = None
        self._consumed: int = 0
        self.error: Optional[Exception] = None

    def valid(self) -> bool:
        return self._valid

    def ensure_data(self) -> bool:
        """Refills the buffer once it is drained. Returns False if nothing new arrived."""
        if self._cursor < self._fill_len:
            return True
        if not self._valid:
            return False

        self._cursor = 0
        self._fill_len = 0
        result = self._source.fill(self._view)

        if result.status is FillStatus.FILLED:
            self._fill_len = result.count
            logger.debug("Read %d bytes from %s", result.count, self._source.name)
            return True
        if result.status is FillStatus.WOULD_BLOCK:
            return False

        if result.status is FillStatus.ERROR:
            self.error = SourceReadException(self._source.name, result.cause)
        logger.debug("%s reached %s", self._source.name, result.status)
        self._valid = False
        if self._pending:
            self._malformed()
        return False

    def _next_byte(self) -> Optional[int]:
        if self._cursor == self._fill_len and not self.ensure_data():
            return None
        byte = self._buffer[self._cursor]
        self._cursor += 1
        self._consumed += 1
        return byte

    def _malformed(self) -> None:
        offset = self._consumed - len(self._pending)
        self.error = MalformedEncodingException(bytes(self._pending), offset)
        logger.warning("%s in %s, stopping", self.error.message, self._source.name)
        self._pending.clear()
        self._expected = 0
        self._valid = False
        self._cursor = self._fill_len = 0

    def _decode(self) -> Optional[str]:
        if not self._pending:
            lead = self._next_byte()
            if lead is None:
                return None
            if lead < 0x80:
                return chr(lead)
            self._pending.append(lead)
            self._expected = sequence_length(lead)
            if self._expected == 0:
                self._malformed()
                return None

        while len(self._pending) < self._expected:
            if self._cursor == self._fill_len and not self.ensure_data():
                return None
            take = min(self._expected - len(self._pending), self._fill_len - self._cursor)
            self._pending += self._buffer[self._cursor:self._cursor + take]
            self._cursor += take
            self._consumed += take

        try:
            char = self._pending.decode("utf-8")
        except UnicodeDecodeError:
            self._malformed()
            return None
        self._pending.clear()
        self._expected = 0
        return char

    def next_char(self) -> Optional[str]:
        if self._lookahead is not None:
            char, self._lookahead = self._lookahead, None
            return char
        return self._decode()

    def peek_char(self) -> Optional[str]:
        if self._lookahead is None:
            self._lookahead = self._decode()
        return self._lookahead

    def close(self) -> None:
        self._source.close()
        self._valid = False
        self._lookahead = None
        self._cursor = self._fill_len = 0
