import logging
import socket
from typing import Any, BinaryIO, Iterator, Optional

from cinput.decoder import DEFAULT_BUFFER_SIZE, BufferedDecoder
from cinput.parsers import parse_token
from cinput.sources import ByteSource, BytesSource, SocketSource, StreamSource
from cinput.tokenizer import Tokenizer
from cinput.tokens import Position, Slot, Token
from cinput.utils import Config, TokenParseException

logger: logging.Logger = logging.getLogger(__name__)


class RInStream:
    """
    Typed input stream over a byte source, in the manner of C++ ``cin``.

        with RInStream.from_path("numbers.txt") as stream:
            stream.skip_line()
            slot = Slot(int)
            while stream >> slot:
                print(slot.value)

    Unlike ``cin`` a token is parsed as a whole: ``17GARBAGE`` read as int
    yields None and is consumed, nothing is left behind for the next read.
    Instances are not thread safe.
    """
    def __init__(self, source: ByteSource, capacity: int = DEFAULT_BUFFER_SIZE):
        self._source = source
        self._decoder = BufferedDecoder(source, capacity)
        self._tokenizer = Tokenizer(self._decoder)

    # --- Constructors ---

    @classmethod
    def from_source(cls, source: ByteSource, config: Optional[Config] = None) -> 'RInStream':
        config = config if config else Config()
        return cls(source, config.buffer_size)

    @classmethod
    def from_file(cls, handle: BinaryIO, config: Optional[Config] = None) -> 'RInStream':
        """Reads from an open file; the caller keeps ownership of the handle."""
        return cls.from_source(StreamSource(handle), config)

    @classmethod
    def from_path(cls, path: str, config: Optional[Config] = None) -> 'RInStream':
        """Opens path in binary mode; the handle is closed together with the stream."""
        handle = open(path, "rb")
        return cls.from_source(StreamSource(handle, name=str(path), owns=True), config)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview | str, config: Optional[Config] = None) -> 'RInStream':
        return cls.from_source(BytesSource(data), config)

    @classmethod
    def from_socket(cls, sock: socket.socket, config: Optional[Config] = None) -> 'RInStream':
        return cls.from_source(SocketSource(sock), config)

    # --- Reading ---

    def read(self, kind: Any = str) -> Optional[Any]:
        """Next token converted to kind, None at end of data or if it does not parse."""
        token = self._tokenizer.next_token()
        if token is None:
            return None
        return self.convert(token, kind)

    def convert(self, token: Token, kind: Any = str) -> Optional[Any]:
        """Parses an already consumed token, None if it is not a kind."""
        try:
            return parse_token(token.text, kind, token.position)
        except TokenParseException as e:
            logger.debug("Dropping token: %s", e)
            return None

    def extract_into(self, slot: Slot) -> bool:
        value = self.read(slot.kind)
        if value is None:
            return False
        slot.value = value
        return True

    __rshift__ = extract_into

    def read_line(self) -> Optional[str]:
        return self._tokenizer.next_line_text()

    def skip_line(self) -> bool:
        """Skips all chars until the next newline."""
        return self._tokenizer.skip_line()

    def skip(self, count: int) -> int:
        return self._tokenizer.skip(count)

    def read_char(self) -> Optional[str]:
        """Next character, can be whitespace."""
        return self._tokenizer.read_char()

    def read_token(self) -> Optional[str]:
        return self._tokenizer.next_token_text()

    def values(self, kind: Any = str) -> Iterator[Any]:
        """Parsed values until end of data or the first token that does not parse."""
        while True:
            value = self.read(kind)
            if value is None:
                return
            yield value

    def __iter__(self) -> Iterator[str]:
        return (token.text for token in self._tokenizer)

    # --- State ---

    def valid(self) -> bool:
        """False once the source is exhausted or failed."""
        return self._decoder.valid()

    @property
    def name(self) -> str:
        return self._source.name

    @property
    def error(self) -> Optional[Exception]:
        return self._decoder.error

    def current_pos(self) -> Position:
        return self._tokenizer.current_pos()

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def close(self) -> None:
        self._decoder.close()

    def __enter__(self) -> 'RInStream':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RInStream({self._source!r}, valid={self.valid()})"
