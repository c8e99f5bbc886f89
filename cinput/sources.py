import io
import logging
import socket
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import BinaryIO, Optional

logger: logging.Logger = logging.getLogger(__name__)


class FillStatus(Enum):
    FILLED = auto()
    WOULD_BLOCK = auto()                # non-blocking source has nothing yet
    END_OF_DATA = auto()
    ERROR = auto()

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class FillResult:
    status: FillStatus
    count: int = 0
    cause: Optional[BaseException] = None

    @classmethod
    def filled(cls, count: int) -> 'FillResult':
        if count <= 0:
            raise ValueError(f"filled count must be positive, got {count}")
        return cls(FillStatus.FILLED, count)

    @classmethod
    def would_block(cls) -> 'FillResult':
        return cls(FillStatus.WOULD_BLOCK)

    @classmethod
    def end_of_data(cls) -> 'FillResult':
        return cls(FillStatus.END_OF_DATA)

    @classmethod
    def error(cls, cause: BaseException) -> 'FillResult':
        return cls(FillStatus.ERROR, cause=cause)


class ByteSource:
    """
    Fills caller supplied byte regions from some backend.

    A source performs no retries and no synchronization; it is driven by
    exactly one decoder.
    """
    name: str = "<source>"

    def fill(self, region: memoryview) -> FillResult:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class StreamSource(ByteSource):
    """Binary file objects, pipes and standard input."""

    def __init__(self, stream: BinaryIO, name: Optional[str] = None, owns: bool = False):
        if isinstance(stream, io.TextIOBase):
            if not hasattr(stream, "buffer"):
                raise TypeError(f"text stream {stream!r} has no binary buffer")
            stream = stream.buffer
        self._stream = stream
        self._owns = owns
        self.name = name or str(getattr(stream, "name", "<stream>"))

    def fill(self, region: memoryview) -> FillResult:
        try:
            # at most one raw read per fill
            readinto = getattr(self._stream, "readinto1", None) or getattr(self._stream, "readinto", None)
            if readinto is not None:
                count = readinto(region)
            else:
                data = self._stream.read(len(region))
                count = None if data is None else len(data)
                if count:
                    region[:count] = data
        except BlockingIOError:
            return FillResult.would_block()
        except (OSError, ValueError) as e:
            # ValueError: the file was closed underneath us
            logger.warning("Reading from %s failed: %s", self.name, e)
            return FillResult.error(e)

        if count is None:
            return FillResult.would_block()
        if count == 0:
            return FillResult.end_of_data()
        return FillResult.filled(count)

    def close(self) -> None:
        if self._owns:
            self._stream.close()


class BytesSource(ByteSource):
    """In-memory data; strings are encoded as UTF-8."""

    def __init__(self, data: bytes | bytearray | memoryview | str, name: str = "<bytes>"):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = memoryview(bytes(data))
        self._offset = 0
        self.name = name

    def fill(self, region: memoryview) -> FillResult:
        remaining = len(self._data) - self._offset
        if remaining == 0:
            return FillResult.end_of_data()
        count = min(remaining, len(region))
        region[:count] = self._data[self._offset:self._offset + count]
        self._offset += count
        return FillResult.filled(count)


class SocketSource(ByteSource):
    def __init__(self, sock: socket.socket, owns: bool = False):
        self._sock = sock
        self._owns = owns
        try:
            self.name = str(sock.getpeername())
        except OSError:
            self.name = "<socket>"

    def fill(self, region: memoryview) -> FillResult:
        try:
            count = self._sock.recv_into(region)
        except BlockingIOError:
            return FillResult.would_block()
        except OSError as e:
            logger.warning("Receiving from %s failed: %s", self.name, e)
            return FillResult.error(e)

        if count == 0:
            return FillResult.end_of_data()
        return FillResult.filled(count)

    def close(self) -> None:
        if self._owns:
            self._sock.close()


def stdin_source() -> ByteSource:
    # No console at all (pythonw, detached services): behave like closed stdin
    if sys.stdin is None:
        return BytesSource(b"", name="<stdin>")
    return StreamSource(sys.stdin, name="<stdin>")
