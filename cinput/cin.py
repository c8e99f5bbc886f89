import logging
import sys
import threading
import time
from typing import Any, Callable, Optional

from cinput.sources import ByteSource, stdin_source
from cinput.stream import RInStream
from cinput.tokens import Slot
from cinput.utils import Config, EndOfStreamException, RetriesExhaustedException

logger: logging.Logger = logging.getLogger(__name__)

# Process wide stream over stdin, created on first use
_GLOBAL_LOCK = threading.Lock()
_global_stream: Optional[RInStream] = None
_global_config: Config = Config()
_global_source: Optional[ByteSource] = None

_MISSING = object()


def _stream() -> RInStream:
    """Returns the global stream. Caller must hold _GLOBAL_LOCK."""
    global _global_stream
    if _global_stream is None:
        source = _global_source if _global_source is not None else stdin_source()
        _global_stream = RInStream.from_source(source, _global_config)
        logger.debug("Created global stream over %s", source.name)
    return _global_stream


def bind(source: Optional[ByteSource] = None, config: Optional[Config] = None) -> None:
    """
    Replaces the global stream. Buffered but unread input of the previous
    stream is dropped. With no source the next access reopens stdin.
    """
    global _global_stream, _global_config, _global_source
    with _GLOBAL_LOCK:
        _global_stream = None
        _global_source = source
        _global_config = config if config else Config()


def _flush_stdout() -> None:
    if _global_config.flush_stdout and sys.stdout is not None:
        sys.stdout.flush()


class RCin:
    """
    Stateless handle to the global stdin stream. Every method is one locked
    operation, so threads interleave at token or line granularity.
    """

    def _locked(self, operation: Callable[[RInStream], Any]) -> Any:
        with _GLOBAL_LOCK:
            return operation(_stream())

    def read(self, kind: Any = str) -> Optional[Any]:
        return self._locked(lambda stream: stream.read(kind))

    def read_line(self) -> Optional[str]:
        return self._locked(lambda stream: stream.read_line())

    def skip_line(self) -> bool:
        """Skips all chars until next newline."""
        return self._locked(lambda stream: stream.skip_line())

    def skip(self, count: int) -> int:
        return self._locked(lambda stream: stream.skip(count))

    def read_char(self) -> Optional[str]:
        """Reads the next character (can be whitespace)."""
        return self._locked(lambda stream: stream.read_char())

    def valid(self) -> bool:
        return self._locked(lambda stream: stream.valid())

    def extract_into(self, slot: Slot) -> bool:
        return self._locked(lambda stream: stream.extract_into(slot))

    __rshift__ = extract_into

    def _read_until_success(self, kind: Any) -> Any:
        retries = _global_config.max_retries
        attempts = 0
        with _GLOBAL_LOCK:
            stream = _stream()
            while True:
                token = stream.tokenizer.next_token()
                if token is not None:
                    value = stream.convert(token, kind)
                    if value is not None:
                        return value
                elif not stream.valid():
                    raise EndOfStreamException(stream.name)
                attempts += 1
                if retries is not None and attempts >= retries:
                    raise RetriesExhaustedException(attempts)
                # wait only while the source has nothing to hand out
                if token is None and _global_config.retry_interval > 0:
                    time.sleep(_global_config.retry_interval)

    def read_next(self, kind: Any = str) -> Any:
        """
        Blocks until a token parses as kind and returns it, discarding tokens
        that do not. Raises EndOfStreamException once stdin is exhausted and
        RetriesExhaustedException when Config.max_retries is exceeded.
        """
        _flush_stdout()
        return self._read_until_success(kind)

    def read_safe(self, kind: Any = str, default: Any = _MISSING) -> Any:
        """Like read_next, but returns default (or kind()) instead of raising."""
        _flush_stdout()
        try:
            return self._read_until_success(kind)
        except (EndOfStreamException, RetriesExhaustedException) as e:
            logger.debug("read_safe falls back to default: %s", e)
            return kind() if default is _MISSING else default

    def pause(self, prompt: Optional[str] = None) -> None:
        """Waits until a full line was entered and discards it."""
        if prompt is not None:
            sys.stdout.write(prompt)
        _flush_stdout()
        self._locked(lambda stream: stream.skip_line())


cin = RCin()

read_next = cin.read_next
read_safe = cin.read_safe
pause = cin.pause
