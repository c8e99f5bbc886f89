import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from cinput.tokens import Position


class StreamException(Exception):
    def __init__(self, message, position: Optional[Position] = None):
        self.position: Optional[Position] = position
        self.message = message
        if position is not None:
            super().__init__(f'[{position.line}, {position.column}] ERROR {message}')
        else:
            super().__init__(f'ERROR {message}')

# Source Exceptions
class SourceReadException(StreamException):
    def __init__(self, name: str, cause: BaseException):
        self.cause = cause
        message = f"Reading from {name} failed: {cause}"
        super().__init__(message)

class MalformedEncodingException(StreamException):
    def __init__(self, sequence: bytes, offset: int):
        self.sequence = sequence
        self.offset = offset
        message = f"Malformed UTF-8 sequence {sequence!r} at byte {offset}"
        super().__init__(message)

# Token Exceptions
class TokenParseException(StreamException):
    def __init__(self, text: str, kind: Any, position: Optional[Position] = None):
        self.text = text
        self.kind = kind
        message = f"Cannot parse {text!r} as {getattr(kind, '__name__', kind)}"
        super().__init__(message, position)

# Blocking read Exceptions
class EndOfStreamException(StreamException):
    def __init__(self, name: str):
        message = f"No more input available from {name}"
        super().__init__(message)

class RetriesExhaustedException(StreamException):
    def __init__(self, retries: int):
        self.retries = retries
        message = f"No valid value after {retries} attempts"
        super().__init__(message)


@dataclass
class Config:
    """
    retry_interval is the pause between read_next attempts while a
    non-blocking source has no data. The global lock stays held during the
    pause, so other threads wait for the whole read_next call; 0 busy-waits.
    """
    buffer_size: int = 8192
    max_retries: Optional[int] = None
    retry_interval: float = 0.01
    flush_stdout: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {self.buffer_size}")
        if self.max_retries is not None and self.max_retries < 1:
            raise ValueError(f"max_retries must be positive, got {self.max_retries}")
        if self.retry_interval < 0:
            raise ValueError(f"retry_interval must not be negative, got {self.retry_interval}")

    @staticmethod
    def from_json_file(path: str) -> 'Config':
        with open(path, 'r') as f:
            data = json.load(f)
        return Config(**data)


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def configure_logging(level: str | int = "WARNING") -> None:
    """Installs a stderr handler for the cinput loggers. Only used by front ends."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError("Unknown log level")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("cinput").setLevel(level)
