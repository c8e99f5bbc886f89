from typing import Any, Callable, Dict, Optional, Type, TypeVar

from cinput.tokens import Position
from cinput.utils import TokenParseException

T = TypeVar("T")


class Char(str):
    """A single character; ``read(Char)`` only accepts one-character tokens."""
    def __new__(cls, value: str = '\0'):
        if len(value) != 1:
            raise ValueError(f"expected exactly one character, got {value!r}")
        return super().__new__(cls, value)


def _parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"expected 'true' or 'false', got {text!r}")


PARSERS: Dict[Any, Callable[[str], Any]] = {
    str: str,
    bool: _parse_bool,
    Char: Char,
}

# Conversions that signal "not a value of this type"
PARSE_ERRORS = (ValueError, TypeError, ArithmeticError)


def register_parser(kind: Type[T], parser: Callable[[str], T]) -> None:
    PARSERS[kind] = parser


def _resolve(kind: Any) -> Callable[[str], Any]:
    if kind in PARSERS:
        return PARSERS[kind]
    from_str = getattr(kind, "from_str", None)
    if callable(from_str):
        return from_str
    if callable(kind):
        return kind
    raise TypeError(f"{kind!r} cannot be parsed from text")


def parse_token(text: str, kind: Any = str, position: Optional[Position] = None) -> Any:
    """Converts the whole token to kind or raises TokenParseException."""
    parser = _resolve(kind)
    try:
        return parser(text)
    except PARSE_ERRORS as e:
        raise TokenParseException(text, kind, position) from e
