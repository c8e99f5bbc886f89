import copy

from dataclasses import dataclass
from typing import Any, Optional

@dataclass
class Position:
    line: int
    column: int

# Single-byte ASCII whitespace; other Unicode spaces are token characters
WHITESPACE = frozenset(" \t\n\r\x0b\x0c")
LINE_TERMINATOR = "\n"

def is_whitespace(char: str) -> bool:
    return char in WHITESPACE

# --- Token Definition ---

@dataclass
class Token:
    text: str
    position: Position

    def __init__(self, text: str, position: Position):
        self.text = text
        self.position = copy.deepcopy(position)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Token({self.text!r}, Ln {self.position.line}, Col {self.position.column})"

# --- Extraction target ---

@dataclass
class Slot:
    """
    Out-parameter for ``stream >> slot``: ``kind`` selects the parser and
    ``value`` receives the parsed token.
    """
    kind: Any = str
    value: Optional[Any] = None
