from typing import Iterator, Optional

from cinput.decoder import BufferedDecoder
from cinput.tokens import LINE_TERMINATOR, Position, Token, is_whitespace

# --- Token and Line extraction ---

class Tokenizer:
    """
    Splits decoded characters into whitespace separated tokens and lines,
    tracking the current position (line, column).
    """
    def __init__(self, decoder: BufferedDecoder):
        self._decoder = decoder
        self.line: int = 1
        self.column: int = 0

    def _advance(self) -> Optional[str]:
        char = self._decoder.next_char()
        if char == LINE_TERMINATOR:
            self.line += 1
            self.column = 0
        elif char is not None:
            self.column += 1
        return char

    def current_pos(self) -> Position:
        return Position(self.line, self.column)

    def read_char(self) -> Optional[str]:
        """Next character, whitespace included. None at end of data."""
        return self._advance()

    def skip_whitespace(self) -> Optional[str]:
        """
        Consumes whitespace up to (not including) the next significant
        character and returns that character, None if there is none yet.
        """
        while True:
            char = self._decoder.peek_char()
            if char is None or not is_whitespace(char):
                return char
            self._advance()

    def next_token(self) -> Optional[Token]:
        if self.skip_whitespace() is None:
            return None
        char = self._advance()
        position = self.current_pos()

        chars = [char]
        while True:
            char = self._advance()
            # Terminating whitespace is consumed with the token
            if char is None or is_whitespace(char):
                break
            chars.append(char)
        return Token(''.join(chars), position)

    def next_token_text(self) -> Optional[str]:
        token = self.next_token()
        return token.text if token is not None else None

    def next_line_text(self) -> Optional[str]:
        """
        Characters up to the next newline. The terminator (\\n or \\r\\n) is
        consumed and dropped. Returns None only if no character at all was left.
        """
        chars: list[str] = []
        seen = False
        while True:
            char = self._advance()
            if char is None:
                break
            seen = True
            if char == LINE_TERMINATOR:
                if chars and chars[-1] == '\r':
                    chars.pop()
                break
            chars.append(char)

        if not seen:
            return None
        return ''.join(chars)

    def skip_line(self) -> bool:
        seen = False
        while True:
            char = self._advance()
            if char is None:
                return seen
            seen = True
            if char == LINE_TERMINATOR:
                return True

    def skip(self, count: int) -> int:
        """Discards up to count raw characters. Returns how many were discarded."""
        if count < 0:
            raise ValueError(f"cannot skip a negative number of characters: {count}")
        skipped = 0
        while skipped < count and self._advance() is not None:
            skipped += 1
        return skipped

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                break
            yield token
