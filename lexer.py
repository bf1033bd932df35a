"""
lexer.py - Regex-driven tokenizer for the tree text format.

Every call matches the longest run at the cursor against four pattern
classes tried in a fixed order (whitespace, string, word, symbol). When
none of them matches, a MALFORMED token is produced; at end of input that
token is zero-width and doubles as the end marker.
"""

import re
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Tuple

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
# Order matters: the first class that matches at the cursor wins.
_WHITESPACE = r"[ \t\n\r]+"
_ESCAPE     = r"\\."
_STRING     = r'"(?:[^"\\]|' + _ESCAPE + r')*"'
_WORD       = r"[A-Za-z0-9_+\-.]+"
_SYMBOL     = r"[{:,}\[\]]"


class TokenKind(Enum):
    MALFORMED  = "?"
    WHITESPACE = "_"
    STRING     = '"'
    WORD       = "a"
    SYMBOL     = "$"


_PATTERNS = (
    (TokenKind.WHITESPACE, re.compile(_WHITESPACE)),
    (TokenKind.STRING,     re.compile(_STRING, re.DOTALL)),
    (TokenKind.WORD,       re.compile(_WORD)),
    (TokenKind.SYMBOL,     re.compile(_SYMBOL)),
)

# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class Token(NamedTuple):
    """
    A classified span of the caller's buffer.

    The token keeps a reference to the source instead of a copy of its
    text; line and column are 1-based and point at the first character.
    """
    kind: TokenKind
    source: str
    begin: int
    end: int
    line: int
    column: int

    @property
    def text(self) -> str:
        return self.source[self.begin:self.end]

    def is_symbol(self, ch: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.text == ch

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, L{self.line}:{self.column})"


# ---------------------------------------------------------------------------
# TOKENIZER
# ---------------------------------------------------------------------------
class Tokenizer:
    """
    Cursor over ``source[begin:end]``.

    The whole state is (position, end, line, column), so ``snapshot()`` is a
    plain copy. The parser peeks by advancing a snapshot and then either
    dropping it or handing it to ``restore()``.
    """

    __slots__ = ("source", "pos", "end", "line", "column")

    def __init__(self, source: str, begin: int = 0, end: Optional[int] = None):
        if end is None:
            end = len(source)
        if not 0 <= begin <= end <= len(source):
            raise ValueError(f"invalid input range [{begin}, {end}) for length {len(source)}")
        self.source = source
        self.pos = begin
        self.end = end
        self.line = 1
        self.column = 1

    def snapshot(self) -> "Tokenizer":
        copy = Tokenizer.__new__(Tokenizer)
        copy.source = self.source
        copy.pos = self.pos
        copy.end = self.end
        copy.line = self.line
        copy.column = self.column
        return copy

    def restore(self, other: "Tokenizer") -> None:
        """Adopt the cursor state of a snapshot taken from this tokenizer."""
        if other.source is not self.source:
            raise ValueError("snapshot belongs to a different input buffer")
        self.pos = other.pos
        self.end = other.end
        self.line = other.line
        self.column = other.column

    @property
    def at_end(self) -> bool:
        return self.pos >= self.end

    def _match(self) -> Tuple[TokenKind, int]:
        for kind, pattern in _PATTERNS:
            m = pattern.match(self.source, self.pos, self.end)
            if m:
                return kind, m.end()
        # Nothing matched: one bad character, or nothing left at all.
        return TokenKind.MALFORMED, min(self.pos + 1, self.end)

    def _advance(self, stop: int) -> None:
        source = self.source
        for i in range(self.pos, stop):
            if source[i] == "\n":
                self.line += 1
                self.column = 0
            self.column += 1
        self.pos = stop

    def next(self) -> Token:
        kind, stop = self._match()
        tok = Token(kind, self.source, self.pos, stop, self.line, self.column)
        self._advance(stop)
        return tok

    def next_non_whitespace(self) -> Token:
        while True:
            tok = self.next()
            if tok.kind is not TokenKind.WHITESPACE:
                return tok

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily from a copy of the cursor; stops after MALFORMED."""
        cursor = self.snapshot()
        while True:
            tok = cursor.next()
            yield tok
            if tok.kind is TokenKind.MALFORMED:
                return


def lex(text: str, begin: int = 0, end: Optional[int] = None) -> Iterator[Token]:
    """Token stream for ``text[begin:end]``, whitespace included."""
    return iter(Tokenizer(text, begin, end))


__all__ = ["TokenKind", "Token", "Tokenizer", "lex"]
