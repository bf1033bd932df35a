# json_parser.py
# Recursive-descent reader for the tree text format, plus a small CLI.
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER A COPYABLE CURSOR
# =============================================================================
#
# One Python frame per open container. The grammar needs a single token of
# lookahead, and that lookahead is taken on a snapshot of the tokenizer: the
# snapshot is advanced, inspected, and only handed back to the real cursor
# when the peeked token is the one we wanted.
#
# Scalars are opaque. Numbers, true/false/null and bare identifiers all come
# through as WORD tokens and are stored as text; quoted strings are stored
# with their quotes and escapes intact. Dictionary keys are the exception and
# are always unescaped before insertion.
#
# The first error aborts the whole parse. Nothing is recovered and no partial
# tree is returned.
# =============================================================================

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from json_escape import unescape
from json_value import Value
from json_writer import to_text
from lexer import Token, TokenKind, Tokenizer

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
ERROR_SNIPPET_LEN = 20      # characters of offending text quoted in errors


# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class TreeSyntaxError(SyntaxError):
    """
    Unexpected token. ``line`` and ``column`` are 1-based and locate the
    start of the offending token; ``actual`` is its text, cut short.
    """

    def __init__(self, expected: str, token: Token):
        self.expected = expected
        self.actual = token.text[:ERROR_SNIPPET_LEN]
        self.line = token.line
        self.column = token.column
        super().__init__(
            f"L{self.line}:{self.column}: expected {expected}, got: \"{self.actual}\""
        )


# ---------------------------------------------------------------------------
# PARSER UTILITY
# ---------------------------------------------------------------------------
def _next(tokens: Tokenizer) -> Token:
    tok = tokens.next_non_whitespace()
    log.debug("%s @ L%d:%d: %r", tok.kind.name, tok.line, tok.column, tok.text)
    return tok


def _peek(tokens: Tokenizer) -> Tuple[Token, Tokenizer]:
    """Next significant token, and the advanced snapshot to commit if it is taken."""
    ahead = tokens.snapshot()
    return ahead.next_non_whitespace(), ahead


def _expect(tokens: Tokenizer, symbol: str) -> Token:
    tok = _next(tokens)
    if not tok.is_symbol(symbol):
        raise TreeSyntaxError(f'"{symbol}"', tok)
    return tok


def _close_or_continue(tokens: Tokenizer, closer: str) -> bool:
    """Consume ``,`` (True, keep going) or ``closer`` (False, done)."""
    tok, ahead = _peek(tokens)
    if tok.is_symbol(closer):
        tokens.restore(ahead)
        return False
    if tok.is_symbol(","):
        tokens.restore(ahead)
        return True
    raise TreeSyntaxError(f'"," or "{closer}"', tok)


def _take_empty(tokens: Tokenizer, closer: str) -> bool:
    tok, ahead = _peek(tokens)
    if tok.is_symbol(closer):
        tokens.restore(ahead)
        return True
    return False


# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def _parse_value(tokens: Tokenizer) -> Value:
    tok = _next(tokens)
    if tok.is_symbol("{"):
        return _parse_object(tokens)
    if tok.is_symbol("["):
        return _parse_array(tokens)
    if tok.kind in (TokenKind.MALFORMED, TokenKind.SYMBOL):
        raise TreeSyntaxError("value", tok)
    return Value(tok.text)


def _parse_object(tokens: Tokenizer) -> Value:
    obj = Value().set_dict()
    if _take_empty(tokens, "}"):
        return obj

    while True:
        key = _next(tokens)
        if key.kind is not TokenKind.STRING:
            raise TreeSyntaxError("STRING", key)
        _expect(tokens, ":")
        child = _parse_value(tokens)
        # A repeated key keeps its first position and takes the last value.
        obj._attach(unescape(key.text), child)
        if not _close_or_continue(tokens, "}"):
            return obj


def _parse_array(tokens: Tokenizer) -> Value:
    arr = Value().set_list()
    if _take_empty(tokens, "]"):
        return arr

    i = 0
    while True:
        arr._attach(i, _parse_value(tokens))
        i += 1
        if not _close_or_continue(tokens, "]"):
            return arr


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse_tokens(tokens: Tokenizer) -> Value:
    """
    Read one value from ``tokens``, leaving the cursor just past it.

    Raises TreeSyntaxError on the first unexpected token.
    """
    return _parse_value(tokens)


def parse(text: str, begin: int = 0, end: Optional[int] = None) -> Value:
    """
    Parse the first value in ``text[begin:end]`` into a tree.

    Anything after that value is not looked at.
    """
    return parse_tokens(Tokenizer(text, begin, end))


# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Parse a file and pretty-print it.

    Exit codes: 0 on success, 1 on a syntax error, 2 when the file cannot
    be read.
    """
    ap = argparse.ArgumentParser(description="Parse and pretty-print a tree file")
    ap.add_argument("file", help="file to read")
    ap.add_argument("--debug", action="store_true", help="dump token stream and exit")
    ap.add_argument("--check", action="store_true", help="parse only and print OK")
    ap.add_argument("--indent", default="", help="base indent for the output")
    ap.add_argument("--verbose", action="store_true", help="log the token trace to stderr")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        log.info("reading %s (%d bytes)", args.file, os.path.getsize(args.file))
        with open(args.file, "r", encoding="utf-8") as fh:
            data = fh.read()
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.debug:
        for tok in Tokenizer(data):
            print(repr(tok))
        return 0

    try:
        tree = parse(data)
    except TreeSyntaxError as exc:
        print(f"SyntaxError: {exc}", file=sys.stderr)
        return 1

    if args.check:
        print("OK")
    else:
        print(to_text(tree, args.indent))
    return 0


def main() -> int:
    return _cli(sys.argv[1:])


# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
