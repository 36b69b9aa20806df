# lexer.py
# Byte-level lexer for the coordinate-pair JSON engine.
#
# =============================================================================
#  LEXER: SINGLE PASS, ONE BYTE OF LOOKAHEAD
# =============================================================================
#
# The lexer walks the input once, left to right, and classifies every byte
# into exactly one token. Dispatch is on the current byte alone:
#
#   { } [ ] , :      punctuation, one byte each
#   "                string literal up to the next unescaped quote
#   SP HT CR LF      whitespace, one SPACE token per byte (or per run)
#   0-9 -            number literal, greedy over [0-9.eE+-]
#   t f n            true / false / null, matched by first byte only
#
# Grammar restrictions (kept on purpose, see DESIGN.md):
#   - escapes are not decoded: the backslash is dropped and the byte after
#     it is kept as-is, so \" -> " and \n -> n.
#   - number text is not validated beyond float() conversion, so 1-2-3 is
#     one token that fails with MalformedNumber.
#   - keyword tails are skipped unchecked unless strict_literals is set.
#
# The whole token list is materialized before parsing starts
# [craftinginterpreters.com, Scanning].
# =============================================================================

from typing import List, Union

from json_model import (
    PUNCTUATION,
    InvalidCharacter,
    MalformedNumber,
    MalformedString,
    Token,
    TokenKind,
    TruncatedInput,
)

# ---------------------------------------------------------------------------
# BYTE CLASSES
# ---------------------------------------------------------------------------
WHITESPACE   = frozenset(b" \t\r\n")
NUMBER_START = frozenset(b"0123456789-")
NUMBER_BODY  = frozenset(b"0123456789.eE+-")
QUOTE        = ord('"')
BACKSLASH    = ord("\\")

# first byte -> (full keyword, token kind, token value)
KEYWORDS = {
    ord("t"): (b"true", TokenKind.BOOLEAN, True),
    ord("f"): (b"false", TokenKind.BOOLEAN, False),
    ord("n"): (b"null", TokenKind.NULL, None),
}

BytesLike = Union[bytes, bytearray, memoryview, str]

# ---------------------------------------------------------------------------
# BYTE CURSOR
# ---------------------------------------------------------------------------
class ByteCursor:
    """Advance-only position over a byte buffer."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def peek(self) -> int:
        """Current byte, or -1 at end of input."""
        if self.pos < len(self.data):
            return self.data[self.pos]
        return -1

    def advance(self, count: int = 1) -> None:
        self.pos += count

# ---------------------------------------------------------------------------
# LITERAL SCANNERS
# ---------------------------------------------------------------------------
def _scan_string(cur: ByteCursor) -> Token:
    """
    Consume a string literal; the cursor sits on the opening quote.

    Only the quote and backslash bytes are special. The accumulated bytes
    are decoded as UTF-8 once the closing quote is found.
    """
    start = cur.pos
    cur.advance()
    buf = bytearray()
    while True:
        b = cur.peek()
        if b < 0:
            raise TruncatedInput("string", start)
        cur.advance()
        if b == QUOTE:
            break
        if b == BACKSLASH:
            escaped = cur.peek()
            if escaped < 0:
                raise TruncatedInput("string escape", start)
            cur.advance()
            buf.append(escaped)
            continue
        buf.append(b)
    try:
        text = buf.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedString(start, f"invalid UTF-8 ({exc.reason})") from None
    return Token(TokenKind.STRING, text, start)


def _scan_number(cur: ByteCursor) -> Token:
    start = cur.pos
    while cur.peek() in NUMBER_BODY:
        cur.advance()
    text = bytes(cur.data[start:cur.pos]).decode("ascii")
    try:
        value = float(text)
    except ValueError:
        raise MalformedNumber(text, start) from None
    return Token(TokenKind.NUMBER, value, start)


def _scan_keyword(cur: ByteCursor, strict: bool) -> Token:
    start = cur.pos
    word, kind, value = KEYWORDS[cur.peek()]
    end = start + len(word)
    if end > len(cur.data):
        raise TruncatedInput(f"literal '{word.decode()}'", start)
    if strict:
        for i, expected in enumerate(word):
            actual = cur.data[start + i]
            if actual != expected:
                raise InvalidCharacter(actual, start + i)
    cur.advance(len(word))
    return Token(kind, value, start)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def tokenize(data: BytesLike, *, coalesce_whitespace: bool = False,
             strict_literals: bool = False) -> List[Token]:
    """
    Convert raw bytes into an ordered list of tokens.

    A str is encoded as UTF-8 first. With coalesce_whitespace a run of
    whitespace bytes yields one SPACE token instead of one per byte; the
    parser treats SPACE tokens as interchangeable so the resulting tree is
    the same. With strict_literals the tails of true/false/null are
    checked instead of skipped.

    Raises a LexError subclass on the first problem; no partial token list
    is ever returned.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    cur = ByteCursor(bytes(data))
    tokens: List[Token] = []

    while not cur.at_end():
        b = cur.peek()
        kind = PUNCTUATION.get(b)
        if kind is not None:
            tokens.append(Token(kind, None, cur.pos))
            cur.advance()
        elif b == QUOTE:
            tokens.append(_scan_string(cur))
        elif b in WHITESPACE:
            tokens.append(Token(TokenKind.SPACE, None, cur.pos))
            cur.advance()
            if coalesce_whitespace:
                while cur.peek() in WHITESPACE:
                    cur.advance()
        elif b in NUMBER_START:
            tokens.append(_scan_number(cur))
        elif b in KEYWORDS:
            tokens.append(_scan_keyword(cur, strict_literals))
        else:
            raise InvalidCharacter(b, cur.pos)

    return tokens
