# json_model.py
# Shared data model for the coordinate-pair JSON lexer and parser:
# token records, the document tree, and the error taxonomy.
#
# =============================================================================
#  DATA MODEL
# =============================================================================
#
# Lexing hands the parser a materialized list of Token records. The parser
# turns that list into a tree whose scalars are native Python values:
#
#   STRING  -> str       NUMBER  -> float      BOOLEAN -> bool
#   NULL    -> None      array   -> list       object  -> JsonObject
#
# Objects are not dicts. JSON permits repeated keys and this engine keeps
# every member in source order; last-one-wins lookup is left to the caller
# (JsonObject.get, JsonObject.to_dict, to_python).
# =============================================================================

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class TokenKind(enum.Enum):
    LEFT_BRACE    = "{"
    RIGHT_BRACE   = "}"
    LEFT_BRACKET  = "["
    RIGHT_BRACKET = "]"
    COMMA         = ","
    COLON         = ":"
    SPACE         = "SPACE"
    STRING        = "STRING"
    NUMBER        = "NUMBER"
    BOOLEAN       = "BOOLEAN"
    NULL          = "NULL"


PUNCTUATION = {
    ord("{"): TokenKind.LEFT_BRACE,
    ord("}"): TokenKind.RIGHT_BRACE,
    ord("["): TokenKind.LEFT_BRACKET,
    ord("]"): TokenKind.RIGHT_BRACKET,
    ord(","): TokenKind.COMMA,
    ord(":"): TokenKind.COLON,
}


@dataclass(frozen=True)
class Token:
    """
    Immutable token record: (kind, value, offset).

    value holds the text of a STRING, the float of a NUMBER and the bool of
    a BOOLEAN; it is None for everything else. offset is the absolute byte
    offset of the first byte of the token. It feeds error messages only and
    is left out of equality, so Token(TokenKind.COLON) matches a colon
    lexed anywhere.
    """
    kind: TokenKind
    value: Any = None
    offset: int = field(default=-1, compare=False)

    def describe(self) -> str:
        if self.kind in (TokenKind.STRING, TokenKind.NUMBER, TokenKind.BOOLEAN):
            return f"{self.kind.name} {self.value!r}"
        if self.kind in (TokenKind.SPACE, TokenKind.NULL):
            return self.kind.name
        return f"{self.kind.name} '{self.kind.value}'"

    def __str__(self) -> str:
        return f"{self.describe()} @{self.offset}"

# ---------------------------------------------------------------------------
# DOCUMENT TREE
# ---------------------------------------------------------------------------
class Member(NamedTuple):
    key: str
    value: Any


_MISSING = object()


@dataclass(frozen=True)
class JsonObject:
    """
    Ordered sequence of members, duplicates included.

    Lookups by key scan from the end so the last member with a given key
    wins, matching what most JSON consumers do with repeated keys.
    Members are held in a tuple, so the object cannot change once built.
    """
    members: Tuple[Member, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Member]:
        return iter(self.members)

    def __contains__(self, key) -> bool:
        return any(m.key == key for m in self.members)

    def __getitem__(self, key: str):
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def keys(self) -> List[str]:
        return [m.key for m in self.members]

    def values(self) -> List[Any]:
        return [m.value for m in self.members]

    def get(self, key: str, default=None):
        for member in reversed(self.members):
            if member.key == key:
                return member.value
        return default

    def to_dict(self) -> Dict[str, Any]:
        """Shallow dict view; later duplicates overwrite earlier ones."""
        return {m.key: m.value for m in self.members}


Value = Union[JsonObject, list, str, float, bool, None]


def to_python(value: Value):
    """Recursively convert a document tree into plain dicts and lists."""
    if isinstance(value, JsonObject):
        return {m.key: to_python(m.value) for m in value.members}
    if isinstance(value, list):
        return [to_python(item) for item in value]
    return value

# ---------------------------------------------------------------------------
# ERROR TAXONOMY
# ---------------------------------------------------------------------------
# Every failure is a SyntaxError so callers can reject input with a single
# except clause. Nothing is recovered and no partial result escapes.
class JsonSyntaxError(SyntaxError):
    pass


class LexError(JsonSyntaxError):
    pass


class InvalidCharacter(LexError):
    def __init__(self, byte: int, offset: int):
        shown = chr(byte) if 0x20 <= byte < 0x7F else f"\\x{byte:02x}"
        super().__init__(f"invalid character '{shown}' at offset {offset}")
        self.byte = byte
        self.offset = offset


class MalformedNumber(LexError):
    def __init__(self, text: str, offset: int):
        super().__init__(f"malformed number {text!r} at offset {offset}")
        self.text = text
        self.offset = offset


class MalformedString(LexError):
    def __init__(self, offset: int, reason: str):
        super().__init__(f"malformed string at offset {offset}: {reason}")
        self.offset = offset


class TruncatedInput(LexError):
    """
    Input ended inside a string, an escape or a keyword.

    This is the lexer's unexpected-end-of-input error; LexUnexpectedEof is
    the same class under that name. UnexpectedEof is the parser's.
    """

    def __init__(self, what: str, offset: int):
        super().__init__(f"unexpected end of input inside {what} starting at offset {offset}")
        self.offset = offset


LexUnexpectedEof = TruncatedInput


class ParseError(JsonSyntaxError):
    pass


class EmptyInput(ParseError):
    def __init__(self):
        super().__init__("empty input")


class UnexpectedToken(ParseError):
    def __init__(self, token: Token, expected: Optional[str] = None):
        msg = f"unexpected token {token.describe()} at offset {token.offset}"
        if expected:
            msg += f" - expected {expected}"
        super().__init__(msg)
        self.token = token


class UnexpectedEof(ParseError):
    def __init__(self, context: str):
        super().__init__(f"unexpected end of input - unterminated {context}")


class DepthLimitExceeded(ParseError):
    def __init__(self, depth: int):
        super().__init__(f"depth limit exceeded ({depth})")
        self.depth = depth
