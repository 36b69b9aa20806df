# json_parser.py
# Structural parser and command-line entry point for the coordinate-pair
# JSON engine. Consumes the token list produced by lexer.tokenize().
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER A TOKEN CURSOR
# =============================================================================
#
# The parser reads the token list once through an advance-only cursor and
# never backtracks [cs.rochester.edu, Recursive-Descent Parsing].
#
# Separators are tolerated rather than enforced:
#   - inside an object, SPACE and COMMA tokens are skipped while looking for
#     a key or '}', and SPACE and COLON tokens are skipped between a key and
#     its value;
#   - inside an array, SPACE and COMMA tokens are skipped between elements.
# So {"a" 1} and [1,,2] parse. Running out of tokens before a container
# closes is always an error; a truncated file never yields a document.
#
# Quoted "true", "false" and "null" stay strings. coerce_literal_strings
# restores the older behaviour that turned them into True/False/None.
#
# Depth guard keeps recursion well below the interpreter's own limit
# [hypertextbookshop.com, Parser Error Handling and Recovery].
# =============================================================================
#  REFERENCES
# =============================================================================
# [1] cs.rochester.edu - Recursive-Descent Parsing
# [2] craftinginterpreters.com - Scanning
# [3] RFC 8259 - The JavaScript Object Notation (JSON) standard
# [4] hypertextbookshop.com - Parser Error Handling and Recovery
# =============================================================================

import argparse
import enum
import sys
from typing import List, Optional, Sequence

from json_model import (
    DepthLimitExceeded,
    EmptyInput,
    JsonObject,
    Member,
    Token,
    TokenKind,
    UnexpectedEof,
    UnexpectedToken,
    Value,
    to_python,
)
from lexer import BytesLike, tokenize

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256    # nested containers; each level costs two Python frames

LITERAL_STRINGS = {"null": None, "true": True, "false": False}

_LEX_OPTIONS   = ("coalesce_whitespace", "strict_literals")
_PARSE_OPTIONS = ("coerce_literal_strings", "max_depth", "allow_trailing",
                  "allow_leading_whitespace")

# ---------------------------------------------------------------------------
# TOKEN CURSOR
# ---------------------------------------------------------------------------
class TokenCursor:
    """
    Advance-only cursor over a materialized token list.

    One cursor is shared by every recursive call of a single parse, which
    is what makes the descent single-pass.
    """
    def __init__(self, tokens: Sequence[Token]):
        self._tokens = tokens
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def peek(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def advance(self) -> Optional[Token]:
        tok = self.peek()
        if tok is not None:
            self._pos += 1
        return tok

    def skip(self, *kinds: TokenKind) -> Optional[Token]:
        """Advance past tokens of the given kinds; return the next one unconsumed."""
        tok = self.peek()
        while tok is not None and tok.kind in kinds:
            self._pos += 1
            tok = self.peek()
        return tok

# ---------------------------------------------------------------------------
# CONTAINER PARSERS
# ---------------------------------------------------------------------------
class _ObjectState(enum.Enum):
    SEEKING_MEMBER_OR_END = 1
    SEEKING_COLON_OR_SPACE = 2
    DONE = 3


class _Parser:
    def __init__(self, tokens: Sequence[Token], coerce_literal_strings: bool,
                 max_depth: Optional[int]):
        self.cursor = TokenCursor(tokens)
        self.coerce_literal_strings = coerce_literal_strings
        self.max_depth = max_depth

    def _enter(self, depth: int) -> None:
        if self.max_depth is not None and depth > self.max_depth:
            raise DepthLimitExceeded(self.max_depth)

    def parse_object(self, depth: int) -> JsonObject:
        """Entered just after '{' has been consumed."""
        self._enter(depth)
        cur = self.cursor
        members: List[Member] = []
        state = _ObjectState.SEEKING_MEMBER_OR_END
        key = None

        while state is not _ObjectState.DONE:
            if state is _ObjectState.SEEKING_MEMBER_OR_END:
                tok = cur.skip(TokenKind.SPACE, TokenKind.COMMA)
                if tok is None:
                    raise UnexpectedEof("object")
                cur.advance()
                if tok.kind is TokenKind.RIGHT_BRACE:
                    state = _ObjectState.DONE
                elif tok.kind is TokenKind.STRING:
                    key = tok.value
                    state = _ObjectState.SEEKING_COLON_OR_SPACE
                else:
                    raise UnexpectedToken(tok, "STRING key or '}'")
            else:
                tok = cur.skip(TokenKind.SPACE, TokenKind.COLON)
                if tok is None:
                    raise UnexpectedEof("object")
                cur.advance()
                members.append(Member(key, self.parse_value(tok, depth)))
                state = _ObjectState.SEEKING_MEMBER_OR_END

        return JsonObject(tuple(members))

    def parse_array(self, depth: int) -> list:
        """Entered just after '[' has been consumed."""
        self._enter(depth)
        cur = self.cursor
        items = []
        while True:
            tok = cur.skip(TokenKind.SPACE, TokenKind.COMMA)
            if tok is None:
                raise UnexpectedEof("array")
            cur.advance()
            if tok.kind is TokenKind.RIGHT_BRACKET:
                return items
            items.append(self.parse_value(tok, depth))

    # -----------------------------------------------------------------------
    # VALUE DISPATCH
    # -----------------------------------------------------------------------
    def parse_value(self, tok: Token, depth: int) -> Value:
        """Turn one already-consumed token (plus whatever follows) into a value."""
        kind = tok.kind
        if kind is TokenKind.LEFT_BRACE:
            return self.parse_object(depth + 1)
        if kind is TokenKind.LEFT_BRACKET:
            return self.parse_array(depth + 1)
        if kind is TokenKind.STRING:
            if self.coerce_literal_strings and tok.value in LITERAL_STRINGS:
                return LITERAL_STRINGS[tok.value]
            return tok.value
        if kind in (TokenKind.NUMBER, TokenKind.BOOLEAN, TokenKind.NULL):
            return tok.value
        raise UnexpectedToken(tok, "value")

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(tokens: Sequence[Token], *, coerce_literal_strings: bool = False,
          max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT,
          allow_trailing: bool = False,
          allow_leading_whitespace: bool = False) -> Value:
    """
    Parse a token list into a document tree.

    The very first token must open an object or an array; an empty token
    list raises EmptyInput. allow_leading_whitespace skips SPACE tokens
    before the root, and then a list holding only whitespace is empty too.
    After the root closes only whitespace may follow, unless allow_trailing
    is set, in which case the remaining tokens are ignored unread.
    """
    parser = _Parser(tokens, coerce_literal_strings, max_depth)
    cur = parser.cursor

    if allow_leading_whitespace:
        cur.skip(TokenKind.SPACE)
    first = cur.peek()
    if first is None:
        raise EmptyInput()
    if first.kind not in (TokenKind.LEFT_BRACE, TokenKind.LEFT_BRACKET):
        raise UnexpectedToken(first, "'{' or '[' at root")
    cur.advance()
    result = parser.parse_value(first, 0)

    if not allow_trailing:
        extra = cur.skip(TokenKind.SPACE)
        if extra is not None:
            raise UnexpectedToken(extra, "end of input after root value")
    return result


def loads(data: BytesLike, **options) -> Value:
    """
    Lex and parse in one call.

    Keyword options are routed by name: coalesce_whitespace and
    strict_literals go to tokenize(), coerce_literal_strings, max_depth and
    allow_trailing and allow_leading_whitespace go to parse().
    """
    unknown = set(options) - set(_LEX_OPTIONS) - set(_PARSE_OPTIONS)
    if unknown:
        raise TypeError(f"unexpected option(s): {', '.join(sorted(unknown))}")
    lex_opts = {k: v for k, v in options.items() if k in _LEX_OPTIONS}
    parse_opts = {k: v for k, v in options.items() if k in _PARSE_OPTIONS}
    return parse(tokenize(data, **lex_opts), **parse_opts)


def load_file(path, **options) -> Value:
    """Read a whole file into memory, then lex and parse it."""
    with open(path, "rb") as fh:
        data = fh.read()
    return loads(data, **options)

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Command-line interface.

    0 on success, 1 when the document is rejected, 2 when the file cannot
    be read.
    """
    # Imported here: pairs builds on this module.
    from pairs import PairsFormatError, extract_pairs

    ap = argparse.ArgumentParser(description="Coordinate-pair JSON parser")
    ap.add_argument("file", help="JSON file to parse")
    ap.add_argument("--debug", action="store_true", help="dump token stream and exit")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--coerce-literal-strings", action="store_true",
                    help='treat quoted "true", "false", "null" as literals')
    ap.add_argument("--strict-literals", action="store_true",
                    help="check every byte of true/false/null")
    ap.add_argument("--allow-trailing", action="store_true",
                    help="ignore tokens after the root value")
    ap.add_argument("--allow-leading-whitespace", action="store_true",
                    help="skip whitespace before the root value")
    ap.add_argument("--pairs", action="store_true",
                    help="read the document as coordinate pairs and print their count")
    args = ap.parse_args(argv)

    try:
        with open(args.file, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        print(f"error: cannot read {args.file}: {exc.strerror}", file=sys.stderr)
        return 2

    try:
        if args.debug:
            for tok in tokenize(data, strict_literals=args.strict_literals):
                print(tok)
            return 0

        doc = loads(
            data,
            strict_literals=args.strict_literals,
            coerce_literal_strings=args.coerce_literal_strings,
            max_depth=args.max_depth,
            allow_trailing=args.allow_trailing,
            allow_leading_whitespace=args.allow_leading_whitespace,
        )
        if args.pairs:
            print(f"pairs: {len(extract_pairs(doc))}")
        else:
            print(to_python(doc))
        return 0
    except SyntaxError as exc:
        print(f"SyntaxError: {exc}", file=sys.stderr)
        return 1
    except PairsFormatError as exc:
        print(f"PairsFormatError: {exc}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(_cli(sys.argv[1:]))

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
