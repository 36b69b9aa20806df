import pytest

from json_model import (
    InvalidCharacter,
    MalformedNumber,
    MalformedString,
    Token,
    TokenKind as K,
    TruncatedInput,
)
from lexer import tokenize

SP = Token(K.SPACE)


def kinds(data, **kw):
    return [t.kind for t in tokenize(data, **kw)]


def test_key_true_object():
    assert tokenize(b'{"key": true}') == [
        Token(K.LEFT_BRACE),
        Token(K.STRING, "key"),
        Token(K.COLON),
        SP,
        Token(K.BOOLEAN, True),
        Token(K.RIGHT_BRACE),
    ]


def test_sequence_of_keyword_objects():
    toks = tokenize(b'{"key": true}, {"key": false}, {"key": null}')
    values = [t.value for t in toks if t.kind in (K.BOOLEAN, K.NULL)]
    assert values == [True, False, None]
    assert kinds(b'{"key": null}')[-2] == K.NULL


def test_punctuation():
    assert kinds(b"{}[],:") == [
        K.LEFT_BRACE, K.RIGHT_BRACE, K.LEFT_BRACKET, K.RIGHT_BRACKET, K.COMMA, K.COLON,
    ]


def test_each_whitespace_byte_is_its_own_token():
    assert tokenize(b" \t\r\n") == [SP, SP, SP, SP]


def test_coalesced_whitespace():
    assert tokenize(b"[ \n\t 1 ,\n 2]", coalesce_whitespace=True) == [
        Token(K.LEFT_BRACKET), SP, Token(K.NUMBER, 1.0), SP,
        Token(K.COMMA), SP, Token(K.NUMBER, 2.0), Token(K.RIGHT_BRACKET),
    ]


@pytest.mark.parametrize("text, value", [
    (b"0", 0.0),
    (b"42", 42.0),
    (b"-3e1", -30.0),
    (b"2.5", 2.5),
    (b"1E+2", 100.0),
    (b"-0.125e-1", -0.0125),
])
def test_numbers(text, value):
    assert tokenize(text) == [Token(K.NUMBER, value)]


def test_number_is_always_float():
    (tok,) = tokenize(b"7")
    assert isinstance(tok.value, float)


def test_number_stops_at_delimiter():
    assert tokenize(b"[12,3]") == [
        Token(K.LEFT_BRACKET), Token(K.NUMBER, 12.0), Token(K.COMMA),
        Token(K.NUMBER, 3.0), Token(K.RIGHT_BRACKET),
    ]


@pytest.mark.parametrize("text", [b"1-2-3", b"-", b"1e", b"1..2", b"--1"])
def test_malformed_number(text):
    with pytest.raises(MalformedNumber) as ei:
        tokenize(b"[" + text + b"]")
    assert ei.value.text == text.decode()
    assert ei.value.offset == 1


def test_string_copies_text():
    assert tokenize(b'"hello world"') == [Token(K.STRING, "hello world")]


def test_empty_string():
    assert tokenize(b'""') == [Token(K.STRING, "")]


@pytest.mark.parametrize("raw, text", [
    (rb'"a\"b"', 'a"b'),
    (rb'"a\\b"', "a\\b"),
    (rb'"line\nbreak"', "linenbreak"),
    (rb'"\u0041"', "u0041"),
])
def test_escape_keeps_following_byte_only(raw, text):
    assert tokenize(raw) == [Token(K.STRING, text)]


def test_string_utf8_decoded():
    assert tokenize('"héllo"'.encode("utf-8")) == [Token(K.STRING, "héllo")]


def test_string_invalid_utf8():
    with pytest.raises(MalformedString):
        tokenize(b'"\xff"')


def test_keywords_skip_tail_unchecked():
    # only the first byte decides
    assert tokenize(b"txyz") == [Token(K.BOOLEAN, True)]
    assert tokenize(b"fabcd") == [Token(K.BOOLEAN, False)]
    assert tokenize(b"nope") == [Token(K.NULL)]


def test_strict_literals_checks_tail():
    assert tokenize(b"[true,false,null]", strict_literals=True)[1] == Token(K.BOOLEAN, True)
    with pytest.raises(InvalidCharacter) as ei:
        tokenize(b"[trux]", strict_literals=True)
    assert ei.value.byte == ord("x")
    assert ei.value.offset == 4


def test_invalid_character_unquoted_key():
    with pytest.raises(InvalidCharacter) as ei:
        tokenize(b"{key: 1}")
    assert ei.value.byte == ord("k")
    assert ei.value.offset == 1
    assert "invalid character 'k' at offset 1" in str(ei.value)


def test_invalid_character_non_printable():
    with pytest.raises(InvalidCharacter) as ei:
        tokenize(b"[\x00]")
    assert "\\x00" in str(ei.value)


@pytest.mark.parametrize("data, what", [
    (b'["abc', "string"),
    (b'["abc\\', "string escape"),
    (b"[tr", "literal 'true'"),
    (b"[fal", "literal 'false'"),
    (b"[nu", "literal 'null'"),
])
def test_truncated_input(data, what):
    with pytest.raises(TruncatedInput) as ei:
        tokenize(data)
    assert what in str(ei.value)
    assert ei.value.offset == 1


def test_offsets_recorded():
    toks = tokenize(b'{"a": 10}')
    assert [t.offset for t in toks] == [0, 1, 4, 5, 6, 8]


def test_str_input_is_encoded():
    assert tokenize("[1]") == tokenize(b"[1]")


def test_bytearray_and_memoryview_accepted():
    assert tokenize(bytearray(b"[null]")) == tokenize(memoryview(b"[null]"))


def test_empty_input_gives_no_tokens():
    assert tokenize(b"") == []


def test_trailing_whitespace_only_adds_space_tokens():
    doc = b'{"pairs": [{"x0": 1.5}]}'
    assert tokenize(doc + b" \n") == tokenize(doc) + [SP, SP]


def test_lex_errors_are_syntax_errors():
    with pytest.raises(SyntaxError):
        tokenize(b"@")
