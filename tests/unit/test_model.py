import pytest

from json_model import (
    EmptyInput,
    JsonObject,
    JsonSyntaxError,
    LexError,
    Member,
    ParseError,
    Token,
    TokenKind as K,
    LexUnexpectedEof,
    TruncatedInput,
    UnexpectedEof,
    UnexpectedToken,
    to_python,
)


def _obj(*pairs):
    return JsonObject([Member(k, v) for k, v in pairs])


def test_token_equality_ignores_offset():
    assert Token(K.COLON, None, 3) == Token(K.COLON, None, 9)
    assert Token(K.STRING, "a", 0) != Token(K.STRING, "b", 0)


def test_token_is_immutable():
    tok = Token(K.NULL)
    with pytest.raises(AttributeError):
        tok.kind = K.COMMA


def test_token_str():
    assert str(Token(K.LEFT_BRACE, None, 0)) == "LEFT_BRACE '{' @0"
    assert str(Token(K.STRING, "k", 1)) == "STRING 'k' @1"
    assert str(Token(K.SPACE, None, 4)) == "SPACE @4"


def test_object_lookup_last_one_wins():
    obj = _obj(("a", 1.0), ("b", 2.0), ("a", 3.0))
    assert len(obj) == 3
    assert obj["a"] == 3.0
    assert obj.get("a") == 3.0
    assert obj.get("zz", "dflt") == "dflt"
    assert "b" in obj and "zz" not in obj
    assert obj.to_dict() == {"a": 3.0, "b": 2.0}


def test_object_missing_key():
    with pytest.raises(KeyError):
        _obj()["nope"]


def test_object_iterates_members_in_order():
    obj = _obj(("z", None), ("a", True))
    assert list(obj) == [Member("z", None), Member("a", True)]
    assert obj.keys() == ["z", "a"]
    assert obj.values() == [None, True]


def test_to_python_recurses():
    tree = _obj(("pairs", [_obj(("x0", 1.0)), "s"]), ("n", None))
    assert to_python(tree) == {"pairs": [{"x0": 1.0}, "s"], "n": None}


def test_error_hierarchy():
    assert issubclass(LexError, JsonSyntaxError)
    assert issubclass(ParseError, JsonSyntaxError)
    assert issubclass(JsonSyntaxError, SyntaxError)
    assert str(EmptyInput()) == "empty input"
    err = UnexpectedToken(Token(K.COMMA, None, 7), "value")
    assert str(err) == "unexpected token COMMA ',' at offset 7 - expected value"
    assert TruncatedInput("string", 2).offset == 2


def test_object_members_frozen():
    obj = _obj(("a", 1.0))
    assert isinstance(obj.members, tuple)
    with pytest.raises(AttributeError):
        obj.members.append(Member("b", 2.0))
    assert obj == JsonObject([Member("a", 1.0)])


def test_object_hashable():
    assert hash(JsonObject()) == hash(_obj())
    assert hash(_obj(("a", 1.0), ("b", None))) == hash(_obj(("a", 1.0), ("b", None)))


def test_lexer_eof_alias():
    assert LexUnexpectedEof is TruncatedInput
    assert issubclass(LexUnexpectedEof, LexError)
    assert not issubclass(LexUnexpectedEof, UnexpectedEof)
