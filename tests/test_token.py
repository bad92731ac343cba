import pytest

from monkey.monkey_token import KEYWORDS, Token, TokenType, lookup_identifier


@pytest.mark.parametrize(
    "word,expected",
    [
        ("fn", TokenType.FUNCTION),
        ("let", TokenType.LET),
        ("true", TokenType.TRUE),
        ("false", TokenType.FALSE),
        ("if", TokenType.IF),
        ("else", TokenType.ELSE),
        ("return", TokenType.RETURN),
    ],
)  # type: ignore[misc]
def test_lookup_keyword(word: str, expected: TokenType) -> None:
    assert lookup_identifier(word) is expected


@pytest.mark.parametrize("word", ["foo", "Let", "FN", "iff", "x1", "_"])  # type: ignore[misc]
def test_lookup_identifier_defaults(word: str) -> None:
    assert lookup_identifier(word) is TokenType.IDENTIFIER


def test_keyword_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        KEYWORDS["while"] = TokenType.IDENTIFIER  # type: ignore[index]


def test_keyword_kinds_are_distinct() -> None:
    kinds = list(KEYWORDS.values())
    assert len(set(kinds)) == len(kinds)
    assert TokenType.IDENTIFIER not in kinds


def test_token_type_str_is_display_name() -> None:
    assert str(TokenType.ASSIGN) == "="
    assert str(TokenType.IDENTIFIER) == "IDENTIFIER"
    assert str(TokenType.NOT_EQUAL) == "!="


def test_token_repr_and_eq() -> None:
    t1 = Token(TokenType.INT, "42", 1, 2)
    t2 = Token(TokenType.INT, "42", 1, 2)
    t3 = Token(TokenType.IDENTIFIER, "x")

    assert repr(t1) == "Token(INT, '42')"
    assert t1 == t2
    assert t1 != t3
    assert t1 != "42"

    token_set = {t1, t2, t3}
    assert len(token_set) == 2
