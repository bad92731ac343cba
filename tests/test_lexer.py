import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_lexer import CharacterStream, Lexer, tokenize
from monkey.monkey_token import KEYWORDS, Token, TokenType


def types_and_literals(source: str) -> list[tuple[TokenType, str]]:
    return [(tok.type, tok.literal) for tok in tokenize(source)]


@pytest.mark.parametrize(
    "char,expected",
    [
        ("=", TokenType.ASSIGN),
        ("+", TokenType.PLUS),
        ("-", TokenType.MINUS),
        ("*", TokenType.STAR),
        ("/", TokenType.SLASH),
        ("!", TokenType.BANG),
        ("<", TokenType.LESS_THAN),
        (">", TokenType.GREATER_THAN),
        (";", TokenType.SEMICOLON),
        (",", TokenType.COMMA),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
        ("{", TokenType.LBRACE),
        ("}", TokenType.RBRACE),
        ("[", TokenType.LBRACKET),
        ("]", TokenType.RBRACKET),
    ],
)  # type: ignore[misc]
def test_single_char_tokens(char: str, expected: TokenType) -> None:
    assert types_and_literals(char) == [(expected, char), (TokenType.EOF, "")]


def test_single_char_sequence() -> None:
    types = [tok.type for tok in tokenize("=!+-*/<>(){},;")]
    assert types == [
        TokenType.ASSIGN,
        TokenType.BANG,
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.LESS_THAN,
        TokenType.GREATER_THAN,
        TokenType.LPAREN,
        TokenType.RPAREN,
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.COMMA,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]


def test_two_char_operators() -> None:
    assert types_and_literals("10==10; 10!=9; = ! ") == [
        (TokenType.INT, "10"),
        (TokenType.EQUAL, "=="),
        (TokenType.INT, "10"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.INT, "10"),
        (TokenType.NOT_EQUAL, "!="),
        (TokenType.INT, "9"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.ASSIGN, "="),
        (TokenType.BANG, "!"),
        (TokenType.EOF, ""),
    ]


def test_triple_equals_is_equal_then_assign() -> None:
    assert [t for t, _ in types_and_literals("===")] == [
        TokenType.EQUAL,
        TokenType.ASSIGN,
        TokenType.EOF,
    ]


def test_source_program() -> None:
    source = """
    let five = 5;
    let add = fn(x, y) {
        x + y;
    };
    if (5 < 10) {
        return true;
    } else {
        return false;
    }
    "foo bar"
    [1, 2];
    """
    assert types_and_literals(source) == [
        (TokenType.LET, "let"),
        (TokenType.IDENTIFIER, "five"),
        (TokenType.ASSIGN, "="),
        (TokenType.INT, "5"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.LET, "let"),
        (TokenType.IDENTIFIER, "add"),
        (TokenType.ASSIGN, "="),
        (TokenType.FUNCTION, "fn"),
        (TokenType.LPAREN, "("),
        (TokenType.IDENTIFIER, "x"),
        (TokenType.COMMA, ","),
        (TokenType.IDENTIFIER, "y"),
        (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"),
        (TokenType.IDENTIFIER, "x"),
        (TokenType.PLUS, "+"),
        (TokenType.IDENTIFIER, "y"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.IF, "if"),
        (TokenType.LPAREN, "("),
        (TokenType.INT, "5"),
        (TokenType.LESS_THAN, "<"),
        (TokenType.INT, "10"),
        (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"),
        (TokenType.RETURN, "return"),
        (TokenType.TRUE, "true"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.ELSE, "else"),
        (TokenType.LBRACE, "{"),
        (TokenType.RETURN, "return"),
        (TokenType.FALSE, "false"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.STRING, "foo bar"),
        (TokenType.LBRACKET, "["),
        (TokenType.INT, "1"),
        (TokenType.COMMA, ","),
        (TokenType.INT, "2"),
        (TokenType.RBRACKET, "]"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.EOF, ""),
    ]


@pytest.mark.parametrize("word", sorted(KEYWORDS))  # type: ignore[misc]
def test_reserved_words(word: str) -> None:
    tok = Lexer.from_source(word).next_token()
    assert tok.type is KEYWORDS[word]
    assert tok.literal == word


@given(
    st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,12}", fullmatch=True).filter(
        lambda s: s not in KEYWORDS
    )
)  # type: ignore[misc]
def test_non_reserved_words_are_identifiers(word: str) -> None:
    assert types_and_literals(word) == [
        (TokenType.IDENTIFIER, word),
        (TokenType.EOF, ""),
    ]


def test_identifier_with_interior_digits() -> None:
    assert types_and_literals("x1y2 _tmp") == [
        (TokenType.IDENTIFIER, "x1y2"),
        (TokenType.IDENTIFIER, "_tmp"),
        (TokenType.EOF, ""),
    ]


def test_digits_then_letters_split() -> None:
    assert types_and_literals("5x") == [
        (TokenType.INT, "5"),
        (TokenType.IDENTIFIER, "x"),
        (TokenType.EOF, ""),
    ]


def test_digit_dot_run_is_one_int_token() -> None:
    assert types_and_literals("3.14 1..2") == [
        (TokenType.INT, "3.14"),
        (TokenType.INT, "1..2"),
        (TokenType.EOF, ""),
    ]


def test_string_token_is_raw() -> None:
    assert types_and_literals('"line\\nbreak" ""') == [
        (TokenType.STRING, "line\\nbreak"),
        (TokenType.STRING, ""),
        (TokenType.EOF, ""),
    ]


def test_unterminated_string_runs_to_end() -> None:
    assert types_and_literals('"abc') == [
        (TokenType.STRING, "abc"),
        (TokenType.EOF, ""),
    ]


@pytest.mark.parametrize("char", ["@", "#", "$", "%", "~", "`", "é", ".", "&"])  # type: ignore[misc]
def test_unrecognized_character_is_illegal(char: str) -> None:
    assert types_and_literals(char) == [
        (TokenType.ILLEGAL, char),
        (TokenType.EOF, ""),
    ]


def test_whitespace_is_skipped() -> None:
    assert types_and_literals(" \t\r\n x \n") == [
        (TokenType.IDENTIFIER, "x"),
        (TokenType.EOF, ""),
    ]


def test_empty_input_returns_eof() -> None:
    assert types_and_literals("") == [(TokenType.EOF, "")]


def test_eof_is_idempotent() -> None:
    lexer = Lexer.from_source("x")
    assert lexer.next_token().type is TokenType.IDENTIFIER
    first = lexer.next_token()
    assert first.type is TokenType.EOF
    for _ in range(3):
        assert lexer.next_token() == first


def test_line_and_column_tracking() -> None:
    tokens = tokenize("let x = 1;\n  y == 2")
    positions = [(tok.literal, tok.line, tok.col) for tok in tokens]
    assert positions[:5] == [
        ("let", 1, 1),
        ("x", 1, 5),
        ("=", 1, 7),
        ("1", 1, 9),
        (";", 1, 10),
    ]
    assert positions[5:8] == [("y", 2, 3), ("==", 2, 5), ("2", 2, 8)]


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab")
    assert stream.current_char == "a"
    assert stream.peek_char() == "b"
    stream.read_char()
    assert stream.current_char == "b"
    assert stream.peek_char() == ""
    assert not stream.end_of_file()
    stream.read_char()
    assert stream.end_of_file()
    assert stream.current_char == ""
    stream.read_char()
    assert stream.position == 2


def test_lexer_is_lazy_iterable() -> None:
    lexer = Lexer.from_source("a b")
    it = iter(lexer)
    assert next(it) == Token(TokenType.IDENTIFIER, "a", 1, 1)
    assert lexer.stream.position == 1
    assert [tok.type for tok in it] == [TokenType.IDENTIFIER, TokenType.EOF]


@given(st.text(max_size=100))  # type: ignore[misc]
def test_lexer_does_not_crash_on_random_input(text: str) -> None:
    tokens = tokenize(text)
    assert tokens[-1].type is TokenType.EOF
    assert all(tok.type is not TokenType.EOF for tok in tokens[:-1])
