"""
Lexical analyzer for the Monkey programming language.

This module converts raw source text into a lazily-produced stream of tokens:

Classes:
    CharacterStream: Cursor over the source text with one character of lookahead
        and line/column tracking.
    Lexer: Produces one Token per call to `next_token()`; iterable up to EOF.

Features:
    - Skips spaces, tabs, newlines and carriage returns
    - Recognizes `==` and `!=` with one character of lookahead
    - Recognizes:
        * Identifiers and keywords (`fn`, `let`, `true`, `false`, `if`, `else`, `return`)
        * Integers (greedy run of digits and dots; conversion happens in the parser)
        * Strings delimited by double quotes (raw, no escape processing)
        * Operators and delimiters

The lexer never raises: unknown characters become ILLEGAL tokens and the end of
input produces EOF on every subsequent call.

Example:
    >>> lexer = Lexer.from_source("let x = 5;")
    >>> [tok.type.name for tok in lexer]
    ['LET', 'IDENTIFIER', 'ASSIGN', 'INT', 'SEMICOLON', 'EOF']

Exports:
    - CharacterStream
    - Lexer
    - tokenize
"""

from collections.abc import Iterator

from monkey.monkey_token import Token, TokenType, lookup_identifier

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "!": TokenType.BANG,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

WHITESPACE = (" ", "\t", "\n", "\r")


def is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch: str) -> bool:
    return ch != "" and "0" <= ch <= "9"


class CharacterStream:
    """
    A cursor over the source text used by the Monkey lexer.

    The stream always exposes the character under the cursor as `current_char`
    (an empty string once the source is exhausted) and never moves backwards.

    Attributes:
        source (str): The input source string.
        position (int): Index of `current_char` in the source.
        next_position (int): Index of the lookahead character.
        current_char (str): Character at `position`, or "" at end of input.
        line (int): Line of `current_char` (1-indexed).
        column (int): Column of `current_char` (1-indexed).
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.next_position = 1
        self.current_char = source[0] if source else ""
        self.line = 1
        self.column = 1

    def read_char(self) -> None:
        """Advances the cursor by one character. No-op at end of input."""
        if self.end_of_file():
            return
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position = self.next_position
        self.next_position += 1
        self.current_char = (
            self.source[self.position] if self.position < len(self.source) else ""
        )

    def peek_char(self) -> str:
        """Returns the character after `current_char` without advancing."""
        if self.next_position >= len(self.source):
            return ""
        return self.source[self.next_position]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Lexer:
    """Lexical analyzer for the Monkey language.

    Attributes:
        stream (CharacterStream): The source cursor being tokenized.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        """Builds a lexer directly over a source string."""
        return cls(CharacterStream(source))

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return

    def skip_whitespace(self) -> None:
        while self.stream.current_char in WHITESPACE:
            self.stream.read_char()

    def read_identifier(self) -> str:
        start = self.stream.position
        while is_letter(self.stream.current_char) or is_digit(self.stream.current_char):
            self.stream.read_char()
        return self.stream.source[start : self.stream.position]

    def read_number(self) -> str:
        start = self.stream.position
        while is_digit(self.stream.current_char) or self.stream.current_char == ".":
            self.stream.read_char()
        return self.stream.source[start : self.stream.position]

    def read_string(self) -> str:
        """Reads the body of a string literal, leaving the cursor on the closing quote."""
        start = self.stream.position + 1
        while True:
            self.stream.read_char()
            if self.stream.current_char in ('"', ""):
                break
        return self.stream.source[start : self.stream.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token. EOF is returned again on every call once the
            source is exhausted.
        """
        self.skip_whitespace()

        stream = self.stream
        line, col = stream.line, stream.column
        ch = stream.current_char

        if stream.end_of_file():
            return Token(TokenType.EOF, "", line, col)

        # 1. Identifier or keyword
        if is_letter(ch):
            literal = self.read_identifier()
            return Token(lookup_identifier(literal), literal, line, col)

        # 2. Integer (digit-dot runs are kept whole; the parser rejects them)
        if is_digit(ch):
            return Token(TokenType.INT, self.read_number(), line, col)

        # 3. Two-character operators, then single-character ones
        if ch == "=" and stream.peek_char() == "=":
            stream.read_char()
            tok = Token(TokenType.EQUAL, "==", line, col)
        elif ch == "!" and stream.peek_char() == "=":
            stream.read_char()
            tok = Token(TokenType.NOT_EQUAL, "!=", line, col)
        elif ch in SINGLE_CHAR_TOKENS:
            tok = Token(SINGLE_CHAR_TOKENS[ch], ch, line, col)
        # 4. String
        elif ch == '"':
            tok = Token(TokenType.STRING, self.read_string(), line, col)
        # 5. Unknown character
        else:
            tok = Token(TokenType.ILLEGAL, ch, line, col)

        stream.read_char()
        return tok


def tokenize(source: str) -> list[Token]:
    """Tokenizes `source` completely, including the trailing EOF token."""
    return list(Lexer.from_source(source))


__all__ = ["CharacterStream", "Lexer", "tokenize"]
