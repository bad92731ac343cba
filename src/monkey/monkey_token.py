"""
Token model for the Monkey language.

Classes:
    TokenType: Closed enumeration of every lexical category the scanner emits.
    Token: A single token with type, literal text, and source location.

Constants:
    KEYWORDS: Read-only mapping from reserved word to its keyword token type.

Functions:
    lookup_identifier(text): Resolve a letter-leading run to a keyword type or IDENTIFIER.

Example:
    >>> lookup_identifier("let")
    <TokenType.LET: 'LET'>
    >>> lookup_identifier("foobar")
    <TokenType.IDENTIFIER: 'IDENTIFIER'>
"""

from enum import Enum
from types import MappingProxyType
from typing import Any


class TokenType(Enum):
    """Lexical categories. Values are the names used in parser diagnostics."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # identifiers and literals
    IDENTIFIER = "IDENTIFIER"
    INT = "INT"
    STRING = "STRING"

    # operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    BANG = "!"
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    GREATER_THAN = ">"

    # delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "fn": TokenType.FUNCTION,
        "let": TokenType.LET,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "return": TokenType.RETURN,
    }
)


def lookup_identifier(text: str) -> TokenType:
    """Return the keyword type for `text`, or IDENTIFIER if it is not reserved."""
    return KEYWORDS.get(text, TokenType.IDENTIFIER)


class Token:
    """Represents a single lexical token in the Monkey language.

    Attributes:
        type (TokenType): The token's lexical category.
        literal (str): The exact source text of the token ("" for EOF).
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: TokenType, literal: str, line: int = 0, col: int = 0):
        self.type = type_
        self.literal = literal
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        """Returns a string representation of the token."""
        return f"Token({self.type.name}, {self.literal!r})"

    def __eq__(self, other: Any) -> bool:
        """Checks equality with another token, location included."""
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        """Returns a hash of the token."""
        return hash((self.type, self.literal, self.line, self.col))


__all__ = ["KEYWORDS", "Token", "TokenType", "lookup_identifier"]
