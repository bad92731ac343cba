"""
Monkey Language Parser

Parses the token stream produced by `monkey.monkey_lexer.Lexer` into an abstract
syntax tree rooted at `monkey.monkey_ast.Program`.

Supported Constructs
--------------------
- Statements:
    * `let <name> = <expr>;`
    * `return <expr>;`
    * Expression statements (trailing `;` optional)
    * `{ ... }` blocks inside `if` and `fn`

- Expressions (Pratt / precedence climbing):
    * Identifiers, integers, booleans, strings, arrays `[a, b]`
    * Prefix `!x`, `-x`
    * Infix `+ - * / == != < >`
    * Grouping `( ... )`
    * `if (<cond>) { ... } else { ... }`
    * Function literals `fn(a, b) { ... }` and calls `f(1, 2)`

Parser Behavior
---------------
- Pulls tokens from the lexer on demand with two tokens of lookahead
  (`current_token`, `peek_token`).
- Never raises while parsing. Problems are recorded as human-readable
  diagnostics in `errors`, the construct that failed yields no node, and the
  parser skips to the end of the broken statement before continuing.
- `parse()` offers a strict mode which raises `ParseError` when diagnostics
  were recorded.

Entry Points
------------
- `Parser(lexer).parse_program()`: Parse a full program.
- `Parser.errors`: Diagnostics in the order they were produced.
- `parse(source, strict=False)`: Lex and parse a source string in one call.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from types import MappingProxyType

from monkey.monkey_ast import (
    ArrayLiteral,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from monkey.monkey_lexer import Lexer
from monkey.monkey_token import Token, TokenType

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    """Binding power of operators, lowest first."""

    LOWEST = 1
    EQUALS = 2  # ==
    LESS_GREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # myFunction(X)


PRECEDENCES: MappingProxyType[TokenType, Precedence] = MappingProxyType(
    {
        TokenType.EQUAL: Precedence.EQUALS,
        TokenType.NOT_EQUAL: Precedence.EQUALS,
        TokenType.LESS_THAN: Precedence.LESS_GREATER,
        TokenType.GREATER_THAN: Precedence.LESS_GREATER,
        TokenType.PLUS: Precedence.SUM,
        TokenType.MINUS: Precedence.SUM,
        TokenType.STAR: Precedence.PRODUCT,
        TokenType.SLASH: Precedence.PRODUCT,
        TokenType.LPAREN: Precedence.CALL,
    }
)

PrefixParseFn = Callable[[], "Expression | None"]
InfixParseFn = Callable[[Expression], "Expression | None"]


class ParseError(SyntaxError):
    """Raised by strict parsing when diagnostics were recorded.

    Attributes:
        errors (list[str]): Every diagnostic, in the order produced.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


def convert_integer(literal: str) -> int | None:
    """Convert an INT literal to a 64-bit signed integer.

    Accepts base-10 and C-style prefixed forms (`0x`, `0o`, `0b`, and a plain
    leading zero for octal). Returns None when the text does not convert or
    falls outside the 64-bit range.
    """
    try:
        value = int(literal, 0)
    except ValueError:
        if len(literal) > 1 and literal.startswith("0") and literal.isdigit():
            try:
                value = int(literal, 8)
            except ValueError:
                return None
        else:
            return None
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


class Parser:
    """
    Monkey Parser Class

    Builds a `Program` from the tokens of a `Lexer` using top-down operator
    precedence (Pratt) parsing for expressions and recursive descent for
    statements.

    Attributes
    ----------
    lexer : Lexer
        Token source; tokens are pulled one at a time.
    current_token : Token
        The token under examination.
    peek_token : Token
        The token after `current_token`.
    errors : list[str]
        Diagnostics recorded so far.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self._errors: list[str] = []
        # `}` that ended the most recently finished block
        self.last_closed_brace: Token | None = None

        self.prefix_parse_fns: MappingProxyType[TokenType, PrefixParseFn] = (
            MappingProxyType(
                {
                    TokenType.IDENTIFIER: self.parse_identifier,
                    TokenType.INT: self.parse_integer_literal,
                    TokenType.TRUE: self.parse_boolean,
                    TokenType.FALSE: self.parse_boolean,
                    TokenType.STRING: self.parse_string_literal,
                    TokenType.BANG: self.parse_prefix_expression,
                    TokenType.MINUS: self.parse_prefix_expression,
                    TokenType.LPAREN: self.parse_grouped_expression,
                    TokenType.LBRACKET: self.parse_array_literal,
                    TokenType.IF: self.parse_if_expression,
                    TokenType.FUNCTION: self.parse_function_literal,
                }
            )
        )
        self.infix_parse_fns: MappingProxyType[TokenType, InfixParseFn] = (
            MappingProxyType(
                {
                    TokenType.PLUS: self.parse_infix_expression,
                    TokenType.MINUS: self.parse_infix_expression,
                    TokenType.STAR: self.parse_infix_expression,
                    TokenType.SLASH: self.parse_infix_expression,
                    TokenType.EQUAL: self.parse_infix_expression,
                    TokenType.NOT_EQUAL: self.parse_infix_expression,
                    TokenType.LESS_THAN: self.parse_infix_expression,
                    TokenType.GREATER_THAN: self.parse_infix_expression,
                    TokenType.LPAREN: self.parse_call_expression,
                }
            )
        )

        # Read two tokens so current_token and peek_token are both set
        self.current_token: Token = Token(TokenType.EOF, "")
        self.peek_token: Token = self.lexer.next_token()
        self.next_token()

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    # Token handling

    def next_token(self) -> None:
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def current_token_is(self, type_: TokenType) -> bool:
        return self.current_token.type == type_

    def peek_token_is(self, type_: TokenType) -> bool:
        return self.peek_token.type == type_

    def expect_peek(self, type_: TokenType) -> bool:
        """Advance if the next token has type `type_`, otherwise record a diagnostic."""
        if self.peek_token_is(type_):
            self.next_token()
            return True
        self.peek_error(type_)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current_token.type, Precedence.LOWEST)

    # Diagnostics

    def _error(self, message: str, tok: Token) -> None:
        self._errors.append(f"{message} at line {tok.line}, col {tok.col}")

    def peek_error(self, type_: TokenType) -> None:
        self._error(
            f"expected next token to be {type_.value}, "
            f"but got {self.peek_token.type.value} instead",
            self.peek_token,
        )

    def no_prefix_parse_fn_error(self, tok: Token) -> None:
        self._error(f"no prefix parse function for {tok.type.value} found", tok)

    def synchronize(self) -> bool:
        """Skip the rest of a statement that failed to parse.

        Stops on the statement's terminating `;`, on the brace closing a block the
        statement opened, or right before an enclosing `}` or the end of input.
        The caller's usual `next_token()` then moves to the next statement.

        A `}` that closed a block the failed statement already parsed counts as
        consumed. Returns True when the failed statement ran onto an unmatched
        `}`, which the enclosing block must not skip.
        """
        depth = 0
        while not self.current_token_is(TokenType.EOF):
            if self.current_token_is(TokenType.LBRACE):
                depth += 1
            elif (
                self.current_token_is(TokenType.RBRACE)
                and self.current_token is not self.last_closed_brace
            ):
                if depth == 0:
                    return True
                depth -= 1
                if depth == 0:
                    return False
            if depth == 0 and (
                self.current_token_is(TokenType.SEMICOLON)
                or self.peek_token_is(TokenType.RBRACE)
                or self.peek_token_is(TokenType.EOF)
            ):
                return False
            self.next_token()
        return False

    # Statements

    def parse_program(self) -> Program:
        """Parse every statement up to EOF. Always returns a Program."""
        statements: list[Statement] = []
        while not self.current_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.synchronize()
            self.next_token()
        return Program(statements)

    def parse_statement(self) -> Statement | None:
        if self.current_token_is(TokenType.LET):
            return self.parse_let_statement()
        if self.current_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        let_tok = self.current_token

        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        name = Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return LetStatement(let_tok, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        return_tok = self.current_token

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ReturnStatement(return_tok, value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        first_tok = self.current_token

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ExpressionStatement(first_tok, expression)

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements after `{` up to the matching `}` or end of input."""
        brace_tok = self.current_token
        statements: list[Statement] = []

        self.next_token()
        while not self.current_token_is(TokenType.RBRACE) and not self.current_token_is(
            TokenType.EOF
        ):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            elif self.synchronize():
                continue
            self.next_token()

        if self.current_token_is(TokenType.RBRACE):
            self.last_closed_brace = self.current_token
        return BlockStatement(brace_tok, statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.current_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.current_token)
            return None
        left = prefix()
        if left is None:
            return None

        while (
            not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
            if left is None:
                return None

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.current_token, self.current_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        tok = self.current_token
        value = convert_integer(tok.literal)
        if value is None:
            self._error(f"could not parse \"{tok.literal}\" as integer", tok)
            return None
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.current_token, self.current_token_is(TokenType.TRUE))

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.current_token, self.current_token.literal)

    def parse_prefix_expression(self) -> Expression | None:
        tok = self.current_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok, tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.current_token
        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, left, tok.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_array_literal(self) -> Expression | None:
        tok = self.current_token
        elements = self.parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(tok, elements)

    def parse_if_expression(self) -> Expression | None:
        """Parse `if (<cond>) { ... }` with an optional `else { ... }`."""
        tok = self.current_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpression(tok, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression | None:
        tok = self.current_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()

        return FunctionLiteral(tok, parameters, body)

    def parse_function_parameters(self) -> list[Identifier] | None:
        """Parse `a, b, c)` after the opening parenthesis. May be empty."""
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        identifiers.append(Identifier(self.current_token, self.current_token.literal))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENTIFIER):
                return None
            identifiers.append(
                Identifier(self.current_token, self.current_token.literal)
            )

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Expression | None:
        tok = self.current_token
        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(tok, function, arguments)

    def parse_expression_list(self, end: TokenType) -> list[Expression] | None:
        """Parse comma-separated expressions up to `end`. May be empty."""
        items: list[Expression] = []

        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None
        return items


def parse(source: str, strict: bool = False) -> Program:
    """Lex and parse `source`.

    Raises:
        ParseError: If `strict` is True and any diagnostics were recorded.
    """
    parser = Parser(Lexer.from_source(source))
    program = parser.parse_program()
    if strict and parser.errors:
        raise ParseError(parser.errors)
    return program


__all__ = [
    "PRECEDENCES",
    "ParseError",
    "Parser",
    "Precedence",
    "convert_integer",
    "parse",
]
