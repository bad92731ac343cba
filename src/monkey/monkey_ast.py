"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

Classes:
    Node: Base of every AST node. Tracks the originating token, renders itself as
        source-equivalent text via `str()` and serializes via `to_dict()`.
    Statement, Expression: The two node capabilities the parser produces.
    Program: The parse root.

Statements:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Expressions:
    Identifier, IntegerLiteral, BooleanLiteral, StringLiteral, ArrayLiteral,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral, CallExpression

Rendering:
    `str(node)` produces a canonical form with every prefix and infix operation
    parenthesized, so `a + b * c` renders as `(a + (b * c))`. Tests compare these
    strings directly.

Equality:
    Nodes compare structurally by kind and fields. Token locations are ignored so
    trees built from differently formatted sources compare equal.

Every composite node owns its children exclusively; child sequences are stored as
tuples and nodes are not modified after the parser constructs them.
"""

from collections.abc import Iterable
from typing import Any, TypedDict

from monkey.monkey_token import Token


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a node used for serialization (e.g. JSON output).

    Every dict carries the node class name under `kind` and the 1-based source
    location of its originating token; the remaining keys are the node's fields.
    """

    kind: str
    line: int
    col: int


class Node:
    """
    Base class of all AST nodes.

    Subclasses list their semantic attributes in `_fields`; `__eq__`, `__repr__`
    and `to_dict()` are derived from it.

    Attributes:
        token (Token): The token the node was built from.
    """

    _fields: tuple[str, ...] = ()

    def __init__(self, token: Token) -> None:
        self.token = token

    def token_literal(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        raise NotImplementedError  # pragma: no cover

    def __repr__(self) -> str:
        """Returns the node class with its semantic fields, for debugging."""
        parts = [f"{name}={getattr(self, name)!r}" for name in self._fields]
        return f"{type(self).__name__}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        """Compares kind and fields; token locations and spelling are ignored."""
        if type(self) is not type(other):
            return False
        return all(getattr(self, f) == getattr(other, f) for f in self._fields)

    def __hash__(self) -> int:
        """Hashes exactly what `__eq__` compares."""
        return hash(
            (type(self).__name__, tuple(getattr(self, f) for f in self._fields))
        )

    def to_dict(self) -> ASTDict:
        result: dict[str, Any] = {
            "kind": type(self).__name__,
            "line": self.token.line,
            "col": self.token.col,
        }
        for name in self._fields:
            result[name] = _serialize(getattr(self, name))
        return result  # type: ignore[return-value]


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


def _join(nodes: Iterable[Node]) -> str:
    return ", ".join(str(n) for n in nodes)


class Statement(Node):
    """A node that appears in statement position."""


class Expression(Node):
    """A node that produces a value."""


class Program:
    """The parse root: an ordered sequence of top-level statements."""

    def __init__(self, statements: Iterable[Statement] = ()) -> None:
        self.statements: tuple[Statement, ...] = tuple(statements)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)

    def __repr__(self) -> str:
        """Returns the statements wrapped in `Program(...)`."""
        return f"Program(statements={self.statements!r})"

    def __eq__(self, other: Any) -> bool:
        """Programs are equal when their statements are."""
        return isinstance(other, Program) and self.statements == other.statements

    def __hash__(self) -> int:
        """Hashes the statements `__eq__` compares."""
        return hash(self.statements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }


# Expressions


class Identifier(Expression):
    _fields = ("value",)

    def __init__(self, token: Token, value: str) -> None:
        super().__init__(token)
        self.value = value

    def __str__(self) -> str:
        return self.value


class IntegerLiteral(Expression):
    """A 64-bit signed integer literal. Renders as its original source text."""

    _fields = ("value",)

    def __init__(self, token: Token, value: int) -> None:
        super().__init__(token)
        self.value = value

    def __str__(self) -> str:
        return self.token.literal


class BooleanLiteral(Expression):
    _fields = ("value",)

    def __init__(self, token: Token, value: bool) -> None:
        super().__init__(token)
        self.value = value

    def __str__(self) -> str:
        return self.token.literal


class StringLiteral(Expression):
    """A string literal. `value` is the raw text between the quotes."""

    _fields = ("value",)

    def __init__(self, token: Token, value: str) -> None:
        super().__init__(token)
        self.value = value

    def __str__(self) -> str:
        return self.token.literal


class ArrayLiteral(Expression):
    _fields = ("elements",)

    def __init__(self, token: Token, elements: Iterable[Expression]) -> None:
        super().__init__(token)
        self.elements: tuple[Expression, ...] = tuple(elements)

    def __str__(self) -> str:
        return f"[{_join(self.elements)}]"


class PrefixExpression(Expression):
    _fields = ("operator", "right")

    def __init__(self, token: Token, operator: str, right: Expression) -> None:
        super().__init__(token)
        self.operator = operator
        self.right = right

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


class InfixExpression(Expression):
    _fields = ("left", "operator", "right")

    def __init__(
        self, token: Token, left: Expression, operator: str, right: Expression
    ) -> None:
        super().__init__(token)
        self.left = left
        self.operator = operator
        self.right = right

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Expression):
    """
    `if (<condition>) { ... } else { ... }`.

    Renders as `if<condition> <consequence>` followed by `else <alternative>`
    when an else branch is present.
    """

    _fields = ("condition", "consequence", "alternative")

    def __init__(
        self,
        token: Token,
        condition: Expression,
        consequence: "BlockStatement",
        alternative: "BlockStatement | None" = None,
    ) -> None:
        super().__init__(token)
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


class FunctionLiteral(Expression):
    _fields = ("parameters", "body")

    def __init__(
        self, token: Token, parameters: Iterable[Identifier], body: "BlockStatement"
    ) -> None:
        super().__init__(token)
        self.parameters: tuple[Identifier, ...] = tuple(parameters)
        self.body = body

    def __str__(self) -> str:
        return f"{self.token_literal()}({_join(self.parameters)}) {self.body}"


class CallExpression(Expression):
    """A call. `function` is the callee: an identifier or any other expression."""

    _fields = ("function", "arguments")

    def __init__(
        self, token: Token, function: Expression, arguments: Iterable[Expression]
    ) -> None:
        super().__init__(token)
        self.function = function
        self.arguments: tuple[Expression, ...] = tuple(arguments)

    def __str__(self) -> str:
        return f"{self.function}({_join(self.arguments)})"


# Statements


class LetStatement(Statement):
    _fields = ("name", "value")

    def __init__(self, token: Token, name: Identifier, value: Expression) -> None:
        super().__init__(token)
        self.name = name
        self.value = value

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


class ReturnStatement(Statement):
    _fields = ("return_value",)

    def __init__(self, token: Token, return_value: Expression) -> None:
        super().__init__(token)
        self.return_value = return_value

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


class ExpressionStatement(Statement):
    """A statement consisting of one expression. `token` is the expression's first token."""

    _fields = ("expression",)

    def __init__(self, token: Token, expression: Expression) -> None:
        super().__init__(token)
        self.expression = expression

    def __str__(self) -> str:
        return str(self.expression)


class BlockStatement(Statement):
    _fields = ("statements",)

    def __init__(self, token: Token, statements: Iterable[Statement]) -> None:
        super().__init__(token)
        self.statements: tuple[Statement, ...] = tuple(statements)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


__all__ = [
    "ASTDict",
    "ArrayLiteral",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
    "StringLiteral",
]
