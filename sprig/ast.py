"""Abstract Syntax Tree (AST) definitions for the Sprig language.

The parser produces a list of statement nodes; expressions hang off
those statements. Nodes are frozen dataclasses and child sequences are
tuples, so a parsed program cannot be modified while it runs and two
parses of the same source compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Statement(Node):
    pass


@dataclass(frozen=True)
class Expression(Node):
    pass


# Statements

@dataclass(frozen=True)
class Assignment(Statement):
    name: str
    value: Expression


@dataclass(frozen=True)
class Print(Statement):
    value: Expression


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression


@dataclass(frozen=True)
class IfStatement(Statement):
    condition: Expression
    if_block: Tuple[Statement, ...]
    else_block: Optional[Tuple[Statement, ...]] = None


@dataclass(frozen=True)
class WhileStatement(Statement):
    condition: Expression
    body: Tuple[Statement, ...]


@dataclass(frozen=True)
class ArrayElementAssignment(Statement):
    array: str
    index: Expression
    value: Expression


@dataclass(frozen=True)
class ArrayMethodCall(Statement):
    array: str
    method: str
    args: Tuple[Expression, ...]


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    name: str
    params: Tuple[str, ...]
    body: Tuple[Statement, ...]


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Optional[Expression] = None


# Expressions

@dataclass(frozen=True)
class Number(Expression):
    value: float


@dataclass(frozen=True)
class String(Expression):
    value: str


@dataclass(frozen=True)
class Boolean(Expression):
    value: bool


@dataclass(frozen=True)
class Variable(Expression):
    name: str


@dataclass(frozen=True)
class UnaryExpression(Expression):
    operator: str
    operand: Expression


@dataclass(frozen=True)
class BinaryExpression(Expression):
    operator: str  # '+', '-', '*', '/' or '^'
    left: Expression
    right: Expression


@dataclass(frozen=True)
class ComparisonExpression(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...]


@dataclass(frozen=True)
class ArrayElementAccess(Expression):
    array: str
    index: Expression


@dataclass(frozen=True)
class ArrayMethodExpression(Expression):
    array: str
    method: str
    args: Tuple[Expression, ...]


@dataclass(frozen=True)
class ArrayProperty(Expression):
    array: str
    property: str


@dataclass(frozen=True)
class FunctionCall(Expression):
    name: str
    args: Tuple[Expression, ...]
