"""Recursive-descent parser for the Sprig language.

The parser walks the token list with a single cursor. The only
backtracking it does is for statements that begin with an identifier:
``name = ...``, ``name[i] = ...``, ``name.push(...)`` and
``name(a, b) { ... }`` all start the same way as an expression
statement, so the parser remembers where the identifier was and rewinds
to it when the statement form does not pan out.

Expression precedence, lowest to highest::

    comparison  == != < > <= >=   (left fold)
    additive    + -
    multiplicative  * /
    unary       -
    exponent    ^                 (right associative)
    primary
"""

from __future__ import annotations

from contextlib import contextmanager
import sys
from typing import Iterator, List, Optional, Sequence, Tuple

from .ast import (
    Statement, Expression,
    Assignment, Print, ExpressionStatement, IfStatement, WhileStatement,
    ArrayElementAssignment, ArrayMethodCall, FunctionDeclaration, ReturnStatement,
    Number, String, Boolean, Variable, UnaryExpression, BinaryExpression,
    ComparisonExpression, ArrayLiteral, ArrayElementAccess, ArrayMethodExpression,
    ArrayProperty, FunctionCall,
)
from .errors import ParseError
from .lexer import (
    Token, tokenize,
    NUMBER, STRING, IDENTIFIER, KEYWORD, OPERATOR, EQUALS, ASSIGN,
    LPAREN, RPAREN, LBRACE, RBRACE, LBRACKET, RBRACKET, POWER,
    COMMA, SEMICOLON, DOT, RETURN, END,
)

# Tokens after which a method call statement keeps going as an expression
EXPRESSION_CONTINUATIONS = (OPERATOR, EQUALS, POWER)

# Python stack frames allowed while parsing; one parenthesis level costs
# about seven, so roughly 1400 levels fit
PARSE_RECURSION_LIMIT = 10000


@contextmanager
def recursion_limit(limit: int) -> Iterator[None]:
    """Raise Python's recursion limit to at least `limit` for the block."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        tokens = list(tokens)
        if not tokens or tokens[-1].kind != END:
            tokens.append(Token(END, None))
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind != END:
            self.pos += 1
        return token

    def match(self, kind: str, literal: Optional[str] = None) -> bool:
        token = self.peek()
        return token.kind == kind and (literal is None or token.literal == literal)

    def consume(self, kind: str, literal: Optional[str] = None, expected: Optional[str] = None) -> Token:
        token = self.peek()
        if not self.match(kind, literal):
            if expected is None:
                expected = repr(literal) if literal is not None else kind
            raise ParseError(
                f"expected {expected} at {token.line}:{token.column}, got {token}",
                token.line, token.column,
            )
        return self.advance()

    def error(self, message: str) -> ParseError:
        token = self.peek()
        return ParseError(f"{message} at {token.line}:{token.column}, got {token}", token.line, token.column)

    def parse(self) -> List[Statement]:
        statements: List[Statement] = []
        try:
            with recursion_limit(PARSE_RECURSION_LIMIT):
                while not self.match(END):
                    if self.match(SEMICOLON):
                        self.advance()
                        continue
                    statements.append(self.parse_statement())
        except RecursionError as e:
            token = self.peek()
            raise ParseError(
                f"program is nested too deeply at {token.line}:{token.column}",
                token.line, token.column,
            ) from e
        return statements

    # Statements

    def parse_statement(self) -> Statement:
        token = self.peek()
        if token.kind == RETURN:
            return self.parse_return_stmt()
        if token.kind == KEYWORD:
            if token.literal == 'function':
                return self.parse_func_decl()
            if token.literal == 'print':
                return self.parse_print_stmt()
            if token.literal == 'if':
                return self.parse_if_stmt()
            if token.literal == 'while':
                return self.parse_while_stmt()
        if token.kind == IDENTIFIER:
            stmt = self.parse_identifier_stmt()
            if stmt is not None:
                return stmt
        return ExpressionStatement(self.parse_expression())

    def parse_identifier_stmt(self) -> Optional[Statement]:
        """Parse a statement form led by an identifier.

        Returns None with the cursor back on the identifier when the
        tokens turn out to be a plain expression statement.
        """
        start = self.pos
        name = self.consume(IDENTIFIER).literal
        if self.match(ASSIGN):
            self.advance()
            return Assignment(name, self.parse_expression())
        if self.match(LBRACKET):
            self.advance()
            index = self.parse_expression()
            self.consume(RBRACKET, expected="']'")
            if self.match(ASSIGN):
                self.advance()
                return ArrayElementAssignment(name, index, self.parse_expression())
        elif self.match(DOT):
            self.advance()
            if self.peek().kind in (IDENTIFIER, KEYWORD) and self.peek(1).kind == LPAREN:
                method = self.advance().literal
                args = self.parse_arguments()
                if self.peek().kind not in EXPRESSION_CONTINUATIONS:
                    return ArrayMethodCall(name, method, args)
        elif self.match(LPAREN):
            params = self.parse_params_if_present()
            if params is not None and self.match(LBRACE):
                return FunctionDeclaration(name, params, self.parse_block())
        self.pos = start
        return None

    def parse_params_if_present(self) -> Optional[Tuple[str, ...]]:
        # (a, b, c) with nothing but names; None if anything else shows up
        self.consume(LPAREN)
        params: List[str] = []
        if not self.match(RPAREN):
            while True:
                if not self.match(IDENTIFIER):
                    return None
                params.append(self.advance().literal)
                if not self.match(COMMA):
                    break
                self.advance()
        if not self.match(RPAREN):
            return None
        self.advance()
        return tuple(params)

    def parse_param_list(self) -> Tuple[str, ...]:
        self.consume(LPAREN, expected="'(' after function name")
        params: List[str] = []
        if not self.match(RPAREN):
            while True:
                params.append(self.consume(IDENTIFIER, expected='parameter name').literal)
                if not self.match(COMMA):
                    break
                self.advance()
        self.consume(RPAREN, expected="')' after parameters")
        return tuple(params)

    def parse_func_decl(self) -> FunctionDeclaration:
        self.consume(KEYWORD, 'function')
        name = self.consume(IDENTIFIER, expected='function name').literal
        params = self.parse_param_list()
        body = self.parse_block()
        return FunctionDeclaration(name, params, body)

    def parse_return_stmt(self) -> ReturnStatement:
        self.consume(RETURN)
        if self.peek().kind in (RBRACE, SEMICOLON, END):
            return ReturnStatement(None)
        return ReturnStatement(self.parse_expression())

    def parse_print_stmt(self) -> Print:
        self.consume(KEYWORD, 'print')
        self.consume(LPAREN, expected="'(' after 'print'")
        value = self.parse_expression()
        self.consume(RPAREN, expected="')' after printed value")
        return Print(value)

    def parse_if_stmt(self) -> IfStatement:
        self.consume(KEYWORD, 'if')
        self.consume(LPAREN, expected="'(' after 'if'")
        condition = self.parse_expression()
        self.consume(RPAREN, expected="')' after condition")
        if_block = self.parse_block()
        else_block = None
        if self.match(KEYWORD, 'else'):
            self.advance()
            if self.match(KEYWORD, 'if'):
                else_block = (self.parse_if_stmt(),)
            else:
                else_block = self.parse_block()
        return IfStatement(condition, if_block, else_block)

    def parse_while_stmt(self) -> WhileStatement:
        self.consume(KEYWORD, 'while')
        self.consume(LPAREN, expected="'(' after 'while'")
        condition = self.parse_expression()
        self.consume(RPAREN, expected="')' after condition")
        body = self.parse_block()
        return WhileStatement(condition, body)

    def parse_block(self) -> Tuple[Statement, ...]:
        self.consume(LBRACE, expected="'{' to start a block")
        statements: List[Statement] = []
        while not self.match(RBRACE):
            if self.match(END):
                raise self.error("expected '}' to close block")
            if self.match(SEMICOLON):
                self.advance()
                continue
            statements.append(self.parse_statement())
        self.consume(RBRACE)
        return tuple(statements)

    # Expressions

    def parse_expression(self) -> Expression:
        return self.parse_comparison()

    def match_comparison(self) -> bool:
        token = self.peek()
        return token.kind == EQUALS or (token.kind == OPERATOR and token.literal in ('<', '>'))

    def parse_comparison(self) -> Expression:
        node = self.parse_additive()
        while self.match_comparison():
            operator = self.advance().literal
            right = self.parse_additive()
            node = ComparisonExpression(operator, node, right)
        return node

    def parse_additive(self) -> Expression:
        node = self.parse_multiplicative()
        while self.match(OPERATOR, '+') or self.match(OPERATOR, '-'):
            operator = self.advance().literal
            right = self.parse_multiplicative()
            node = BinaryExpression(operator, node, right)
        return node

    def parse_multiplicative(self) -> Expression:
        node = self.parse_unary()
        while self.match(OPERATOR, '*') or self.match(OPERATOR, '/'):
            operator = self.advance().literal
            right = self.parse_unary()
            node = BinaryExpression(operator, node, right)
        return node

    def parse_unary(self) -> Expression:
        if self.match(OPERATOR, '-'):
            self.advance()
            return UnaryExpression('-', self.parse_unary())
        return self.parse_exponent()

    def parse_exponent(self) -> Expression:
        base = self.parse_primary()
        if self.match(POWER):
            self.advance()
            # right operand goes back through unary so 2 ^ -1 and 2 ^ 3 ^ 2 work
            return BinaryExpression('^', base, self.parse_unary())
        return base

    def parse_primary(self) -> Expression:
        token = self.peek()
        if token.kind == LPAREN:
            self.advance()
            expr = self.parse_expression()
            self.consume(RPAREN, expected="')'")
            return expr
        if token.kind == NUMBER:
            self.advance()
            return Number(token.literal)
        if token.kind == STRING:
            self.advance()
            return String(token.literal)
        if token.kind == KEYWORD and token.literal in ('true', 'false'):
            self.advance()
            return Boolean(token.literal == 'true')
        if token.kind == LBRACKET:
            return self.parse_array_literal()
        if token.kind == IDENTIFIER:
            return self.parse_identifier_expr()
        raise self.error("expected an expression")

    def parse_array_literal(self) -> ArrayLiteral:
        self.consume(LBRACKET)
        elements: List[Expression] = []
        if not self.match(RBRACKET):
            elements.append(self.parse_expression())
            while self.match(COMMA):
                self.advance()
                elements.append(self.parse_expression())
        self.consume(RBRACKET, expected="']' to close array")
        return ArrayLiteral(tuple(elements))

    def parse_identifier_expr(self) -> Expression:
        name = self.consume(IDENTIFIER).literal
        if self.match(LBRACKET):
            self.advance()
            index = self.parse_expression()
            self.consume(RBRACKET, expected="']'")
            return ArrayElementAccess(name, index)
        if self.match(DOT):
            self.advance()
            token = self.peek()
            if token.kind not in (IDENTIFIER, KEYWORD):
                raise self.error("expected method or property name after '.'")
            member = self.advance().literal
            if member == 'length' and not self.match(LPAREN):
                return ArrayProperty(name, member)
            args = self.parse_arguments(f"'(' after '.{member}'")
            return ArrayMethodExpression(name, member, args)
        if self.match(LPAREN):
            return FunctionCall(name, self.parse_arguments())
        return Variable(name)

    def parse_arguments(self, expected: str = "'('") -> Tuple[Expression, ...]:
        self.consume(LPAREN, expected=expected)
        args: List[Expression] = []
        if not self.match(RPAREN):
            args.append(self.parse_expression())
            while self.match(COMMA):
                self.advance()
                args.append(self.parse_expression())
        self.consume(RPAREN, expected="')' after arguments")
        return tuple(args)


def parse(tokens: Sequence[Token]) -> List[Statement]:
    """Parse a token list into a list of statements."""
    return Parser(tokens).parse()


def parse_program(source: str) -> List[Statement]:
    """Tokenize and parse Sprig source code."""
    return parse(tokenize(source))
