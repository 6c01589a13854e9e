"""Tokenizer for the Sprig language.

The scanner is a lark basic lexer built from a grammar that only
declares terminals. The lexer does the regex work; this module turns
lark tokens into Sprig tokens, classifies names into keywords and
identifiers, and appends the END marker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from lark import Lark
from lark.exceptions import UnexpectedInput

from .errors import LexError

# Token kinds
NUMBER = 'NUMBER'
STRING = 'STRING'
IDENTIFIER = 'IDENTIFIER'
KEYWORD = 'KEYWORD'
OPERATOR = 'OPERATOR'
EQUALS = 'EQUALS'
ASSIGN = 'ASSIGN'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
LBRACE = 'LBRACE'
RBRACE = 'RBRACE'
LBRACKET = 'LBRACKET'
RBRACKET = 'RBRACKET'
POWER = 'POWER'
COMMA = 'COMMA'
SEMICOLON = 'SEMICOLON'
DOT = 'DOT'
RETURN = 'RETURN'
END = 'END'

KEYWORDS = (
    'print', 'if', 'else', 'true', 'false', 'while', 'function',
    'push', 'pop', 'length', 'join', 'return',
)


@dataclass(frozen=True)
class Token:
    kind: str
    literal: Any
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __str__(self) -> str:
        if self.kind == END:
            return 'end of input'
        return f"{self.kind} {self.literal!r}"


SPRIG_TOKENS = r"""
    start: _token*
    _token: NUMBER | STRING | UNTERMINATED_STRING | NAME
          | EQUALS | ASSIGN | OPERATOR | POWER
          | LPAREN | RPAREN | LBRACE | RBRACE | LBRACKET | RBRACKET
          | COMMA | SEMICOLON | DOT

    NUMBER: /\d+(\.\d+)?/
    STRING: /"[^"]*"/
    UNTERMINATED_STRING: /"[^"]*\Z/
    NAME: /[a-zA-Z_][a-zA-Z0-9_]*/

    EQUALS: "==" | "!=" | "<=" | ">="
    ASSIGN: "="
    OPERATOR: "+" | "-" | "*" | "/" | "<" | ">"
    POWER: "^"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    LBRACKET: "["
    RBRACKET: "]"
    COMMA: ","
    SEMICOLON: ";"
    DOT: "."

    // Anything no other terminal can start with, including a lone "!"
    UNKNOWN: /!(?!=)|[^\sa-zA-Z0-9_"!=<>+\-*\/^(){}\[\],;.]/
    WHITESPACE: /\s+/
    %ignore WHITESPACE
    %ignore UNKNOWN
"""


SPRIG_LEXER = Lark(
    SPRIG_TOKENS,
    parser='lalr',
    lexer='basic',
)


def classify_name(word: str) -> str:
    if word == 'return':
        return RETURN
    if word in KEYWORDS:
        return KEYWORD
    return IDENTIFIER


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with END.

    Whitespace and characters that cannot start any token are skipped.
    Numbers are always read as floats and strings have no escape
    sequences: the first closing quote ends the literal.
    """
    tokens: List[Token] = []
    try:
        for raw in SPRIG_LEXER.lex(source):
            line, column = raw.line, raw.column
            kind = raw.type
            if kind == 'UNTERMINATED_STRING':
                raise LexError(f"unterminated string literal at {line}:{column}", line, column)
            if kind == 'NAME':
                tokens.append(Token(classify_name(str(raw)), str(raw), line, column))
            elif kind == NUMBER:
                tokens.append(Token(NUMBER, float(raw), line, column))
            elif kind == STRING:
                tokens.append(Token(STRING, str(raw)[1:-1], line, column))
            else:
                tokens.append(Token(kind, str(raw), line, column))
    except UnexpectedInput as e:
        raise LexError(f"unexpected input at {e.line}:{e.column}", e.line, e.column) from e
    end_line, end_column = _end_position(source)
    tokens.append(Token(END, None, end_line, end_column))
    return tokens


def _end_position(source: str):
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    return line, column
