# Sprig language package
# This package provides a tokenizer, parser and tree-walking interpreter for Sprig.
from .errors import SprigError, LexError, ParseError, EvaluationError
from .lexer import Token, tokenize
from .parser import Parser, parse, parse_program
from .interpreter import Interpreter, run_program

__all__ = [
    'Token',
    'tokenize',
    'Parser',
    'parse',
    'parse_program',
    'Interpreter',
    'run_program',
    'SprigError',
    'LexError',
    'ParseError',
    'EvaluationError',
]
