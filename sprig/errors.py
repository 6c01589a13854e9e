from typing import Optional


class SprigError(Exception):
    """Base class for every error raised while running a Sprig program."""
    name = 'Error'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(f"{self.name}: {message}")
        self.message = message
        self.line = line
        self.column = column


class LexError(SprigError):
    name = 'LexError'


class ParseError(SprigError):
    name = 'ParseError'


class EvaluationError(SprigError):
    """Fatal error raised while evaluating a parsed program."""
    name = 'RuntimeError'


class UndefinedVariable(EvaluationError):
    name = 'UndefinedVariable'


class UndefinedFunction(EvaluationError):
    name = 'UndefinedFunction'


class TypeMismatch(EvaluationError):
    name = 'TypeError'


class IndexOutOfBounds(EvaluationError):
    name = 'IndexOutOfBounds'


class DivisionByZero(EvaluationError):
    name = 'DivisionByZero'


class UnknownOperator(EvaluationError):
    name = 'UnknownOperator'


class UnknownMethod(EvaluationError):
    name = 'UnknownMethod'


class UnknownProperty(EvaluationError):
    name = 'UnknownProperty'


class RecursionLimitExceeded(EvaluationError):
    name = 'RecursionLimitExceeded'
