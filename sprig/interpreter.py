"""Tree-walking interpreter for the Sprig language.

The interpreter owns a flat `Environment` for variables and a separate
table of user-defined functions. Statements evaluate to a `Completion`,
which either carries a plain value or marks an in-flight ``return``;
blocks, ``if`` and ``while`` hand a returning completion straight back
to their caller until a function call (or the top level) absorbs it.

Function calls use snapshot/restore scoping: the environment is copied
before the parameters are bound and put back once the body finishes.
The copy is shallow, so a scalar reassigned inside a function reverts
after the call while an array mutated in place keeps its changes.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import operator
from typing import Any, Dict, List, Optional, Sequence, TextIO

from .ast import (
    Node, Statement,
    Assignment, Print, ExpressionStatement, IfStatement, WhileStatement,
    ArrayElementAssignment, ArrayMethodCall, FunctionDeclaration, ReturnStatement,
    Number, String, Boolean, Variable, UnaryExpression, BinaryExpression,
    ComparisonExpression, ArrayLiteral, ArrayElementAccess, ArrayMethodExpression,
    ArrayProperty, FunctionCall,
)
from .environment import Environment
from .errors import (
    TypeMismatch, IndexOutOfBounds, DivisionByZero, UndefinedFunction,
    UnknownOperator, UnknownMethod, UnknownProperty, RecursionLimitExceeded,
)
from .parser import parse_program, recursion_limit
from .types import ArrayVal, is_number, is_truthy, strict_equals, to_string, type_name

DEFAULT_MAX_DEPTH = 1500

# Python stack frames per unit of evaluation depth, with headroom
FRAMES_PER_DEPTH = 3

ORDERINGS = {
    '<': operator.lt,
    '>': operator.gt,
    '<=': operator.le,
    '>=': operator.ge,
}


@dataclass(frozen=True)
class Completion:
    """Result of executing a statement."""
    value: Any = None
    returning: bool = False


class FunctionValue:
    """A user-defined Sprig function."""
    def __init__(self, name: str, params: Sequence[str], body: Sequence[Statement]):
        self.name = name
        self.params = params
        self.body = body

    def __repr__(self) -> str:
        return f"<function {self.name}>"


def power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and exponent.is_integer() and exponent % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ^ -n, or a negative base with a fractional exponent
        if base == 0.0:
            return math.inf
        return math.nan


class Interpreter:
    """Core interpreter that executes a parsed Sprig program."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 max_depth: int = DEFAULT_MAX_DEPTH, stream: Optional[TextIO] = None):
        self.environment = Environment()
        self.functions: Dict[str, FunctionValue] = {}
        self.max_depth = max_depth
        self.stream = stream
        self.depth = 0
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.statement_handlers = {
            Assignment: self.execute_assignment,
            Print: self.execute_print,
            ExpressionStatement: self.execute_expression_statement,
            IfStatement: self.execute_if,
            WhileStatement: self.execute_while,
            ArrayElementAssignment: self.execute_array_element_assignment,
            ArrayMethodCall: self.execute_array_method_call,
            FunctionDeclaration: self.execute_function_declaration,
            ReturnStatement: self.execute_return,
        }
        self.expression_handlers = {
            Number: self.evaluate_literal,
            String: self.evaluate_literal,
            Boolean: self.evaluate_literal,
            Variable: self.evaluate_variable,
            UnaryExpression: self.evaluate_unary,
            BinaryExpression: self.evaluate_binary,
            ComparisonExpression: self.evaluate_comparison,
            ArrayLiteral: self.evaluate_array_literal,
            ArrayElementAccess: self.evaluate_array_element_access,
            ArrayMethodExpression: self.evaluate_array_method,
            ArrayProperty: self.evaluate_array_property,
            FunctionCall: self.call_function,
        }

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: Sequence[Statement]) -> Any:
        """Run each top-level statement in order and return the last value."""
        result = None
        try:
            with recursion_limit(self.max_depth * FRAMES_PER_DEPTH + 500):
                for stmt in statements:
                    if self.debug_level >= 1:
                        self.debug(f"execute {type(stmt).__name__}")
                    result = self.execute(stmt).value
        except RecursionError as e:
            raise RecursionLimitExceeded('maximum recursion depth exceeded') from e
        return result

    def enter(self, node: Node):
        self.depth += 1
        if self.depth > self.max_depth:
            raise RecursionLimitExceeded(
                f"maximum evaluation depth {self.max_depth} exceeded at {type(node).__name__}"
            )

    # Statements
    def execute(self, node: Statement) -> Completion:
        handler = self.statement_handlers.get(type(node))
        if handler is None:
            raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")
        try:
            self.enter(node)
            return handler(node)
        finally:
            self.depth -= 1

    def execute_block(self, statements: Sequence[Statement]) -> Completion:
        result = Completion()
        for stmt in statements:
            result = self.execute(stmt)
            if result.returning:
                return result
        return result

    def execute_assignment(self, node: Assignment) -> Completion:
        value = self.evaluate(node.value)
        self.environment.set(node.name, value)
        if self.debug_level >= 2:
            self.debug(f"assign {node.name}: {type_name(value)} = {to_string(value)}")
        return Completion(value)

    def execute_print(self, node: Print) -> Completion:
        value = self.evaluate(node.value)
        print(to_string(value), file=self.stream)
        return Completion(value)

    def execute_expression_statement(self, node: ExpressionStatement) -> Completion:
        return Completion(self.evaluate(node.expression))

    def execute_if(self, node: IfStatement) -> Completion:
        cond = self.evaluate(node.condition)
        truthy = is_truthy(cond)
        if self.debug_level >= 3:
            self.debug(f"if condition {to_string(cond)} -> {truthy}")
        if truthy:
            return self.execute_block(node.if_block)
        if node.else_block is not None:
            return self.execute_block(node.else_block)
        return Completion()

    def execute_while(self, node: WhileStatement) -> Completion:
        result = Completion()
        while True:
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"while condition {to_string(cond)} -> {truthy}")
            if not truthy:
                break
            result = self.execute_block(node.body)
            if result.returning:
                return result
        return result

    def execute_array_element_assignment(self, node: ArrayElementAssignment) -> Completion:
        array = self.lookup_array(node.array)
        index = self.evaluate(node.index)
        value = self.evaluate(node.value)
        array.items[self.check_index(array, index)] = value
        if self.debug_level >= 3:
            self.debug(f"set {node.array}[{to_string(index)}] = {to_string(value)}")
        return Completion(value)

    def execute_array_method_call(self, node: ArrayMethodCall) -> Completion:
        return Completion(self.evaluate_array_method(node))

    def execute_function_declaration(self, node: FunctionDeclaration) -> Completion:
        self.functions[node.name] = FunctionValue(node.name, node.params, node.body)
        if self.debug_level >= 2:
            self.debug(f"define function {node.name}({', '.join(node.params)})")
        return Completion()

    def execute_return(self, node: ReturnStatement) -> Completion:
        value = self.evaluate(node.value) if node.value is not None else None
        return Completion(value, returning=True)

    # Expressions
    def evaluate(self, node: Node) -> Any:
        handler = self.expression_handlers.get(type(node))
        if handler is None:
            raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")
        try:
            self.enter(node)
            return handler(node)
        finally:
            self.depth -= 1

    def evaluate_literal(self, node) -> Any:
        return node.value

    def evaluate_variable(self, node: Variable) -> Any:
        return self.environment.get(node.name)

    def evaluate_unary(self, node: UnaryExpression) -> Any:
        operand = self.evaluate(node.operand)
        if node.operator != '-':
            raise UnknownOperator(f"unknown unary operator {node.operator}")
        if not is_number(operand):
            raise TypeMismatch(f"unary - expects a Number, got {type_name(operand)}")
        return -operand

    def evaluate_binary(self, node: BinaryExpression) -> Any:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return self.apply_binary_op(node.operator, left, right)

    def apply_binary_op(self, op: str, left: Any, right: Any) -> Any:
        if op == '+' and (isinstance(left, str) or isinstance(right, str)):
            return to_string(left) + to_string(right)
        if op not in ('+', '-', '*', '/', '^'):
            raise UnknownOperator(f"unknown binary operator {op}")
        if not (is_number(left) and is_number(right)):
            raise TypeMismatch(f"unsupported {op} for {type_name(left)} and {type_name(right)}")
        if op == '+':
            return left + right
        if op == '-':
            return left - right
        if op == '*':
            return left * right
        if op == '/':
            if right == 0.0:
                raise DivisionByZero('division by zero')
            return left / right
        return power(left, right)

    def evaluate_comparison(self, node: ComparisonExpression) -> bool:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        op = node.operator
        if op == '==':
            return strict_equals(left, right)
        if op == '!=':
            return not strict_equals(left, right)
        if op not in ORDERINGS:
            raise UnknownOperator(f"unknown comparison operator {op}")
        both_numbers = is_number(left) and is_number(right)
        both_strings = isinstance(left, str) and isinstance(right, str)
        if not (both_numbers or both_strings):
            raise TypeMismatch(f"comparison {op} not supported for {type_name(left)} and {type_name(right)}")
        return ORDERINGS[op](left, right)

    def evaluate_array_literal(self, node: ArrayLiteral) -> ArrayVal:
        return ArrayVal([self.evaluate(element) for element in node.elements])

    def evaluate_array_element_access(self, node: ArrayElementAccess) -> Any:
        array = self.lookup_array(node.array)
        index = self.evaluate(node.index)
        return array.items[self.check_index(array, index)]

    def evaluate_array_method(self, node) -> Any:
        # shared by ArrayMethodCall statements and ArrayMethodExpression
        array = self.lookup_array(node.array)
        args = [self.evaluate(arg) for arg in node.args]
        result = self.apply_array_method(array, node.method, args)
        if self.debug_level >= 3:
            self.debug(f"{node.array}.{node.method} -> {to_string(result)}")
        return result

    def evaluate_array_property(self, node: ArrayProperty) -> Any:
        array = self.lookup_array(node.array)
        if node.property == 'length':
            return float(len(array.items))
        raise UnknownProperty(f"unknown array property: {node.property}")

    def lookup_array(self, name: str) -> ArrayVal:
        value = self.environment.get(name)
        if not isinstance(value, ArrayVal):
            raise TypeMismatch(f"{name} is not an array")
        return value

    def check_index(self, array: ArrayVal, index: Any) -> int:
        if not is_number(index):
            raise TypeMismatch(f"array index must be a Number, got {type_name(index)}")
        if not index.is_integer() or index < 0 or index >= len(array.items):
            raise IndexOutOfBounds(f"array index out of bounds: {to_string(index)}")
        return int(index)

    def apply_array_method(self, array: ArrayVal, method: str, args: List[Any]) -> Any:
        if method == 'push':
            array.items.extend(args)
            return float(len(array.items))
        if method == 'pop':
            # popping an empty array is a no-op
            return array.items.pop() if array.items else None
        if method == 'join':
            # a falsy separator falls back to the default
            separator = to_string(args[0]) if args and is_truthy(args[0]) else ','
            return separator.join(to_string(item) for item in array.items)
        raise UnknownMethod(f"unknown array method: {method}")

    def call_function(self, node: FunctionCall) -> Any:
        func = self.functions.get(node.name)
        if func is None:
            raise UndefinedFunction(f"undefined function {node.name}")
        args = [self.evaluate(arg) for arg in node.args]
        if self.debug_level >= 1:
            self.debug(f"call {node.name}({', '.join(to_string(a) for a in args)})")
        snapshot = self.environment.snapshot()
        for position, param in enumerate(func.params):
            value = args[position] if position < len(args) else None
            self.environment.set(param, value)
            if self.debug_level >= 2:
                self.debug(f"bind {param} = {to_string(value)}")
        result = self.execute_block(func.body)
        # not reached when the body raises; the error ends the run
        self.environment.restore(snapshot)
        if self.debug_level >= 1:
            self.debug(f"return from {node.name}: {to_string(result.value)}")
        return result.value


def run_program(source: str, **options) -> Any:
    """Convenience function to parse and run a Sprig program from source."""
    statements = parse_program(source)
    interpreter = Interpreter(**options)
    try:
        return interpreter.interpret(statements)
    finally:
        interpreter.close()
