"""Runtime values and helpers for Sprig.

Sprig has four kinds of values. Numbers are Python floats, strings are
Python strings and booleans are Python bools. Arrays are wrapped in
`ArrayVal` so that they behave as shared, mutable references: two
bindings holding the same array see each other's mutations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, List


@dataclass(eq=False)
class ArrayVal:
    """A Sprig array value.

    Equality is identity, so ``a == b`` holds only when both names are
    bound to the same array.
    """
    items: List[Any] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Array({self.items!r})"


def is_number(value: Any) -> bool:
    # bool is a subclass of int, never of float
    return isinstance(value, float)


def type_name(value: Any) -> str:
    """Return the Sprig type name of a runtime value."""
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, ArrayVal):
        return 'Array'
    if value is None:
        return 'None'
    return type(value).__name__


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_string(value: Any) -> str:
    """Convert a Sprig value to the text `print` shows for it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.items) + ']'
    if value is None:
        return 'none'
    return str(value)


def is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return value != 0.0 and not math.isnan(value)
    if isinstance(value, str):
        return len(value) > 0
    if isinstance(value, ArrayVal):
        return True
    return value is not None


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without coercion: values of different kinds never match."""
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, ArrayVal):
        return a is b
    return a == b
