from typing import Any, Dict

from .errors import UndefinedVariable


class Environment:
    """Flat mapping of variable names to values for one interpreter.

    There are no nested scopes. Function calls take a `snapshot` before
    binding parameters and `restore` it afterwards; the snapshot is a
    shallow copy, so arrays stay shared while scalar bindings revert.
    """
    def __init__(self):
        self.values: Dict[str, Any] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        raise UndefinedVariable(f"undefined variable {name}")

    def set(self, name: str, value: Any):
        self.values[name] = value

    def snapshot(self) -> Dict[str, Any]:
        return dict(self.values)

    def restore(self, snapshot: Dict[str, Any]):
        self.values = snapshot
