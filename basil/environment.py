from typing import Dict, Iterator

from basil.errors import BasilRuntimeError
from basil.values import Value


class Environment:
    """The single global variable table of a Basil program.

    Variables are created on first assignment and live until the program
    ends. Blocks, IF and WHILE do not open new scopes.
    """
    def __init__(self):
        self.values: Dict[str, Value] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, name: str, line: int) -> Value:
        if name in self.values:
            return self.values[name]
        raise BasilRuntimeError('VariableNotDeclared', f"VariableNotDeclared '{name}'", line)

    def set(self, name: str, value: Value):
        self.values[name] = value
