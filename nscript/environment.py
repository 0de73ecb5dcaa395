from typing import Dict, List

from nscript.ast import Node, Position
from nscript.errors import NScriptError, RUNTIME_ERROR
from nscript.types import ErrorVal


class Environment:
    """Flat variable store mapping names to the last value assigned to them."""
    def __init__(self):
        self.values: Dict[str, Node] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def names(self) -> List[str]:
        return list(self.values.keys())

    def get(self, name: str, pos: Position) -> Node:
        if name in self.values:
            return self.values[name]
        raise NScriptError(ErrorVal.of(RUNTIME_ERROR, pos, 'unknown variable'))

    def set(self, name: str, value: Node):
        # an existing name keeps its slot, a new one is appended
        self.values[name] = value
