from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class BuiltinFunction:
    name: str
    arity: Optional[int]  # None accepts any number of arguments
    fn: Any
    # when False the builtin receives its argument nodes as written
    evaluate_args: bool = True

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
