from typing import List

from nscript.types import ErrorVal

LEX_ERROR = 'LexError'
NUMBER_FORMAT_ERROR = 'NumberFormatError'
PARSE_ERROR = 'ParseError'
TYPE_ERROR = 'TypeError'
ARG_COUNT_ERROR = 'ArgCountError'
RUNTIME_ERROR = 'RuntimeError'


class NScriptError(Exception):
    """Exception type used to propagate NScript lex, parse and runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name

    @property
    def message(self) -> str:
        return self.err.message

    @property
    def pos(self):
        return self.err.pos

    def render(self, source: str) -> str:
        """Format the error for a console, underlining the offending span."""
        start = min(self.pos.start, len(source))
        line_start = source.rfind('\n', 0, start) + 1
        line_end = source.find('\n', start)
        if line_end == -1:
            line_end = len(source)
        line = source[line_start:line_end]
        width = max(1, min(self.pos.end, line_end) - start)
        lines: List[str] = [f"{self.name}: {self.message}", line, ' ' * (start - line_start) + '^' * width]
        return '\n'.join(lines)
