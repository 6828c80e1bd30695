from typing import Optional


class BFError(Exception):
    """Base class for every error raised by the bfvm package."""


class BFSyntaxError(BFError):
    """Raised when brackets in a program are not properly paired.

    Both a stray ``]`` and a ``[`` that is never closed raise this same
    error. ``line`` and ``column`` point at the offending bracket when
    known; they exist only to make messages readable.
    """
    def __init__(self, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        prefix = ""
        if line is not None and column is not None:
            prefix = f"line {line} col {column}: "
        super().__init__(f"{prefix}unbalanced brackets")
