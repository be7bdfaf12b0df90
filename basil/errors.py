from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from basil.lexer import Token


class BasilError(Exception):
    """Base class for the errors raised by the lexer, parser and interpreter."""
    def __init__(self, message: str, line: int):
        super().__init__(message)
        self.message = message
        self.line = line


class LexError(BasilError):
    """Raised on the first character sequence the lexer cannot scan."""


class ParseError(BasilError):
    """Raised on the first token the parser cannot accept."""
    def __init__(self, message: str, token: 'Token', token_index: int):
        super().__init__(message, token.line)
        self.token = token
        self.token_index = token_index


class BasilRuntimeError(BasilError):
    """Raised when a statement or expression fails during execution."""
    def __init__(self, kind: str, message: str, line: int):
        super().__init__(message, line)
        self.kind = kind


class LoopSignal:
    """Result returned by a BREAK or CONTINUE statement.

    Signals travel back up the execution call chain as return values and
    are consumed by the nearest enclosing WHILE loop.
    """
    keyword = ''

    def __init__(self, line: int):
        self.line = line

    def __repr__(self) -> str:
        return f"<{self.keyword} at line {self.line}>"


class BreakSignal(LoopSignal):
    keyword = 'BREAK'


class ContinueSignal(LoopSignal):
    keyword = 'CONTINUE'
