from __future__ import annotations

from typing import Optional

from .token_types import Tok


class StreamPositionError(IndexError):
    """Cursor accessed while it does not address a token."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Cursor {index} is outside of a stack of {length} tokens")
        self.index = index
        self.length = length


# ---------- Parse errors ----------

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, token: Optional[Tok] = None):
        self.message = message
        self.token = token
        super().__init__(
            f"{message} at position {token.position} on line {token.line}" if token else message
        )

    @property
    def position(self) -> Optional[int]:
        return self.token.position if self.token is not None else None


class UnterminatedStructureError(ParseError):
    """Stream ended before the closer matching ``token`` was found."""


class MalformedArgumentListError(ParseError):
    pass


class NestingTooDeepError(ParseError):
    pass


# ---------- Runtime errors ----------

class RuleRuntimeError(Exception):
    pass


class UndefinedVariableError(RuleRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Undefined variable '{name}'")
        self.name = name


class UndefinedFunctionError(RuleRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Undefined function '{name}'")
        self.name = name
