"""
Traversal facade over a token stack

AST mirrors the stack's cursor protocol (rewind/valid/current/next/key).
current() is the one impure step: on a composite token it runs the
matching builder, which may advance the shared cursor to the end of the
structure. Callers must not expect two current() calls on an array or a
call to leave the cursor where it was.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from .config import Options, resolve_options
from .errors import UndefinedVariableError
from .nodes import NodeArray, NodeFunction, NodeString
from .stack import TokenStack
from .token_types import TT
from .tree import Node

logger = logging.getLogger(__name__)


class AST:
    def __init__(
        self,
        stack: TokenStack,
        variables: Optional[Mapping[str, Any]] = None,
        options: Optional[Options] = None,
        depth: int = 0,
    ):
        self.stack = stack
        self.stack.rewind()
        self.variables: Mapping[str, Any] = {} if variables is None else variables
        self.options = resolve_options(options)
        self.depth = depth

    # ========================================================================
    # Cursor protocol
    # ========================================================================

    def rewind(self) -> None:
        self.stack.rewind()

    def valid(self) -> bool:
        return self.stack.valid()

    def next(self) -> None:
        self.stack.next()

    def key(self) -> int:
        return self.stack.key()

    def current(self) -> Node:
        token = self.stack.current()

        match token.kind:
            case TT.STRING:
                return NodeString(token, self.options).build()
            case TT.LSQB:
                return NodeArray(token, self.stack, self.variables, self.options, self.depth).build()
            case TT.FUNCTION:
                return NodeFunction(token, self.stack, self.variables, self.options, self.depth).build()
            case _:
                return token

    # ========================================================================
    # Variables
    # ========================================================================

    def get_variable(self, name: str) -> Any:
        try:
            return self.variables[name]
        except KeyError:
            logger.debug("lookup of undefined variable %r", name)
            raise UndefinedVariableError(name) from None

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    # ========================================================================
    # Convenience
    # ========================================================================

    def nodes(self) -> List[Node]:
        """Rewind and materialize the whole traversal."""
        out: List[Node] = []

        self.rewind()
        while self.valid():
            out.append(self.current())
            self.next()

        return out
