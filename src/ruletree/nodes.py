"""
Node builders for composite tokens

Each builder takes the token that triggered it (plus, for brackets, the
live stack the token came from) and returns a finished node:

- NodeString   -> Token('STRING', text)
- NodeArray    -> Tree('array', [element, ...])
- NodeFunction -> Tree('call', [Token('NAME', name), Tree('args', [...])])

Bracketed builders leave the shared cursor ON their closing token, so the
caller's next() lands right after the structure. "The cursor ends
immediately after the closing bracket" therefore holds once that
traversal step (current() then next()) completes, not after build() alone.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional

from lark import Token, Tree

from .config import Options, resolve_options
from .errors import (
    MalformedArgumentListError,
    NestingTooDeepError,
    ParseError,
    UnterminatedStructureError,
)
from .stack import TokenStack
from .token_types import ELEMENT_GROUPS, TT, Tok
from .tree import Node

logger = logging.getLogger(__name__)

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


def unescape(text: str) -> str:
    """Resolve backslash escapes; unknown sequences are kept as written."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


def _body_is_closed(body: str, quote: str) -> bool:
    """No bare copy of the surrounding quote and no dangling backslash."""
    escaped = False

    for ch in body:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == quote:
            return False

    return not escaped


class NodeString:
    """Strip quotes and resolve escapes. Consumes nothing but its own token."""

    def __init__(self, token: Tok, options: Optional[Options] = None):
        self.token = token
        self.options = resolve_options(options)

    def build(self) -> Token:
        raw = self.token.value

        if (
            not isinstance(raw, str)
            or len(raw) < 2
            or raw[0] not in ("'", '"')
            or raw[-1] != raw[0]
            or not _body_is_closed(raw[1:-1], raw[0])
        ):
            raise ParseError("Malformed string literal", self.token)

        text = unescape(raw[1:-1])
        return Token(
            "STRING",
            text,
            start_pos=self.token.position,
            line=self.token.line,
            end_pos=self.token.position + len(raw),
        )

    get_node = build


class _BracketedNode:
    """Shared scan/split logic for arrays and calls."""

    structure = "structure"
    opener: TT
    closer: TT

    def __init__(
        self,
        token: Tok,
        stack: TokenStack,
        variables: Optional[Mapping[str, Any]] = None,
        options: Optional[Options] = None,
        depth: int = 0,
    ):
        self.token = token
        self.stack = stack
        self.variables = {} if variables is None else variables
        self.options = resolve_options(options)
        self.depth = depth

    def build(self) -> Tree:
        raise NotImplementedError

    def get_node(self) -> Tree:
        return self.build()

    def _check_depth(self) -> None:
        if self.depth >= self.options.max_depth:
            raise NestingTooDeepError(
                f"{self.structure.capitalize()} nested deeper than {self.options.max_depth} levels",
                self.token,
            )

    def _unterminated(self) -> UnterminatedStructureError:
        return UnterminatedStructureError(f"Unterminated {self.structure}", self.token)

    def _collect_inner(self) -> List[Tok]:
        """Advance past the opener's contents; cursor ends on the matching closer."""
        depth = 1
        inner: List[Tok] = []

        while True:
            self.stack.next()
            if not self.stack.valid():
                raise self._unterminated()

            tok = self.stack.current()
            if tok.kind is self.opener:
                depth += 1
            elif tok.kind is self.closer:
                depth -= 1
                if depth == 0:
                    return inner

            inner.append(tok)

    def _elements(self, inner: List[Tok]) -> List[Node]:
        from .ast import AST  # local import to avoid cycle

        sub = AST(TokenStack(inner), self.variables, self.options, depth=self.depth + 1)
        items: List[Node] = []
        expect_item = True
        last_sep: Optional[Tok] = None

        while sub.valid():
            raw = sub.stack.current()

            if self.options.ignores(raw.group):
                sub.next()
                continue

            if raw.kind is TT.COMMA:
                if expect_item:
                    raise MalformedArgumentListError("Unexpected ','", raw)
                expect_item = True
                last_sep = raw
            else:
                if raw.group not in ELEMENT_GROUPS and raw.kind is not TT.LSQB:
                    raise MalformedArgumentListError(
                        f"Unexpected {raw.kind.name} token in {self.structure}", raw
                    )
                if not expect_item:
                    raise MalformedArgumentListError(f"Missing ',' in {self.structure}", raw)
                items.append(sub.current())
                expect_item = False

            sub.next()

        if expect_item and last_sep is not None:
            raise MalformedArgumentListError(f"Trailing ',' in {self.structure}", last_sep)

        return items


class NodeArray(_BracketedNode):
    structure = "array"
    opener = TT.LSQB
    closer = TT.RSQB

    def build(self) -> Tree:
        self._check_depth()
        items = self._elements(self._collect_inner())
        logger.debug("array at %d materialized with %d items", self.token.position, len(items))
        return Tree("array", items)


class NodeFunction(_BracketedNode):
    structure = "function call"
    opener = TT.LPAR
    closer = TT.RPAR

    def build(self) -> Tree:
        self._check_depth()
        self._expect_opening_paren()
        args = self._elements(self._collect_inner())

        name = Token(
            "NAME",
            str(self.token.value),
            start_pos=self.token.position,
            line=self.token.line,
        )
        logger.debug(
            "call %s at %d materialized with %d args", name, self.token.position, len(args)
        )
        return Tree("call", [name, Tree("args", args)])

    def _expect_opening_paren(self) -> Tok:
        while True:
            self.stack.next()
            if not self.stack.valid():
                raise self._unterminated()

            tok = self.stack.current()
            if self.options.ignores(tok.group):
                continue
            if tok.kind is TT.LPAR:
                return tok

            raise MalformedArgumentListError(
                f"Expected '(' after function name '{self.token.value}'", tok
            )
