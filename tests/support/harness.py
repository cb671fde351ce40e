from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional

from ruletree.ast import AST
from ruletree.config import Options
from ruletree.stack import TokenStack
from ruletree.token_types import TT, Tok, tok

WORD_KINDS: Dict[str, TT] = {
    "[": TT.LSQB,
    "]": TT.RSQB,
    "(": TT.LPAR,
    ")": TT.RPAR,
    ",": TT.COMMA,
    "==": TT.EQ,
    "===": TT.EQ_STRICT,
    "!=": TT.NEQ,
    "!==": TT.NEQ_STRICT,
    "<": TT.LT,
    "<=": TT.LTE,
    ">": TT.GT,
    ">=": TT.GTE,
    "in": TT.IN,
    "&&": TT.AND,
    "||": TT.OR,
    "!": TT.NEG,
    "true": TT.BOOL,
    "false": TT.BOOL,
    "null": TT.NULL,
    "_": TT.SPACE,
}

_INT_RE = re.compile(r"-?\d+$")
_FLOAT_RE = re.compile(r"-?\d+\.\d+$")
_IDENT_RE = re.compile(r"[A-Za-z_]\w*$")


def _classify(word: str, following: Optional[str]) -> TT:
    if word in WORD_KINDS:
        return WORD_KINDS[word]
    if word[0] in ("'", '"'):
        return TT.STRING
    if word.startswith("#"):
        return TT.COMMENT
    if _INT_RE.match(word):
        return TT.INTEGER
    if _FLOAT_RE.match(word):
        return TT.FLOAT
    if _IDENT_RE.match(word):
        return TT.FUNCTION if following == "(" else TT.VARIABLE
    return TT.ATOM


def toks(source: str) -> List[Tok]:
    """Split test input on whitespace into tokens; positions are char offsets.

    Not a lexer: every token must be separated by spaces, e.g. "foo ( 1 , x )".
    """
    matches = list(re.finditer(r"\S+", source))
    out: List[Tok] = []

    for idx, m in enumerate(matches):
        word = m.group(0)
        following = matches[idx + 1].group(0) if idx + 1 < len(matches) else None
        kind = _classify(word, following)
        value = " " if kind is TT.SPACE else word
        out.append(tok(kind, value, m.start()))

    return out


def make_stack(source: str) -> TokenStack:
    return TokenStack(toks(source))


def make_ast(
    source: str,
    variables: Optional[Mapping[str, object]] = None,
    options: Optional[Options] = None,
) -> AST:
    return AST(make_stack(source), variables, options)


def walk_stack(stack: TokenStack) -> List[Tok]:
    out: List[Tok] = []

    stack.rewind()
    while stack.valid():
        out.append(stack.current())
        stack.next()

    return out


def at(stack: TokenStack, key: int) -> TokenStack:
    """Move a fresh cursor forward to ``key``."""
    stack.rewind()
    for _ in range(key):
        stack.next()
    return stack
