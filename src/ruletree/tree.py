"""Shared helpers for working with the materialized rule tree.

Composite nodes are lark Trees, string nodes are lark Tokens, and plain
tokens are passed through as Tok.
"""
from __future__ import annotations
from typing import List, Optional, TypeGuard, Union

from lark import Token, Tree
from typing_extensions import TypeAlias

from .token_types import Tok


Node: TypeAlias = Union[Tree, Token, Tok]


def is_tree(node: Node) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_tok(node: Node) -> TypeGuard[Tok]:
    return isinstance(node, Tok)

def is_string(node: Node) -> TypeGuard[Token]:
    return isinstance(node, Token) and node.type == "STRING"

def tree_label(node: Node) -> Optional[str]:
    return node.data if is_tree(node) else None

def is_array(node: Node) -> TypeGuard[Tree]:
    return tree_label(node) == "array"

def is_call(node: Node) -> TypeGuard[Tree]:
    return tree_label(node) == "call"

def array_items(node: Node) -> List[Node]:
    if not is_array(node):
        raise TypeError(f"Expected an array node, got {node!r}")

    return list(node.children)

def call_name(node: Node) -> str:
    if not is_call(node):
        raise TypeError(f"Expected a call node, got {node!r}")

    return str(node.children[0])

def call_args(node: Node) -> List[Node]:
    if not is_call(node):
        raise TypeError(f"Expected a call node, got {node!r}")

    args = node.children[1]
    return list(args.children)

def pretty(node: Node, indent: str = '  ') -> str:
    """Return pretty-printed node representation."""
    def _pretty(n: Node, level: int = 0) -> str:
        if is_tok(n):
            return f'{indent * level}{n.kind.name}\t{n.value!r}\n'
        if isinstance(n, Token):
            return f'{indent * level}{n.type}\t{n.value!r}\n'
        lines = [f'{indent * level}{n.data}\n']
        for child in n.children:
            lines.append(_pretty(child, level + 1))
        return ''.join(lines)
    return _pretty(node)
