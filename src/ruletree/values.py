from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional

from lark import Token

from .ast import AST
from .errors import ParseError, UndefinedFunctionError
from .token_types import TT, Tok
from .tree import Node, array_items, call_args, call_name, is_array, is_call, is_string

Functions = Mapping[str, Callable[..., Any]]


def literal_value(token: Tok) -> Any:
    """Python value of a plain value token."""
    match token.kind:
        case TT.INTEGER | TT.FLOAT:
            convert = int if token.kind is TT.INTEGER else float
            try:
                return convert(token.value)
            except ValueError:
                raise ParseError(
                    f"Malformed {token.kind.name} literal {token.value!r}", token
                ) from None
        case TT.BOOL:
            if isinstance(token.value, bool):
                return token.value
            return str(token.value).lower() == "true"
        case TT.NULL:
            return None
        case TT.ATOM:
            return token.value

    raise ParseError(f"{token.kind.name} token has no value", token)


def to_value(node: Node, ast: AST, functions: Optional[Functions] = None) -> Any:
    """Fold one materialized node into a Python value.

    Variables resolve through ``ast.get_variable``; calls look up
    ``functions`` by name. Operators are never evaluated.
    """
    if is_string(node):
        return str(node)

    if is_array(node):
        return [to_value(item, ast, functions) for item in array_items(node)]

    if is_call(node):
        name = call_name(node)
        fn = (functions or {}).get(name)
        if fn is None:
            raise UndefinedFunctionError(name)

        args = [to_value(arg, ast, functions) for arg in call_args(node)]
        return fn(*args)

    if isinstance(node, Token):
        raise ParseError(f"Unexpected {node.type} node")

    if node.kind is TT.VARIABLE:
        return ast.get_variable(str(node.value))

    return literal_value(node)


def to_values(ast: AST, functions: Optional[Functions] = None) -> List[Any]:
    """Fold a whole traversal, dropping tokens the options ignore."""
    out: List[Any] = []

    for node in ast.nodes():
        if isinstance(node, Tok) and ast.options.ignores(node.group):
            continue
        out.append(to_value(node, ast, functions))

    return out
