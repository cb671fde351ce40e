"""
Token Types for rule expressions

Shared between the stack, the node builders and the AST facade.
"""

from typing import Any, Dict, FrozenSet
from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token kinds produced by the rule lexer"""

    # Literals
    ATOM = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOL = auto()
    NULL = auto()
    STRING = auto()

    # Names
    VARIABLE = auto()
    FUNCTION = auto()

    # Punctuation
    LSQB = auto()  # [
    RSQB = auto()  # ]
    LPAR = auto()
    RPAR = auto()
    COMMA = auto()

    # Comparison
    EQ = auto()
    EQ_STRICT = auto()  # ===
    NEQ = auto()
    NEQ_STRICT = auto()  # !==
    LT = auto()
    LTE = auto()
    GT = auto()
    GTE = auto()
    IN = auto()
    NOT_IN = auto()

    # Logical
    AND = auto()
    OR = auto()
    NEG = auto()  # !

    # Special
    SPACE = auto()
    NEWLINE = auto()
    COMMENT = auto()


class Group(Enum):
    """Coarse token classification used for filtering"""

    VALUE = auto()
    STRING = auto()
    VARIABLE = auto()
    FUNCTION = auto()
    SQUARE_BRACKET = auto()
    PARENTHESIS = auto()
    SEPARATOR = auto()
    OPERATOR = auto()
    LOGICAL = auto()
    SPACE = auto()
    COMMENT = auto()


KIND_GROUPS: Dict[TT, Group] = {
    TT.ATOM: Group.VALUE,
    TT.INTEGER: Group.VALUE,
    TT.FLOAT: Group.VALUE,
    TT.BOOL: Group.VALUE,
    TT.NULL: Group.VALUE,
    TT.STRING: Group.STRING,
    TT.VARIABLE: Group.VARIABLE,
    TT.FUNCTION: Group.FUNCTION,
    TT.LSQB: Group.SQUARE_BRACKET,
    TT.RSQB: Group.SQUARE_BRACKET,
    TT.LPAR: Group.PARENTHESIS,
    TT.RPAR: Group.PARENTHESIS,
    TT.COMMA: Group.SEPARATOR,
    TT.EQ: Group.OPERATOR,
    TT.EQ_STRICT: Group.OPERATOR,
    TT.NEQ: Group.OPERATOR,
    TT.NEQ_STRICT: Group.OPERATOR,
    TT.LT: Group.OPERATOR,
    TT.LTE: Group.OPERATOR,
    TT.GT: Group.OPERATOR,
    TT.GTE: Group.OPERATOR,
    TT.IN: Group.OPERATOR,
    TT.NOT_IN: Group.OPERATOR,
    TT.AND: Group.LOGICAL,
    TT.OR: Group.LOGICAL,
    TT.NEG: Group.LOGICAL,
    TT.SPACE: Group.SPACE,
    TT.NEWLINE: Group.SPACE,
    TT.COMMENT: Group.COMMENT,
}

# Kinds that expand into a sub-tree when traversed
COMPOSITE_KINDS: FrozenSet[TT] = frozenset({TT.STRING, TT.LSQB, TT.FUNCTION})

# Groups allowed as array elements / call arguments
ELEMENT_GROUPS: FrozenSet[Group] = frozenset({
    Group.VALUE,
    Group.STRING,
    Group.VARIABLE,
    Group.FUNCTION,
})


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    kind: TT
    value: Any
    position: int = 0
    line: int = 1

    @property
    def group(self) -> Group:
        return KIND_GROUPS[self.kind]

    @property
    def is_composite(self) -> bool:
        return self.kind in COMPOSITE_KINDS

    def __repr__(self):
        return f"Tok({self.kind.name}, {self.value!r}, @{self.position})"


def tok(kind: TT, value: Any, position: int = 0, line: int = 1) -> Tok:
    """Convenience constructor for lexers and tests"""
    return Tok(kind=kind, value=value, position=position, line=line)
