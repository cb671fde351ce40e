from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from .errors import StreamPositionError
from .token_types import Tok


class TokenStack:
    """
    Forward cursor over an ordered token sequence.

    The cursor lives in [-1, len]: -1 before the start, len past the end.
    Only rewind() and next() move it; the items never change after
    construction.
    """

    __slots__ = ("_items", "_index")

    def __init__(self, items: Iterable[Tok] = ()):
        self._items: Tuple[Tok, ...] = tuple(items)
        self._index = -1
        self.rewind()

    # ========================================================================
    # Cursor protocol
    # ========================================================================

    def rewind(self) -> None:
        self._index = 0 if self._items else -1

    def valid(self) -> bool:
        return 0 <= self._index < len(self._items)

    def current(self) -> Tok:
        self._require_valid()
        return self._items[self._index]

    def next(self) -> None:
        if self._index < len(self._items):
            self._index += 1

    def key(self) -> int:
        self._require_valid()
        return self._index

    # ========================================================================
    # Helpers
    # ========================================================================

    def _require_valid(self) -> None:
        if not self.valid():
            raise StreamPositionError(self._index, len(self._items))

    def tokens(self) -> List[Tok]:
        """Copy of the raw items; does not touch the cursor."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Tok]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"TokenStack({len(self._items)} tokens, cursor={self._index})"
