from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from .token_types import Group

MAX_DEPTH_ENV = "RULETREE_MAX_DEPTH"

DEFAULT_MAX_DEPTH = 64


def _default_ignored() -> FrozenSet[Group]:
    return frozenset({Group.SPACE, Group.COMMENT})


@dataclass(frozen=True)
class Options:
    """Knobs shared by the AST and the node builders."""

    ignored_groups: FrozenSet[Group] = field(default_factory=_default_ignored)
    max_depth: int = DEFAULT_MAX_DEPTH

    def ignores(self, group: Group) -> bool:
        return group in self.ignored_groups

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Options:
        """Build options, honouring RULETREE_MAX_DEPTH when it is set."""
        env = os.environ if environ is None else environ
        raw = env.get(MAX_DEPTH_ENV)

        if raw is None or raw.strip() == "":
            return cls()

        try:
            depth = int(raw)
        except ValueError:
            raise ValueError(f"{MAX_DEPTH_ENV} must be an integer, got {raw!r}") from None

        if depth < 1:
            raise ValueError(f"{MAX_DEPTH_ENV} must be positive, got {depth}")

        return cls(max_depth=depth)


DEFAULT_OPTIONS = Options()


def resolve_options(options: Optional[Options]) -> Options:
    return DEFAULT_OPTIONS if options is None else options
