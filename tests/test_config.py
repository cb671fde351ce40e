from __future__ import annotations

import pytest

from ruletree.config import DEFAULT_MAX_DEPTH, MAX_DEPTH_ENV, Options
from ruletree.token_types import Group


def test_defaults() -> None:
    opts = Options()

    assert opts.max_depth == DEFAULT_MAX_DEPTH
    assert opts.ignores(Group.SPACE)
    assert opts.ignores(Group.COMMENT)
    assert not opts.ignores(Group.VALUE)


@pytest.mark.parametrize(
    "environ, depth",
    [
        pytest.param({}, DEFAULT_MAX_DEPTH, id="unset"),
        pytest.param({MAX_DEPTH_ENV: ""}, DEFAULT_MAX_DEPTH, id="blank"),
        pytest.param({MAX_DEPTH_ENV: "8"}, 8, id="explicit"),
    ],
)
def test_from_env(environ: dict, depth: int) -> None:
    assert Options.from_env(environ).max_depth == depth


@pytest.mark.parametrize("raw", ["deep", "0", "-2"])
def test_from_env_rejects_bad_depth(raw: str) -> None:
    with pytest.raises(ValueError):
        Options.from_env({MAX_DEPTH_ENV: raw})


def test_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(MAX_DEPTH_ENV, "3")

    assert Options.from_env().max_depth == 3
