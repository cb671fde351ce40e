from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

# tests.support.harness and ruletree both resolve from here
for path in (BASE_DIR, SRC_DIR):
    if str(path) not in sys.path:
        sys.path.append(str(path))

RULETREE_LOGGERS = ("ruletree.nodes", "ruletree.ast")


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """caplog with the builder and AST loggers lowered to DEBUG."""
    for name in RULETREE_LOGGERS:
        caplog.set_level(logging.DEBUG, logger=name)
    return caplog
