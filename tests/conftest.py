from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.go_builder import GoTreeBuilder


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTreeBuilder:
    """Provide a reusable Go source tree rooted at the pytest tmp_path."""
    return GoTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_tagcount_logger():
    """Undo CLI logging setup so caplog sees records from every test."""
    yield
    logger = logging.getLogger("tagcount")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
