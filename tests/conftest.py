"""
Shared fixtures for the comment guard test suite.

Provides test fixtures for:
- Sample Python sources with and without discouraged keywords
- Temporary source trees
- Logger cleanup between tests
"""

import logging
from pathlib import Path

import pytest

from comment_guard.guard_logging import LOGGER_NAME

SAMPLE_SOURCE = '''"""Sample module. TODO: write real docs."""

import os  # hack: remove once the loader is fixed


def load(path):
    """Load a file."""
    value = "todo: this string is not a comment"
    return os.fspath(path)  # FIXME [handle bytes paths]


class Loader:
    """Loads nothing yet."""

    # autodoc and todos are fine
    pass
'''

CLEAN_SOURCE = '''"""Clean module."""


def add(x, y):
    # Return the sum
    return x + y
'''


@pytest.fixture(autouse=True)
def reset_guard_logger():
    """Drop handlers installed by setup_logging() so tests do not leak them."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def sample_source() -> str:
    return SAMPLE_SOURCE


@pytest.fixture()
def source_tree(tmp_path: Path) -> Path:
    """Create a directory with a flagged file, a clean file and a text file."""
    (tmp_path / "sample.py").write_text(SAMPLE_SOURCE, encoding="utf-8")
    (tmp_path / "clean.py").write_text(CLEAN_SOURCE, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("TODO: not scanned\n", encoding="utf-8")
    return tmp_path
