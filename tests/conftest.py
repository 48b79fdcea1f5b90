"""Global test configuration — shared fixtures and safety guards.

This conftest provides:

1. **Logger guard** — the ``textfold`` logger is process-wide, so any
   level change or file handler a test (or the CLI under test) adds is
   rolled back afterwards.

2. **Settings factory** — ``write_settings`` writes a TOML file under
   ``tmp_path`` and returns its path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from textfold.logging import handler, logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    """Undo logger level and handler changes made during a test."""
    level = logger.level
    stderr_level = handler.level
    handlers = list(logger.handlers)
    yield
    for extra in list(logger.handlers):
        if extra not in handlers:
            logger.removeHandler(extra)
            extra.close()
    logger.setLevel(level)
    handler.setLevel(stderr_level)


@pytest.fixture
def write_settings(tmp_path: Path) -> Callable[[str], Path]:
    """Factory fixture — writes TOML content and returns the file path.

    Usage::

        def test_something(write_settings):
            path = write_settings("[urlify]\\nmax_length = 20\\n")
    """

    def _factory(content: str, name: str = "textfold.toml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _factory
