"""Shared fixtures for the styleguide_pages test suite.

The helpers here build small component trees on disk so tests can exercise
the real locator, templating service, and writer without mocks.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def write_file() -> typ.Callable[[Path, str], Path]:
    """Return a helper that writes UTF-8 text, creating parent folders."""

    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_package_logger() -> typ.Iterator[None]:
    """Undo handler changes made by ``configure_logging`` between tests."""
    yield
    logger = logging.getLogger("styleguide_pages")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
