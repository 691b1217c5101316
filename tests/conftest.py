"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from tests.fixtures.filesystem_fakes import FailingProbe, TreeLayout, build_tree


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[TreeLayout], Path]:
    """Return a builder that creates a tree under a fresh root directory."""

    def _make(layout: TreeLayout) -> Path:
        root = tmp_path / "root"
        root.mkdir()
        build_tree(root, layout)
        return root

    return _make


@pytest.fixture
def failing_probe() -> FailingProbe:
    """Provide a probe with no failures configured."""
    return FailingProbe()


@pytest.fixture
def collected_lines() -> list[str]:
    """Provide a list usable as a report sink via .append."""
    return []


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo configure_logging() calls made by a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
