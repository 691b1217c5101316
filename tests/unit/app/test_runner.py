"""Tests for the report runner."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from gls.app.runner import ReportRunner, RunContext, validate_root
from gls.core.config import ReportConfig
from gls.core.errors import RootPathError
from gls.types.models import TraversalFilter
from gls.utils.formatting import format_human, format_raw
from gls.utils.logging import get_run_id
from tests.fixtures.filesystem_fakes import TreeLayout


class TestRunContext:
    """Test binding strategies from configuration."""

    def test_defaults(self) -> None:
        """Default configuration hides dot entries and prints raw sizes."""
        context = RunContext.from_config(ReportConfig())

        assert context.traversal_filter == TraversalFilter.HIDE_HIDDEN
        assert context.formatter is format_raw
        assert context.checksum.algorithm == "md5"
        assert context.indent_width == 3

    def test_all_options(self) -> None:
        """Every configuration field reaches the context."""
        config = ReportConfig(
            show_hidden=True,
            human_readable=True,
            digest_algorithm="sha1",
            indent_width=2,
            default_block_size=512,
        )

        context = RunContext.from_config(config)

        assert context.traversal_filter == TraversalFilter.SHOW_ALL
        assert context.formatter is format_human
        assert context.checksum.algorithm == "sha1"
        assert context.checksum.default_block_size == 512
        assert context.indent_width == 2


class TestValidateRoot:
    """Test root validation."""

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root is fatal."""
        with pytest.raises(RootPathError) as exc_info:
            validate_root(tmp_path / "missing")

        assert exc_info.value.reason == "No such file or directory"

    def test_file_root(self, tmp_path: Path) -> None:
        """A regular file cannot be a root."""
        target = tmp_path / "file"
        _ = target.write_text("x")

        with pytest.raises(RootPathError) as exc_info:
            validate_root(target)

        assert exc_info.value.reason == "Not a directory"

    def test_directory_root(self, tmp_path: Path) -> None:
        """An accessible directory passes."""
        validate_root(tmp_path)


class TestReportRunner:
    """Test the ReportRunner class."""

    def test_run_prints_report_and_returns_summary(self, make_tree: Callable[[TreeLayout], Path]) -> None:
        """Both passes run and the summary carries the root total."""
        root = make_tree({"a": "123", "d": {"b": "4567"}, ".h": "89"})
        lines: list[str] = []

        summary = ReportRunner(root, RunContext.from_config(ReportConfig()), lines.append).run()

        assert lines[0].startswith("| a (regular file - 3 - ")
        assert lines[1] == "| d (directory - 4)"
        assert summary.total_bytes == 9
        assert summary.entries == 3
        assert summary.directories == 1

    def test_run_rejects_missing_root(self, tmp_path: Path) -> None:
        """The root is validated before anything is printed."""
        lines: list[str] = []
        runner = ReportRunner(tmp_path / "missing", RunContext.from_config(ReportConfig()), lines.append)

        with pytest.raises(RootPathError):
            _ = runner.run()

        assert lines == []

    def test_run_id_scoped_to_run(
        self, make_tree: Callable[[TreeLayout], Path], caplog: pytest.LogCaptureFixture
    ) -> None:
        """A run ID is active during the run and cleared afterwards."""
        root = make_tree({"a": "1"})
        seen: list[str | None] = []

        def sink(line: str) -> None:
            seen.append(get_run_id())

        with caplog.at_level(logging.INFO, logger="gls.app.runner"):
            _ = ReportRunner(root, RunContext.from_config(ReportConfig()), sink).run()

        assert seen[0] is not None
        assert get_run_id() is None
        assert "Report complete" in caplog.text
