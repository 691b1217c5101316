"""Test suite for the local filesystem probe."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from gls.core.data.filesystem.scanner import LocalFilesystem, is_visible
from gls.core.errors import DirectoryError, FileAccessError
from gls.types.models import FileKind, TraversalFilter
from gls.types.protocols import FilesystemProbe


class TestIsVisible:
    """Test the traversal filter predicate."""

    @pytest.mark.parametrize(
        ("name", "traversal_filter", "expected"),
        [
            ("file.txt", TraversalFilter.HIDE_HIDDEN, True),
            (".bashrc", TraversalFilter.HIDE_HIDDEN, False),
            (".bashrc", TraversalFilter.SHOW_ALL, True),
            (".", TraversalFilter.SHOW_ALL, False),
            ("..", TraversalFilter.SHOW_ALL, False),
        ],
    )
    def test_is_visible(self, name: str, traversal_filter: TraversalFilter, expected: bool) -> None:
        """Hidden names are dropped only under HIDE_HIDDEN; . and .. never appear."""
        assert is_visible(name, traversal_filter) is expected


class TestLocalFilesystem:
    """Test the LocalFilesystem probe."""

    def test_satisfies_probe_protocol(self) -> None:
        """LocalFilesystem structurally implements FilesystemProbe."""
        assert isinstance(LocalFilesystem(), FilesystemProbe)

    def test_list_directory_byte_order(self) -> None:
        """Entries are sorted by raw byte value, uppercase before lowercase."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            for name in ("b", "a", "B", "_x", "A10", "A2"):
                _ = (temp_path / name).write_text("x")

            entries = LocalFilesystem().list_directory(temp_path, TraversalFilter.SHOW_ALL)

            assert [e.name for e in entries] == ["A10", "A2", "B", "_x", "a", "b"]

    def test_list_directory_hides_dot_entries(self) -> None:
        """HIDE_HIDDEN drops dot names, SHOW_ALL keeps them."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            _ = (temp_path / ".hidden").write_text("x")
            _ = (temp_path / "shown").write_text("x")
            probe = LocalFilesystem()

            hidden = probe.list_directory(temp_path, TraversalFilter.HIDE_HIDDEN)
            shown = probe.list_directory(temp_path, TraversalFilter.SHOW_ALL)

            assert [e.name for e in hidden] == ["shown"]
            assert [e.name for e in shown] == [".hidden", "shown"]

    def test_list_directory_builds_child_paths(self) -> None:
        """Entry paths are the directory path joined with the name."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            _ = (temp_path / "child").write_text("x")

            (entry,) = LocalFilesystem().list_directory(temp_path, TraversalFilter.SHOW_ALL)

            assert entry.path == temp_path / "child"

    def test_list_directory_classifies_entries(self) -> None:
        """Files, directories and links are classified without following links."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            _ = (temp_path / "file").write_text("x")
            (temp_path / "dir").mkdir()
            os.symlink("dir", temp_path / "link_to_dir")

            entries = LocalFilesystem().list_directory(temp_path, TraversalFilter.SHOW_ALL)

            assert {e.name: e.kind for e in entries} == {
                "dir": FileKind.DIRECTORY,
                "file": FileKind.REGULAR_FILE,
                "link_to_dir": FileKind.SYMBOLIC_LINK,
            }

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="mkfifo not available")
    def test_list_directory_classifies_fifo(self) -> None:
        """Special files fall back to the lstat mode."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            os.mkfifo(temp_path / "pipe")

            (entry,) = LocalFilesystem().list_directory(temp_path, TraversalFilter.SHOW_ALL)

            assert entry.kind == FileKind.FIFO

    def test_list_directory_missing(self) -> None:
        """Listing a missing directory raises DirectoryError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "missing"

            with pytest.raises(DirectoryError) as exc_info:
                _ = LocalFilesystem().list_directory(missing, TraversalFilter.SHOW_ALL)

            assert exc_info.value.path == missing
            assert exc_info.value.reason == "No such file or directory"

    def test_list_directory_not_a_directory(self) -> None:
        """Listing a regular file raises DirectoryError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            target = Path(temp_dir) / "file"
            _ = target.write_text("x")

            with pytest.raises(DirectoryError) as exc_info:
                _ = LocalFilesystem().list_directory(target, TraversalFilter.SHOW_ALL)

            assert exc_info.value.reason == "Not a directory"

    def test_classification_failure_is_unknown(self) -> None:
        """An entry that cannot be inspected is UNKNOWN."""
        dir_entry = Mock()
        dir_entry.path = "/srv/locked"
        dir_entry.is_symlink.side_effect = OSError(13, "Permission denied")

        kind = LocalFilesystem()._classify_dir_entry(dir_entry)  # pyright: ignore[reportPrivateUsage]

        assert kind == FileKind.UNKNOWN

    def test_stat_regular_file(self) -> None:
        """stat reports kind, size and a positive or absent block size."""
        with tempfile.TemporaryDirectory() as temp_dir:
            target = Path(temp_dir) / "file"
            _ = target.write_text("Hello, World!")

            entry_stat = LocalFilesystem().stat(target)

            assert entry_stat.kind == FileKind.REGULAR_FILE
            assert entry_stat.size_bytes == 13
            assert entry_stat.block_size_hint is None or entry_stat.block_size_hint > 0

    def test_stat_follows_links_lstat_does_not(self) -> None:
        """stat sees the target, lstat sees the link."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            _ = (temp_path / "file").write_text("x")
            os.symlink("file", temp_path / "link")
            probe = LocalFilesystem()

            assert probe.stat(temp_path / "link").kind == FileKind.REGULAR_FILE
            assert probe.lstat(temp_path / "link").kind == FileKind.SYMBOLIC_LINK

    def test_stat_missing(self) -> None:
        """stat failures raise FileAccessError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(FileAccessError) as exc_info:
                _ = LocalFilesystem().stat(Path(temp_dir) / "missing")

            assert exc_info.value.operation == "stat"

    def test_read_link_on_regular_file(self) -> None:
        """readlink on a non-link raises FileAccessError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            target = Path(temp_dir) / "file"
            _ = target.write_text("x")

            with pytest.raises(FileAccessError) as exc_info:
                _ = LocalFilesystem().read_link(target)

            assert exc_info.value.reason == "Invalid argument"

    def test_resolve_absolute_is_strict(self) -> None:
        """Resolution of a missing path fails instead of guessing."""
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(FileAccessError):
                _ = LocalFilesystem().resolve_absolute(Path(temp_dir) / "missing")

    def test_does_not_change_working_directory(self) -> None:
        """No probe operation changes the process working directory."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            (temp_path / "dir").mkdir()
            before = os.getcwd()

            _ = LocalFilesystem().list_directory(temp_path, TraversalFilter.SHOW_ALL)
            _ = LocalFilesystem().resolve_absolute(temp_path / "dir")

            assert os.getcwd() == before
