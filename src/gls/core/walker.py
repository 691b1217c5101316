"""Print pass: depth-first report of every entry in a directory tree.

Report line formats (label is the entry classifier label):

    | name (directory - SIZE)
    | name (directory - error parsing directory: REASON)
    *** empty directory ***
    | name (regular file - SIZE - HEXDIGEST)
    | name (regular file - error parsing file: REASON)
    | name (regular file - SIZE - error computing ALGORITHM: REASON)
    | name (symbolic link - points to 'TARGET', absolute path : 'ABSOLUTE')
    | name (symbolic link - error parsing|reading|resolving symlink: REASON)
    | name (LABEL)

Rows below the root are prefixed with depth * indent_width padding
characters: "-" for directory rows, spaces for everything else.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from gls.core.checksum import ChecksumComputer
from gls.core.classifier import file_kind_label
from gls.core.data.filesystem.scanner import LocalFilesystem
from gls.core.data.filesystem.size_calculator import DirectorySizes
from gls.core.errors import (
    DigestError,
    DirectoryError,
    FileAccessError,
    LinkReadError,
    LinkResolveError,
    LinkStatError,
)
from gls.core.symlinks import SymlinkResolver
from gls.types.aliases import ReportSink
from gls.types.models import Entry, FileKind, ReportSummary, TraversalFilter
from gls.types.protocols import FilesystemProbe, SizeFormatter
from gls.utils.formatting import format_raw

logger = logging.getLogger(__name__)

EMPTY_DIRECTORY_MARKER: Final[str] = "*** empty directory ***"
DEFAULT_INDENT_WIDTH: Final[int] = 3

_DIRECTORY_PAD: Final[str] = "-"
_LEAF_PAD: Final[str] = " "

_LINK_ERROR_VERBS: Final[dict[type[FileAccessError], str]] = {
    LinkStatError: "parsing",
    LinkReadError: "reading",
    LinkResolveError: "resolving",
}


class TreeWalker:
    """Depth-first walker that emits one report line per visited entry.

    Paths are carried explicitly through the recursion; the process working
    directory is never changed. Directory totals are looked up by path in
    the DirectorySizes produced by the size pre-pass.
    """

    def __init__(
        self,
        sink: ReportSink,
        *,
        traversal_filter: TraversalFilter = TraversalFilter.HIDE_HIDDEN,
        formatter: SizeFormatter = format_raw,
        probe: FilesystemProbe | None = None,
        checksum: ChecksumComputer | None = None,
        resolver: SymlinkResolver | None = None,
        indent_width: int = DEFAULT_INDENT_WIDTH,
    ) -> None:
        """Initialize the tree walker.

        Args:
            sink: Receives each rendered report line
            traversal_filter: Which entries to visit
            formatter: Byte count rendering strategy
            probe: Filesystem capability
            checksum: Digest computer for regular files
            resolver: Symbolic link inspector
            indent_width: Padding characters per depth level
        """
        self.sink: ReportSink = sink
        self.traversal_filter: TraversalFilter = traversal_filter
        self.formatter: SizeFormatter = formatter
        self.probe: FilesystemProbe = probe or LocalFilesystem()
        self.checksum: ChecksumComputer = checksum or ChecksumComputer()
        self.resolver: SymlinkResolver = resolver or SymlinkResolver(self.probe)
        self.indent_width: int = indent_width

    def print_tree(self, root: Path, sizes: DirectorySizes) -> ReportSummary:
        """Print the report for the tree rooted at root.

        The root itself gets no titled row; only its descendants do.

        Args:
            root: Root directory of the traversal
            sizes: Aggregate sizes from DirectorySizeComputer run with the
                same traversal filter

        Returns:
            Counters for the printed report
        """
        summary = ReportSummary()
        self._walk(root, str(root), depth=0, prefix="", sizes=sizes, summary=summary)
        return summary

    def _emit(self, line: str) -> None:
        self.sink(line)

    def _pad(self, depth: int, fill: str) -> str:
        return fill * (depth * self.indent_width)

    def _walk(
        self,
        path: Path,
        name: str,
        *,
        depth: int,
        prefix: str,
        sizes: DirectorySizes,
        summary: ReportSummary,
    ) -> None:
        try:
            entries = self.probe.list_directory(path, self.traversal_filter)
        except DirectoryError as exc:
            logger.warning(
                "Skipping directory that cannot be listed",
                extra={"path": str(path), "reason": exc.reason},
            )
            summary.errors += 1
            self._emit(f"{prefix}| {name} (directory - error parsing directory: {exc.reason})")
            return

        if depth >= 1:
            summary.directories += 1
            self._emit(f"{prefix}| {name} (directory - {self.formatter(self._directory_size(path, sizes))})")

        if not entries:
            self._emit(f"{self._pad(depth, _LEAF_PAD)}{EMPTY_DIRECTORY_MARKER}")
            return

        for entry in entries:
            summary.entries += 1
            if entry.kind == FileKind.DIRECTORY:
                self._walk(
                    entry.path,
                    entry.name,
                    depth=depth + 1,
                    prefix=self._pad(depth, _DIRECTORY_PAD),
                    sizes=sizes,
                    summary=summary,
                )
                continue

            line = self._describe_leaf(entry, summary)
            self._emit(f"{self._pad(depth, _LEAF_PAD)}{line}")

    def _directory_size(self, path: Path, sizes: DirectorySizes) -> int:
        try:
            return sizes.size_of(path)
        except KeyError:
            # Directory appeared between the size pass and the print pass
            logger.warning("No precomputed size for directory", extra={"path": str(path)})
            return 0

    def _describe_leaf(self, entry: Entry, summary: ReportSummary) -> str:
        """Render the report line for a non-directory entry."""
        label = file_kind_label(entry.kind)

        if entry.kind == FileKind.REGULAR_FILE:
            return self._describe_file(entry, label, summary)
        if entry.kind == FileKind.SYMBOLIC_LINK:
            return self._describe_symlink(entry, label, summary)
        return f"| {entry.name} ({label})"

    def _describe_file(self, entry: Entry, label: str, summary: ReportSummary) -> str:
        try:
            entry_stat = self.probe.stat(entry.path)
        except FileAccessError as exc:
            logger.debug("Stat failed", extra={"path": str(entry.path), "reason": exc.reason})
            summary.errors += 1
            return f"| {entry.name} ({label} - error parsing file: {exc.reason})"

        size = self.formatter(entry_stat.size_bytes)

        try:
            digest = self.checksum.digest_file(entry.path, entry_stat.block_size_hint)
        except FileAccessError as exc:
            reason = exc.reason
        except DigestError:
            reason = "hash error"
        else:
            return f"| {entry.name} ({label} - {size} - {digest})"

        logger.debug("Checksum failed", extra={"path": str(entry.path), "reason": reason})
        summary.errors += 1
        return f"| {entry.name} ({label} - {size} - error computing {self.checksum.algorithm}: {reason})"

    def _describe_symlink(self, entry: Entry, label: str, summary: ReportSummary) -> str:
        try:
            resolution = self.resolver.resolve_link(entry.path)
        except FileAccessError as exc:
            verb = _LINK_ERROR_VERBS.get(type(exc), "resolving")
            logger.debug("Symlink inspection failed", extra={"path": str(entry.path), "reason": exc.reason})
            summary.errors += 1
            return f"| {entry.name} ({label} - error {verb} symlink: {exc.reason})"

        return f"| {entry.name} ({label} - points to '{resolution.target}', absolute path : '{resolution.absolute}')"
