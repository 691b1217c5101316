"""Local filesystem probe for directory listing and entry inspection."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from gls.core.classifier import classify_mode
from gls.core.errors import DirectoryError, FileAccessError, describe_os_error
from gls.types.models import Entry, EntryStat, FileKind, TraversalFilter

logger = logging.getLogger(__name__)


def _sort_key(entry: Entry) -> bytes:
    """Byte-lexicographic ordering key for entry names."""
    return os.fsencode(entry.name)


def is_visible(name: str, traversal_filter: TraversalFilter) -> bool:
    """Check whether a name passes the traversal filter.

    Args:
        name: Entry name (no directory component)
        traversal_filter: Active filter

    Returns:
        False for hidden names under HIDE_HIDDEN, True otherwise
    """
    if name in (".", ".."):
        return False
    if traversal_filter == TraversalFilter.HIDE_HIDDEN:
        return not name.startswith(".")
    return True


class LocalFilesystem:
    """Read-only filesystem probe backed by os.scandir and os.stat.

    Provides:
    - Sorted, filtered directory listings with entry type classification
    - stat/lstat probes carrying the preferred I/O block size
    - Symbolic link reading and strict absolute resolution

    No operation changes the process working directory.
    """

    def list_directory(self, path: Path, traversal_filter: TraversalFilter) -> list[Entry]:
        """List a directory in byte-lexicographic name order.

        Args:
            path: Directory to list
            traversal_filter: Which entries to include

        Returns:
            Sorted list of entries

        Raises:
            DirectoryError: If the directory cannot be opened or read
        """
        entries: list[Entry] = []
        try:
            with os.scandir(path) as iterator:
                for dir_entry in iterator:
                    if not is_visible(dir_entry.name, traversal_filter):
                        continue
                    entries.append(
                        Entry(
                            name=dir_entry.name,
                            path=path / dir_entry.name,
                            kind=self._classify_dir_entry(dir_entry),
                        )
                    )
        except OSError as exc:
            raise DirectoryError(path, describe_os_error(exc)) from exc

        entries.sort(key=_sort_key)
        return entries

    def stat(self, path: Path) -> EntryStat:
        """Stat a path, following symbolic links.

        Raises:
            FileAccessError: If the path cannot be stat'ed
        """
        try:
            result = os.stat(path)
        except OSError as exc:
            raise FileAccessError(path, describe_os_error(exc), operation="stat") from exc
        return self._to_entry_stat(result)

    def lstat(self, path: Path) -> EntryStat:
        """Stat a path without following a final symbolic link.

        Raises:
            FileAccessError: If the path cannot be lstat'ed
        """
        try:
            result = os.lstat(path)
        except OSError as exc:
            raise FileAccessError(path, describe_os_error(exc), operation="lstat") from exc
        return self._to_entry_stat(result)

    def read_link(self, path: Path) -> str:
        """Return the raw stored target of a symbolic link.

        Raises:
            FileAccessError: If the link cannot be read
        """
        try:
            return os.readlink(path)
        except OSError as exc:
            raise FileAccessError(path, describe_os_error(exc), operation="readlink") from exc

    def resolve_absolute(self, path: Path) -> str:
        """Return the canonical absolute path that a path refers to.

        Resolution is strict: a dangling link or a loop is an error.

        Raises:
            FileAccessError: If the path cannot be resolved
        """
        try:
            return os.path.realpath(path, strict=True)
        except OSError as exc:
            raise FileAccessError(path, describe_os_error(exc), operation="resolve") from exc

    def _classify_dir_entry(self, dir_entry: os.DirEntry[str]) -> FileKind:
        """Classify a scandir entry without following symbolic links.

        Uses the cached d_type where available and falls back to lstat for
        special files. Anything that cannot be determined is UNKNOWN.
        """
        try:
            if dir_entry.is_symlink():
                return FileKind.SYMBOLIC_LINK
            if dir_entry.is_dir(follow_symlinks=False):
                return FileKind.DIRECTORY
            if dir_entry.is_file(follow_symlinks=False):
                return FileKind.REGULAR_FILE
            return classify_mode(dir_entry.stat(follow_symlinks=False).st_mode)
        except OSError as exc:
            logger.debug(
                "Could not classify entry",
                extra={"path": dir_entry.path, "reason": describe_os_error(exc)},
            )
            return FileKind.UNKNOWN

    @staticmethod
    def _to_entry_stat(result: os.stat_result) -> EntryStat:
        block_size: int | None = getattr(result, "st_blksize", None)
        return EntryStat(
            kind=classify_mode(result.st_mode),
            size_bytes=result.st_size,
            block_size_hint=block_size if block_size and block_size > 0 else None,
        )
