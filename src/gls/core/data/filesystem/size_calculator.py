"""Aggregate directory size pre-pass."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import overload, override

from gls.core.errors import DirectoryError, FileAccessError
from gls.types.models import FileKind, TraversalFilter
from gls.types.protocols import FilesystemProbe

from .scanner import LocalFilesystem

logger = logging.getLogger(__name__)


class DirectorySizes(Sequence[int]):
    """Ordered aggregate sizes, one slot per directory visible to the print pass.

    Slots are in pre-order depth-first order (slot 0 is the root). Each slot
    is also keyed by the directory's path so the print pass can look sizes up
    by path instead of tracking a shared cursor.
    """

    __slots__ = ("_index", "_paths", "_sizes")

    def __init__(self) -> None:
        self._sizes: list[int] = []
        self._paths: list[Path] = []
        self._index: dict[Path, int] = {}

    def _allocate(self, path: Path) -> int:
        slot = len(self._sizes)
        self._sizes.append(0)
        self._paths.append(path)
        self._index[path] = slot
        return slot

    def _set(self, slot: int, size: int) -> None:
        self._sizes[slot] = size

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[int]: ...

    @override
    def __getitem__(self, index: int | slice) -> int | Sequence[int]:
        return self._sizes[index]

    @override
    def __len__(self) -> int:
        return len(self._sizes)

    @override
    def __iter__(self) -> Iterator[int]:
        return iter(self._sizes)

    @override
    def __repr__(self) -> str:
        return f"DirectorySizes({self._sizes!r})"

    @property
    def paths(self) -> Sequence[Path]:
        """Directory paths in slot order, for diagnostics and slot-order checks."""
        return tuple(self._paths)

    def size_of(self, path: Path) -> int:
        """Return the aggregate size recorded for a directory.

        Args:
            path: Directory path exactly as produced by the traversal

        Raises:
            KeyError: If the directory has no slot (unvisited or hidden)
        """
        return self._sizes[self._index[path]]


class DirectorySizeComputer:
    """Computes aggregate byte sizes for every directory in a tree.

    The walk always lists with SHOW_ALL so totals include hidden entries.
    The print filter only decides which directories receive a slot: under
    HIDE_HIDDEN a hidden subdirectory (and its whole subtree) is sized
    detached and folded into its parent's total without a slot.

    Sizing is best-effort: unlistable directories total 0 and entries whose
    stat fails contribute 0.
    """

    def __init__(
        self,
        probe: FilesystemProbe | None = None,
        traversal_filter: TraversalFilter = TraversalFilter.HIDE_HIDDEN,
    ) -> None:
        """Initialize the size computer.

        Args:
            probe: Filesystem capability used for listing and stat calls
            traversal_filter: Filter the subsequent print pass will use
        """
        self.probe: FilesystemProbe = probe or LocalFilesystem()
        self.traversal_filter: TraversalFilter = traversal_filter

    def compute_sizes(self, root: Path) -> DirectorySizes:
        """Compute the ordered aggregate sizes for the tree rooted at root.

        Args:
            root: Root directory of the traversal

        Returns:
            DirectorySizes with the root in slot 0
        """
        sizes = DirectorySizes()
        _ = self._compute(root, sizes)
        logger.debug(
            "Computed directory sizes",
            extra={"root": str(root), "directories": len(sizes)},
        )
        return sizes

    def _compute(self, path: Path, sizes: DirectorySizes | None) -> int:
        """Size one directory recursively.

        Args:
            path: Directory to size
            sizes: Output sequence, or None for a detached sub-computation

        Returns:
            Aggregate size of the directory in bytes
        """
        slot = sizes._allocate(path) if sizes is not None else None  # pyright: ignore[reportPrivateUsage]

        try:
            entries = self.probe.list_directory(path, TraversalFilter.SHOW_ALL)
        except DirectoryError as exc:
            logger.debug(
                "Skipping unlistable directory in size pass",
                extra={"path": str(path), "reason": exc.reason},
            )
            return 0

        total = 0
        for entry in entries:
            if entry.kind == FileKind.DIRECTORY:
                detached = sizes is None or (
                    entry.is_hidden and self.traversal_filter == TraversalFilter.HIDE_HIDDEN
                )
                total += self._compute(entry.path, None if detached else sizes)

            elif entry.kind == FileKind.REGULAR_FILE:
                try:
                    total += self.probe.stat(entry.path).size_bytes
                except FileAccessError as exc:
                    logger.debug(
                        "Skipping unreadable file in size pass",
                        extra={"path": str(entry.path), "reason": exc.reason},
                    )

        if sizes is not None and slot is not None:
            sizes._set(slot, total)  # pyright: ignore[reportPrivateUsage]
        return total
