"""Protocol definitions for component interfaces.

This module defines structural subtyping protocols for the collaborators the
traversal core depends on, so tests can substitute in-memory fakes without
requiring inheritance.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from gls.types.models import Entry, EntryStat, TraversalFilter


@runtime_checkable
class FilesystemProbe(Protocol):
    """Protocol for the low-level filesystem capability.

    All operations are read-only. Listing failures raise DirectoryError,
    every other failure raises FileAccessError (or a subclass).
    """

    def list_directory(self, path: Path, traversal_filter: TraversalFilter) -> list[Entry]:
        """List a directory.

        Args:
            path: Directory to list
            traversal_filter: Which entries to include

        Returns:
            Entries sorted by name in byte-lexicographic order
        """
        ...

    def stat(self, path: Path) -> EntryStat:
        """Stat a path, following symbolic links."""
        ...

    def lstat(self, path: Path) -> EntryStat:
        """Stat a path without following a final symbolic link."""
        ...

    def read_link(self, path: Path) -> str:
        """Return the raw stored target of a symbolic link."""
        ...

    def resolve_absolute(self, path: Path) -> str:
        """Return the canonical absolute path that `path` refers to."""
        ...


class SizeFormatter(Protocol):
    """Protocol for byte count rendering strategies."""

    def __call__(self, num_bytes: int, /) -> str:
        """Render a non-negative byte count as a string."""
        ...
