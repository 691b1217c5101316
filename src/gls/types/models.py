"""Data models for gls.

This module defines the immutable dataclasses and enumerations passed between
the traversal components. Entries are transient: they are produced by the
filesystem collaborator for one listing and discarded after that iteration.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileKind(str, Enum):
    """Closed set of directory entry types."""

    REGULAR_FILE = "regular_file"
    DIRECTORY = "directory"
    FIFO = "fifo"
    SYMBOLIC_LINK = "symbolic_link"
    CHAR_DEVICE = "char_device"
    BLOCK_DEVICE = "block_device"
    SOCKET = "socket"
    UNKNOWN = "unknown"


class TraversalFilter(str, Enum):
    """Which entries the print pass visits."""

    HIDE_HIDDEN = "hide_hidden"  # Drop names starting with "."
    SHOW_ALL = "show_all"


class SizeFormat(str, Enum):
    """Byte count rendering strategy."""

    RAW = "raw"
    HUMAN = "human"


@dataclass(slots=True, frozen=True)
class Entry:
    """A single directory entry as returned by a listing."""

    name: str
    path: Path
    kind: FileKind

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")


@dataclass(slots=True, frozen=True)
class EntryStat:
    """Result of a stat/lstat probe.

    block_size_hint is the preferred I/O block size reported by the
    filesystem, or None when the platform does not provide one.
    """

    kind: FileKind
    size_bytes: int
    block_size_hint: int | None


@dataclass(slots=True, frozen=True)
class LinkResolution:
    """Stored text and canonical absolute resolution of a symbolic link."""

    target: str
    absolute: str


@dataclass(slots=True)
class ReportSummary:
    """Counters collected while printing a report."""

    directories: int = 0
    entries: int = 0
    errors: int = 0
    total_bytes: int = 0
