"""Entry classification: raw stat modes to FileKind, FileKind to labels."""

from __future__ import annotations

import stat
from collections.abc import Callable
from typing import Final

from gls.types.models import FileKind

FILE_KIND_LABELS: Final[dict[FileKind, str]] = {
    FileKind.REGULAR_FILE: "regular file",
    FileKind.DIRECTORY: "directory",
    FileKind.FIFO: "fifo (named pipe)",
    FileKind.SYMBOLIC_LINK: "symbolic link",
    FileKind.CHAR_DEVICE: "character special device",
    FileKind.BLOCK_DEVICE: "block special device",
    FileKind.SOCKET: "UNIX domain socket",
    FileKind.UNKNOWN: "unknown",
}

# Checked in order; S_IS* predicates are mutually exclusive
_MODE_PREDICATES: Final[tuple[tuple[FileKind, Callable[[int], bool]], ...]] = (
    (FileKind.REGULAR_FILE, stat.S_ISREG),
    (FileKind.DIRECTORY, stat.S_ISDIR),
    (FileKind.SYMBOLIC_LINK, stat.S_ISLNK),
    (FileKind.FIFO, stat.S_ISFIFO),
    (FileKind.CHAR_DEVICE, stat.S_ISCHR),
    (FileKind.BLOCK_DEVICE, stat.S_ISBLK),
    (FileKind.SOCKET, stat.S_ISSOCK),
)


def file_kind_label(kind: object) -> str:
    """Return the human label for a file kind.

    Total function: anything that is not a recognised FileKind maps to
    "unknown".

    Examples:
        >>> file_kind_label(FileKind.FIFO)
        'fifo (named pipe)'
        >>> file_kind_label("bogus")
        'unknown'
    """
    if isinstance(kind, FileKind):
        return FILE_KIND_LABELS[kind]
    return FILE_KIND_LABELS[FileKind.UNKNOWN]


def classify_mode(st_mode: int) -> FileKind:
    """Map a raw st_mode value to a FileKind, UNKNOWN when unrecognised."""
    for kind, predicate in _MODE_PREDICATES:
        if predicate(st_mode):
            return kind
    return FileKind.UNKNOWN
