"""Error taxonomy for directory traversal and entry inspection.

Errors local to one entry are caught by the tree walker and rendered inline
in that entry's report line. Only RootPathError is fatal to a run.
"""

from __future__ import annotations

import os
from pathlib import Path


def describe_os_error(error: OSError) -> str:
    """Return the human-readable reason for an OS-level failure.

    Args:
        error: Exception raised by an os/pathlib call

    Returns:
        The strerror text for the errno when one is set, otherwise the
        exception message
    """
    if error.errno is not None:
        return os.strerror(error.errno)
    return str(error) or type(error).__name__


class GlsError(Exception):
    """Base exception for all traversal errors."""

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message: str = message


class DirectoryError(GlsError):
    """Raised when a directory cannot be listed or entered."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize the directory error.

        Args:
            path: Directory that failed to list
            reason: Human-readable cause (e.g. "Permission denied")
        """
        super().__init__(f"Cannot list directory {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class FileAccessError(GlsError):
    """Raised when a file cannot be stat'ed, opened or read."""

    def __init__(self, path: Path, reason: str, *, operation: str = "access") -> None:
        """Initialize the file access error.

        Args:
            path: Path that failed
            reason: Human-readable cause
            operation: Operation that failed, used in the message
        """
        super().__init__(f"Cannot {operation} {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason
        self.operation: str = operation


class LinkStatError(FileAccessError):
    """The size probe (lstat) of a symbolic link failed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, reason, operation="lstat symlink")


class LinkReadError(FileAccessError):
    """Reading the stored target of a symbolic link failed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, reason, operation="read symlink")


class LinkResolveError(FileAccessError):
    """Resolving the absolute path of a symbolic link failed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, reason, operation="resolve symlink")


class DigestError(GlsError):
    """Raised when a digest cannot be created or finalised."""

    def __init__(self, algorithm: str, details: str = "hash error") -> None:
        """Initialize the digest error.

        Args:
            algorithm: hashlib algorithm name
            details: Detailed error information
        """
        super().__init__(f"Digest error ({algorithm}): {details}")
        self.algorithm: str = algorithm
        self.details: str = details


class RootPathError(GlsError):
    """Raised when the traversal root is missing or inaccessible."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize the root path error.

        Args:
            path: Root path as given by the caller
            reason: Human-readable cause
        """
        super().__init__(f"Error accessing '{path}': {reason}")
        self.path: Path = path
        self.reason: str = reason
