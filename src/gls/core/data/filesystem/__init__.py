"""Filesystem operations module for directory listing and size calculations."""

from __future__ import annotations

from .scanner import LocalFilesystem, is_visible
from .size_calculator import DirectorySizeComputer, DirectorySizes

__all__ = [
    "DirectorySizeComputer",
    "DirectorySizes",
    "LocalFilesystem",
    "is_visible",
]
