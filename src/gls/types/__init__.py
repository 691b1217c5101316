"""Type definitions and protocols for gls.

This package provides:
- Data models (immutable dataclasses and enumerations)
- Protocol definitions (structural subtyping interfaces)
- Type aliases (PEP 695 modern syntax)
"""

from gls.types.aliases import ReportSink
from gls.types.models import (
    Entry,
    EntryStat,
    FileKind,
    LinkResolution,
    ReportSummary,
    SizeFormat,
    TraversalFilter,
)
from gls.types.protocols import (
    FilesystemProbe,
    SizeFormatter,
)

__all__ = [
    # Type aliases
    "ReportSink",
    # Data models
    "Entry",
    "EntryStat",
    "FileKind",
    "LinkResolution",
    "ReportSummary",
    "SizeFormat",
    "TraversalFilter",
    # Protocols
    "FilesystemProbe",
    "SizeFormatter",
]
