"""Shared utility modules for common operations.

This package provides:
- Byte count formatting (raw and human-readable strategies)
- Logging configuration with per-run identifiers

All formatting utilities are pure and have no side effects.
"""

from gls.utils.formatting import (
    format_human,
    format_raw,
    get_size_formatter,
)

__all__ = [
    # Formatting utilities
    "format_human",
    "format_raw",
    "get_size_formatter",
]
