"""Pure formatting utilities for byte counts in the report.

This module provides the two interchangeable size rendering strategies. Both
are stateless functions; the strategy is chosen once per run through
get_size_formatter().
"""

from typing import Final

from gls.types.models import SizeFormat
from gls.types.protocols import SizeFormatter

# Decimal scaling (1000-based), not binary
_SCALE: Final[int] = 1000
_SIZE_SUFFIXES: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB")


def format_raw(num_bytes: int) -> str:
    """Render the exact byte count as decimal digits, no suffix.

    Args:
        num_bytes: Number of bytes to format (must be non-negative)

    Returns:
        Decimal string representation

    Examples:
        >>> format_raw(1234)
        '1234'
        >>> format_raw(0)
        '0'
    """
    if num_bytes < 0:
        msg = "num_bytes must be non-negative"
        raise ValueError(msg)

    return str(num_bytes)


def format_human(num_bytes: int) -> str:
    """Convert bytes to a scaled human-readable size.

    Repeatedly divides by 1000, remembering the remainder of the last
    division, until the quotient is below 1000 or the largest suffix is
    reached. The tenths digit is shown only when that remainder is at
    least 100.

    Args:
        num_bytes: Number of bytes to format (must be non-negative)

    Returns:
        Compact size string such as "999B", "1KB" or "1.1KB"

    Examples:
        >>> format_human(999)
        '999B'
        >>> format_human(1000)
        '1KB'
        >>> format_human(1144)
        '1.1KB'
        >>> format_human(1999888)
        '1.9MB'

    Note:
        Tenths are truncated, not rounded (1999888 is "1.9MB", not "2.0MB").
    """
    if num_bytes < 0:
        msg = "num_bytes must be non-negative"
        raise ValueError(msg)

    size_index = 0
    remainder = 0
    while num_bytes >= _SCALE and size_index < len(_SIZE_SUFFIXES) - 1:
        num_bytes, remainder = divmod(num_bytes, _SCALE)
        size_index += 1

    suffix = _SIZE_SUFFIXES[size_index]
    if remainder < 100:
        return f"{num_bytes}{suffix}"
    return f"{num_bytes}.{remainder // 100}{suffix}"


_FORMATTERS: Final[dict[SizeFormat, SizeFormatter]] = {
    SizeFormat.RAW: format_raw,
    SizeFormat.HUMAN: format_human,
}


def get_size_formatter(size_format: SizeFormat) -> SizeFormatter:
    """Return the formatting strategy for a SizeFormat.

    Args:
        size_format: Selected rendering strategy

    Returns:
        Callable mapping a byte count to its string rendering
    """
    return _FORMATTERS[size_format]
