"""Type aliases using modern PEP 695 syntax."""

from collections.abc import Callable

# Report output destination
# Receives one fully rendered report line at a time (no trailing newline)
type ReportSink = Callable[[str], None]
