"""Application module for gls."""

from __future__ import annotations

from gls.app.cli import cli
from gls.app.runner import ReportRunner, RunContext

__all__ = [
    "cli",
    "ReportRunner",
    "RunContext",
]
