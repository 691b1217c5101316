"""Report runner that coordinates the size pre-pass and the print pass."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from gls.core.checksum import ChecksumComputer
from gls.core.config import ReportConfig
from gls.core.data.filesystem.scanner import LocalFilesystem
from gls.core.data.filesystem.size_calculator import DirectorySizeComputer
from gls.core.errors import RootPathError, describe_os_error
from gls.core.walker import DEFAULT_INDENT_WIDTH, TreeWalker
from gls.types.aliases import ReportSink
from gls.types.models import ReportSummary, SizeFormat, TraversalFilter
from gls.types.protocols import FilesystemProbe, SizeFormatter
from gls.utils.formatting import get_size_formatter
from gls.utils.logging import generate_run_id, reset_run_id, set_run_id

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RunContext:
    """Strategies chosen once per run and used throughout the recursion."""

    traversal_filter: TraversalFilter
    formatter: SizeFormatter
    checksum: ChecksumComputer
    indent_width: int = DEFAULT_INDENT_WIDTH

    @classmethod
    def from_config(cls, config: ReportConfig) -> RunContext:
        """Bind a run context from report configuration.

        Args:
            config: Validated report configuration

        Returns:
            RunContext with filter, formatter and checksum resolved
        """
        return cls(
            traversal_filter=TraversalFilter.SHOW_ALL if config.show_hidden else TraversalFilter.HIDE_HIDDEN,
            formatter=get_size_formatter(SizeFormat.HUMAN if config.human_readable else SizeFormat.RAW),
            checksum=ChecksumComputer(
                algorithm=config.digest_algorithm,
                default_block_size=config.default_block_size,
            ),
            indent_width=config.indent_width,
        )


def validate_root(root: Path) -> None:
    """Check that the traversal root is an accessible directory.

    Args:
        root: Root path given by the caller

    Raises:
        RootPathError: If the root does not exist, is not a directory, or
            cannot be listed
    """
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise RootPathError(root, describe_os_error(exc)) from exc


class ReportRunner:
    """Runs one complete report: validation, size pre-pass, print pass."""

    def __init__(
        self,
        root: Path,
        context: RunContext,
        sink: ReportSink,
        probe: FilesystemProbe | None = None,
    ) -> None:
        """Initialize the report runner.

        Args:
            root: Root directory to report on
            context: Per-run strategies
            sink: Receives each report line
            probe: Filesystem capability shared by both passes
        """
        self.root: Path = root
        self.context: RunContext = context
        self.sink: ReportSink = sink
        self.probe: FilesystemProbe = probe or LocalFilesystem()

    def run(self) -> ReportSummary:
        """Run the report.

        Returns:
            Counters for the printed report

        Raises:
            RootPathError: If the root is missing or inaccessible
        """
        validate_root(self.root)

        token = set_run_id(generate_run_id())
        try:
            logger.info(
                "Starting report",
                extra={
                    "root": str(self.root),
                    "filter": self.context.traversal_filter.value,
                    "algorithm": self.context.checksum.algorithm,
                },
            )

            sizes = DirectorySizeComputer(
                probe=self.probe,
                traversal_filter=self.context.traversal_filter,
            ).compute_sizes(self.root)

            walker = TreeWalker(
                self.sink,
                traversal_filter=self.context.traversal_filter,
                formatter=self.context.formatter,
                probe=self.probe,
                checksum=self.context.checksum,
                indent_width=self.context.indent_width,
            )
            summary = walker.print_tree(self.root, sizes)
            summary.total_bytes = sizes[0] if len(sizes) else 0

            logger.info(
                "Report complete",
                extra={
                    "directories": summary.directories,
                    "entries": summary.entries,
                    "errors": summary.errors,
                    "total_bytes": summary.total_bytes,
                },
            )
            return summary
        finally:
            reset_run_id(token)
