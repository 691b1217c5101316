"""Logging infrastructure with optional syslog integration and run ID tracking.

This module configures diagnostic logging for gls. Diagnostics always go to
stderr (or syslog) so they never interleave with the report written to
stdout. Each report run is tagged with a run ID stored in a ContextVar and
injected into every record by RunIdFilter.
"""

import contextvars
import logging
import logging.handlers
import sys
import uuid
from typing import Final, override

# Run ID context variable for tagging every log record of one report run
run_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id",
    default=None,
)

# Log format constants
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(run_id)s] - %(message)s"

SYSLOG_LOG_FORMAT: Final[str] = "gls[%(process)d]: %(levelname)s - [%(run_id)s] - %(name)s - %(message)s"

DEFAULT_SYSLOG_ADDRESS: Final[str] = "/dev/log"


class RunIdFilter(logging.Filter):
    """Logging filter that adds the current run ID to log records.

    Records emitted outside a run are tagged "N/A".
    """

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add run ID to log record from ContextVar.

        Args:
            record: Log record to enhance with run ID

        Returns:
            True to allow the record to be logged
        """
        run_id = run_id_var.get()
        record.run_id = run_id if run_id is not None else "N/A"
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    enable_syslog: bool = False,
    syslog_address: str = DEFAULT_SYSLOG_ADDRESS,
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Sets up logging infrastructure with:
    - Run ID tracking via ContextVar
    - Optional syslog integration
    - Console output on stderr

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_syslog: Enable syslog handler
        syslog_address: Syslog socket address
        enable_console: Enable stderr console handler

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> logger = logging.getLogger(__name__)
        >>> logger.debug("Listing directory", extra={"path": "/tmp"})
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    run_id_filter = RunIdFilter()

    if enable_syslog:
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address=syslog_address,
                facility=logging.handlers.SysLogHandler.LOG_USER,
            )
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_LOG_FORMAT))
            syslog_handler.addFilter(run_id_filter)
            root_logger.addHandler(syslog_handler)

        except OSError as exc:
            # Syslog not available; fall back to console only
            print(
                f"Warning: Could not connect to syslog at {syslog_address}: {exc}",
                file=sys.stderr,
            )

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(run_id_filter)
        root_logger.addHandler(console_handler)


def generate_run_id() -> str:
    """Return a fresh short run identifier."""
    return uuid.uuid4().hex[:12]


def set_run_id(run_id: str) -> contextvars.Token[str | None]:
    """Set the run ID for the current context.

    Args:
        run_id: Unique identifier for the report run

    Returns:
        Token that can be passed to reset_run_id() to restore the previous value
    """
    return run_id_var.set(run_id)


def get_run_id() -> str | None:
    """Get the current run ID, or None outside a run."""
    return run_id_var.get()


def reset_run_id(token: contextvars.Token[str | None]) -> None:
    """Restore the run ID that was active before set_run_id()."""
    run_id_var.reset(token)
