"""Command-line interface for gls."""

from __future__ import annotations

import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Final

import click

from gls.app.runner import ReportRunner, RunContext
from gls.core.config import (
    ConfigurationError,
    MainConfig,
    ReportConfig,
    discover_config_file,
    load_main_config,
)
from gls.core.errors import RootPathError
from gls.utils.logging import configure_logging

# Exit codes
EXIT_CONFIG_ERROR: Final[int] = 1
EXIT_ROOT_ERROR: Final[int] = 3

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Log level value to validate

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )

    return normalized_value


def build_config(
    config_path: Path | None,
    *,
    show_all: bool,
    human_readable: bool,
    digest: str | None,
    log_level: str | None,
) -> MainConfig:
    """Merge the configuration file with command-line overrides.

    Flags can only switch features on; an absent flag leaves the file
    value in place.

    Args:
        config_path: Explicit --config path, or None to discover one
        show_all: -a was given
        human_readable: -h was given
        digest: --digest override
        log_level: --log-level override

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file or an override is invalid
    """
    path = config_path if config_path is not None else discover_config_file()
    config = load_main_config(path) if path is not None else MainConfig()

    report_data = config.report.model_dump()
    if show_all:
        report_data["show_hidden"] = True
    if human_readable:
        report_data["human_readable"] = True
    if digest is not None:
        report_data["digest_algorithm"] = digest

    application = config.application
    if log_level is not None:
        application = application.model_copy(update={"log_level": log_level})

    try:
        report = ReportConfig.model_validate(report_data)
    except ValueError as exc:
        msg = f"Invalid command-line option:\n{exc}"
        raise ConfigurationError(msg) from exc

    return MainConfig(report=report, application=application)


def echo_line(line: str) -> None:
    """Write one report line to stdout as filesystem bytes.

    Names that are not valid in the locale encoding carry surrogate escapes;
    os.fsencode() restores their original bytes instead of failing.

    Args:
        line: Rendered report line without a trailing newline
    """
    click.echo(os.fsencode(line))


try:
    __version__ = version("gls-tree")
except PackageNotFoundError:
    __version__ = "unknown"


@click.command(context_settings={"help_option_names": ["--help"]})
@click.argument(
    "directory",
    required=False,
    default=".",
    type=click.Path(path_type=Path),
)
@click.option(
    "--all", "-a", "show_all",
    is_flag=True,
    help="Show hidden files and directories",
)
@click.option(
    "--human-readable", "-h", "human_readable",
    is_flag=True,
    help="Display sizes in human readable format (i.e. KB, MB, GB)",
)
@click.option(
    "--config", "-c",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Configuration file path. If not specified, searches ./.gls.yaml, ~/.gls.yaml and /etc/gls/config.yaml.",
)
@click.option(
    "--log-level", "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Diagnostic logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.option(
    "--digest",
    type=str,
    default=None,
    metavar="ALGORITHM",
    help="Checksum algorithm for regular files (default: md5)",
)
@click.version_option(version=__version__, prog_name="gls")
@click.pass_context
def cli(
    ctx: click.Context,
    directory: Path,
    show_all: bool,
    human_readable: bool,
    config: Path | None,
    log_level: str | None,
    digest: str | None,
) -> None:
    """Graphical ls - show a tree of every entry below DIRECTORY.

    Each entry is reported with its name, type and size. Regular files also
    get a checksum; symbolic links show where they point and the absolute
    path of that location. Directory sizes include hidden entries. When no
    DIRECTORY is given the current directory is used.

    Examples:

        # Report on the current directory
        gls

        # Include hidden entries with human readable sizes
        gls -ah /var/log

        # Use SHA-256 checksums
        gls --digest sha256 ~/projects
    """
    try:
        main_config = build_config(
            config,
            show_all=show_all,
            human_readable=human_readable,
            digest=digest,
            log_level=log_level,
        )
    except ConfigurationError as exc:
        click.echo(f"Configuration error:\n{exc}", err=True)
        ctx.exit(EXIT_CONFIG_ERROR)

    configure_logging(
        log_level=main_config.application.log_level,
        enable_syslog=main_config.application.syslog_enabled,
        enable_console=True,
    )

    runner = ReportRunner(
        root=directory,
        context=RunContext.from_config(main_config.report),
        sink=echo_line,
    )

    try:
        _ = runner.run()
    except RootPathError as exc:
        click.echo(os.fsencode(f"gls: {exc.message}"), err=True)
        ctx.exit(EXIT_ROOT_ERROR)


if __name__ == "__main__":
    cli()
