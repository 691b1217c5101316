"""Configuration system for gls.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages. A configuration file is optional;
every field has a default and command-line flags take precedence.
"""

import hashlib
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Regular expression pattern for environment variable references
# Matches ${VARIABLE_NAME} syntax where VARIABLE_NAME can contain letters, digits, and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

# Configuration file discovery paths in order of precedence
CURRENT_DIR_CONFIG_FILES: Final[tuple[str, ...]] = (".gls.yaml", ".gls.yml")
HOME_CONFIG_FILES: Final[tuple[str, ...]] = (".gls.yaml", ".gls.yml")
SYSTEM_CONFIG_PATHS: Final[tuple[Path, ...]] = (Path("/etc/gls/config.yaml"),)


class ReportConfig(BaseModel):
    """Configuration for report content and layout.

    Defines the traversal filter and size format defaults, the digest
    algorithm used for regular files, and indentation width.
    """

    model_config: ConfigDict = ConfigDict(extra="forbid")  # pyright: ignore[reportIncompatibleVariableOverride]

    show_hidden: Annotated[
        bool,
        Field(
            description="Include entries whose names start with '.'",
        ),
    ] = False
    human_readable: Annotated[
        bool,
        Field(
            description="Render sizes with B/KB/MB/GB/TB suffixes",
        ),
    ] = False
    digest_algorithm: Annotated[
        str,
        Field(
            description="hashlib algorithm used for regular file checksums",
        ),
    ] = "md5"
    indent_width: Annotated[
        int,
        Field(
            ge=1,
            le=16,
            description="Padding characters per depth level",
        ),
    ] = 3
    default_block_size: Annotated[
        int,
        Field(
            gt=0,
            description="Read chunk size when the filesystem reports no block size",
        ),
    ] = 4096

    @field_validator("digest_algorithm", mode="after")
    @classmethod
    def validate_digest_algorithm(cls, v: str) -> str:
        """Validate the digest algorithm against hashlib.

        Args:
            v: Algorithm name

        Returns:
            Lowercased algorithm name

        Raises:
            ValueError: If hashlib does not provide a fixed-length digest for it
        """
        name = v.strip().lower()
        if name not in hashlib.algorithms_available or name.startswith("shake_"):
            available = ", ".join(sorted(a for a in hashlib.algorithms_guaranteed if not a.startswith("shake_")))
            msg = f"Unsupported digest algorithm: {v}. Available algorithms include: {available}"
            raise ValueError(msg)
        return name


class ApplicationConfig(BaseModel):
    """Configuration for application-level settings.

    Defines diagnostic logging level and syslog integration.
    """

    model_config: ConfigDict = ConfigDict(extra="forbid")  # pyright: ignore[reportIncompatibleVariableOverride]

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"
    syslog_enabled: Annotated[
        bool,
        Field(
            description="Enable syslog integration",
        ),
    ] = False


class MainConfig(BaseModel):
    """Main application configuration schema.

    Top-level configuration container aggregating all configuration sections:
    - report: Report content and layout
    - application: Application-level settings
    """

    model_config: ConfigDict = ConfigDict(extra="forbid")  # pyright: ignore[reportIncompatibleVariableOverride]

    report: Annotated[
        ReportConfig,
        Field(
            description="Report configuration",
        ),
    ] = ReportConfig()
    application: Annotated[
        ApplicationConfig,
        Field(
            description="Application-level configuration",
        ),
    ] = ApplicationConfig()


class EnvironmentVariableError(Exception):
    """Exception raised when environment variable resolution fails."""


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string value.

    Parses ${VARIABLE_NAME} syntax and replaces with environment variable values.
    Supports multiple environment variable references in a single string.

    Args:
        value: String potentially containing environment variable references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a required environment variable is missing

    Examples:
        >>> os.environ["GLS_ALGO"] = "sha256"
        >>> resolve_env_var("${GLS_ALGO}")
        'sha256'
        >>> resolve_env_var("no variables here")
        'no variables here'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)

        if env_value is None:
            msg = (
                f"Required environment variable '{var_name}' is not set. "
                f"Please set this variable before running gls."
            )
            raise EnvironmentVariableError(msg)

        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Recursively resolve environment variables in a dictionary.

    Traverses nested dictionaries and lists, resolving environment variable
    references in string values. Non-string values are preserved as-is.

    Args:
        data: Dictionary potentially containing environment variable references

    Returns:
        New dictionary with environment variables resolved

    Raises:
        EnvironmentVariableError: If a required environment variable is missing
    """
    result: dict[str, object] = {}

    for key, value in data.items():
        if isinstance(value, str):
            result[key] = resolve_env_var(value)
        elif isinstance(value, dict):
            # YAML data is untyped at load time; validated by Pydantic after resolution
            result[key] = resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
        elif isinstance(value, list):
            resolved_list: list[object] = []
            for item in value:  # pyright: ignore[reportUnknownVariableType]  # YAML list items
                if isinstance(item, str):
                    resolved_list.append(resolve_env_var(item))
                elif isinstance(item, dict):
                    resolved_list.append(resolve_env_vars_in_dict(item))  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
                else:
                    resolved_list.append(item)  # pyright: ignore[reportUnknownArgumentType]  # YAML primitives
            result[key] = resolved_list
        else:
            result[key] = value

    return result


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails.

    This exception provides detailed, actionable error messages for configuration
    issues including file not found, YAML parsing errors, and validation failures.
    """


def discover_config_file() -> Path | None:
    """Discover a configuration file in standard locations.

    Searches in the following order of precedence:
    1. Current directory (.gls.yaml, .gls.yml)
    2. User home directory (~/.gls.yaml, ~/.gls.yml)
    3. System directory (/etc/gls/config.yaml)

    Returns:
        Path to the first configuration file found, or None
    """
    for config_file in CURRENT_DIR_CONFIG_FILES:
        config_path = Path(config_file)
        if config_path.is_file():
            return config_path

    try:
        home_dir = Path.home()
    except (OSError, RuntimeError):
        # Path.home() can fail in some environments
        home_dir = None

    if home_dir is not None:
        for config_file in HOME_CONFIG_FILES:
            config_path = home_dir / config_file
            if config_path.is_file():
                return config_path

    for config_path in SYSTEM_CONFIG_PATHS:
        if config_path.is_file():
            return config_path

    return None


def load_main_config(config_path: Path) -> MainConfig:
    """Load and validate application configuration from a YAML file.

    Loads the configuration file, resolves environment variables, and
    validates against the MainConfig schema. An empty file yields defaults.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated MainConfig instance

    Raises:
        ConfigurationError: If configuration file cannot be loaded or is invalid

    Examples:
        >>> config = load_main_config(Path(".gls.yaml"))
        >>> print(config.report.digest_algorithm)
        md5
    """
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}\nPlease check the path passed to --config."
        raise ConfigurationError(msg)

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    if raw_data is None:
        return MainConfig()

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        msg = (
            f"Environment variable resolution failed in: {config_path}\n"
            f"{e}\n"
            f"Set the required environment variable before running gls."
        )
        raise ConfigurationError(msg) from e

    try:
        config = MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        # Format validation errors with field-level diagnostics
        error_lines = ["Configuration validation failed:", ""]
        for error in e.errors():
            field_path = " → ".join(str(loc) for loc in error["loc"])
            error_lines.append(f"  Field: {field_path}")
            error_lines.append(f"  Error: {error['msg']}")
            error_lines.append(f"  Type: {error['type']}")
            error_lines.append("")

        error_lines.append(f"Configuration file: {config_path}")
        error_lines.append("Please fix the above errors and try again.")

        msg = "\n".join(error_lines)
        raise ConfigurationError(msg) from e

    return config
