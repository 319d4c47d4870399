"""Configuration models for the SVG sprite sheet builder.

Defines Pydantic models for application configuration including the build
inputs and outputs, watch mode timing, and logging options.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from svg_sheet.constants import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_INPUT_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_POLL_INTERVAL_MS,
    MIN_DEBOUNCE_MS,
    QUIET_LOG_LEVEL,
    VERBOSE_LOG_LEVEL,
)


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Internal utility function to avoid circular imports with path_resolver.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


class BuildConfig(BaseModel):
    """Sprite build configuration."""

    directory: str = DEFAULT_INPUT_DIR
    file: str = DEFAULT_OUTPUT_FILE
    dry_run: bool = False  # Validate everything but write nothing
    fail_on_warn: bool = False  # Turn warnings into an error after writing


class WatchConfig(BaseModel):
    """Watch mode configuration."""

    poll: bool = False  # Re-scan the directory instead of using file system events
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    @field_validator("debounce_ms")
    @classmethod
    def validate_debounce_ms(cls, v: int) -> int:
        """Clamp the debounce interval to its minimum.

        Args:
            v: The debounce interval in milliseconds.

        Returns:
            The interval, raised to the minimum when smaller.
        """
        return max(v, MIN_DEBOUNCE_MS)

    @field_validator("poll_interval_ms")
    @classmethod
    def validate_poll_interval(cls, v: int) -> int:
        """Validate the polling interval is positive.

        Args:
            v: The polling interval in milliseconds.

        Returns:
            The validated polling interval.

        Raises:
            ValueError: If the interval is less than 1 millisecond.
        """
        if v < 1:
            raise ValueError("Poll interval must be at least 1 millisecond")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str | None = None  # When None, derived from quiet/verbose
    file: str | None = None
    format: str = "text"  # "json" or "text"
    max_size_mb: int = 5
    backup_count: int = 3
    quiet: bool = False
    verbose: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str | None) -> str | None:
        """Validate the log level name.

        Args:
            v: The log level name, or None.

        Returns:
            The upper-cased level name, or None.

        Raises:
            ValueError: If the level is not a known logging level.
        """
        if v is None:
            return v
        valid_levels = ["ERROR", "WARNING", "WARN", "INFO", "DEBUG", "TRACE"]
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return level

    @property
    def effective_level(self) -> str:
        """Resolve the level used when none is configured explicitly.

        Returns:
            The configured level, or one derived from the quiet and verbose flags.
        """
        if self.level is not None:
            return {"WARN": "WARNING", "TRACE": "DEBUG"}.get(self.level, self.level)
        if self.quiet:
            return QUIET_LOG_LEVEL
        if self.verbose:
            return VERBOSE_LOG_LEVEL
        return DEFAULT_LOG_LEVEL


class AppConfig(BaseModel):
    """Main application configuration."""

    build: BuildConfig = Field(default_factory=BuildConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file. Can be a string path
                or a Path object.

        Returns:
            An initialized AppConfig object with values from the YAML file.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        # Use direct import to avoid circular imports
        from svg_sheet.utils.file_utils import read_text

        path = _normalize_path(config_path)

        yaml_content = read_text(path)
        config_data = yaml.safe_load(yaml_content) or {}

        return cls.model_validate(config_data)
