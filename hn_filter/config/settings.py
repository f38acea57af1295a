"""Configuration settings for the hn-filter workflow."""

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

from hn_filter.engines.post_record import FilterCriteria


DEFAULT_SHEET_NAME = "ycombinator"


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class Settings:
    """Configuration settings for the hn-filter workflow.

    Attributes:
        sheet_path: CSV/XLSX export, or directory of exports, to read
        sheet_name: Worksheet or export name within sheet_path
        min_comments: Default minimum comment count
        min_score: Default minimum score
        title_display_limit: Characters shown before a title is truncated
        open_delay_seconds: Pause between opening consecutive links
        run_log_dir: Directory for JSON run logs; empty disables them
    """

    sheet_path: str = f"{DEFAULT_SHEET_NAME}.csv"
    sheet_name: str = DEFAULT_SHEET_NAME
    min_comments: int = 100
    min_score: int = 0
    title_display_limit: int = 80
    open_delay_seconds: float = 0.25
    run_log_dir: str = ""

    def criteria(self) -> FilterCriteria:
        """Return the default filter criteria for this configuration."""
        return FilterCriteria(min_comments=self.min_comments, min_score=self.min_score)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid.
        """
        errors: list[str] = []

        if not self.sheet_path:
            errors.append("sheet_path must not be empty")

        if self.min_comments < 0:
            errors.append("min_comments must be non-negative")

        if self.min_score < 0:
            errors.append("min_score must be non-negative")

        if self.title_display_limit < 1:
            errors.append("title_display_limit must be at least 1")

        if self.open_delay_seconds < 0.0:
            errors.append("open_delay_seconds must be non-negative")

        if errors:
            raise ConfigurationError("; ".join(errors))


def _parse_float(value: str | None, default: float) -> float:
    """Parse a string to float, returning default if None or invalid."""
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_int(value: str | None, default: int) -> int:
    """Parse a string to int, returning default if None or invalid."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def load_settings(env_path: str | Path | None = None, validate: bool = True) -> Settings:
    """Load settings from environment variables and .env file.

    Args:
        env_path: Optional path to .env file. If None, searches for .env
                  in current directory and parent directories.
        validate: If True, validate settings after loading.

    Returns:
        Settings instance with loaded configuration.

    Raises:
        ConfigurationError: If validate=True and configuration is invalid.
    """
    if env_path:
        load_dotenv(env_path)
    else:
        load_dotenv()

    settings = Settings(
        sheet_path=os.getenv("SHEET_PATH", f"{DEFAULT_SHEET_NAME}.csv"),
        sheet_name=os.getenv("SHEET_NAME", DEFAULT_SHEET_NAME),
        min_comments=_parse_int(os.getenv("MIN_COMMENTS"), 100),
        min_score=_parse_int(os.getenv("MIN_SCORE"), 0),
        title_display_limit=_parse_int(os.getenv("TITLE_DISPLAY_LIMIT"), 80),
        open_delay_seconds=_parse_float(os.getenv("OPEN_DELAY_SECONDS"), 0.25),
        run_log_dir=os.getenv("RUN_LOG_DIR", ""),
    )

    if validate:
        settings.validate()

    return settings
