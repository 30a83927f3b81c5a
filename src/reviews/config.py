"""
Review Analysis Configuration
=============================

Environment-driven settings. Supports both .env files and system
environment variables.

Environment Variables:
    REVIEW_KEYWORD_COUNT: Keywords stored per review (default: 5)
    REVIEW_LEXICON_PATH: JSON file overriding the default word lists (optional)

    LOG_LEVEL: Root log level (default: INFO)
    LOG_JSON: Emit JSON log lines (default: false)
    LOG_FILE: Rotating log file path (optional)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .review_lexicons import DEFAULT_LEXICONS, ReviewLexicons, load_lexicons


# Load environment variables from .env file if present
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Get environment variable with optional default and required validation.

    Raises:
        ValueError: If required=True and variable is not set
    """
    value = os.getenv(key, default)
    if required and value is None:
        raise ValueError(f"Required environment variable '{key}' is not set")
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got: {value}")


def get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AnalysisConfig:
    """Review analysis and logging configuration."""

    keyword_count: int = field(default_factory=lambda: get_env_int("REVIEW_KEYWORD_COUNT", 5))
    lexicon_path: Optional[str] = field(default_factory=lambda: get_env("REVIEW_LEXICON_PATH"))

    log_level: str = field(default_factory=lambda: get_env("LOG_LEVEL", "INFO"))
    log_json: bool = field(default_factory=lambda: get_env_bool("LOG_JSON", False))
    log_file: Optional[str] = field(default_factory=lambda: get_env("LOG_FILE"))

    def __post_init__(self):
        """Validate configuration."""
        if self.keyword_count <= 0:
            raise ValueError("keyword_count must be positive")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got: {self.log_level}")

    def lexicons(self) -> ReviewLexicons:
        """Default lexicons, overlaid with lexicon_path when set."""
        if not self.lexicon_path:
            return DEFAULT_LEXICONS
        return load_lexicons(self.lexicon_path)


def load_config() -> AnalysisConfig:
    """Build configuration from the current environment."""
    return AnalysisConfig()
