"""Configuration exceptions: config files, settings values."""

from pathlib import Path
from typing import Any

from .base import DiffInsightError


class ConfigurationError(DiffInsightError):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(ConfigurationError):
    """Raised when a TOML config file is missing, unreadable or malformed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Config file error: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when a setting has a value the analysis cannot use.

    ``key`` is the setting name, or the environment variable it came from.
    """

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for {key}: {value!r}",
            details={"key": key, "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
