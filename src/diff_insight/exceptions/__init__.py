"""Exception hierarchy for diff-insight."""

from .analysis import (
    AnalysisError,
    ContentUnavailableError,
    UnrecognizedLanguageError,
)
from .base import DiffInsightError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .repository import RepositoryAccessError

__all__ = [
    "DiffInsightError",
    "AnalysisError",
    "ContentUnavailableError",
    "UnrecognizedLanguageError",
    "RepositoryAccessError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
]
