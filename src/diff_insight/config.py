"""Configuration loading and management for diff-insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.diff-insight.toml)
    3. Project config (./diff-insight.toml)
    4. Explicit config file
    5. Environment variables (DIFF_INSIGHT_* prefix)
    6. Keyword overrides (typically CLI flags)

The resulting AnalysisConfig is passed explicitly into ChangeAnalyzer; nothing
in the engine reads configuration from module-level state.

Example:
    >>> config = load_config(max_workers=8)
    >>> config.max_workers
    8
    >>> config.thresholds.size_warning_files
    100
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Literal, Optional

from .exceptions import ConfigFileError, ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_METHOD_EXCLUDE_KEYWORDS: tuple[str, ...] = (
    "function",
    "if",
    "for",
    "while",
    "switch",
    "catch",
)


@dataclass(frozen=True)
class ThresholdConfig:
    """Heuristic thresholds used by insights, issue rules and commit patterns.

    Attributes:
        size_warning_files: More changed files than this triggers a size warning
        refactor_deletion_ratio: deletions > ratio × insertions signals a refactor
        high_complexity: Cyclomatic complexity above this counts as "high"
        conventional_commit_ratio: Share of typed commits for the convention pattern
        ticket_reference_ratio: Share of commits citing tickets for that pattern
        long_line_length: Lines longer than this are a style issue
        large_file_lines: Files longer than this are a maintenance issue
    """

    size_warning_files: int = 100
    refactor_deletion_ratio: float = 2.0
    high_complexity: int = 10
    conventional_commit_ratio: float = 0.7
    ticket_reference_ratio: float = 0.5
    long_line_length: int = 120
    large_file_lines: int = 500

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for field_name in ("conventional_commit_ratio", "ticket_reference_ratio"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name} must be between 0.0 and 1.0")

        for field_name in (
            "size_warning_files",
            "high_complexity",
            "long_line_length",
            "large_file_lines",
        ):
            if getattr(self, field_name) < 1:
                raise ValueError(f"{field_name} must be at least 1")

        if self.refactor_deletion_ratio <= 0:
            raise ValueError("refactor_deletion_ratio must be positive")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a branch diff analysis.

    Attributes:
        max_workers: Upper bound of the per-file worker pool
        commit_log_limit: Commits read per ref when computing unique commits
        git_timeout_seconds: Timeout applied to every git subprocess
        method_exclude_keywords: Names the method pattern must never report
            as functions (control-flow keywords followed by ``(...) {``)
        verbosity: Logging verbosity level
        thresholds: Heuristic thresholds (nested config)
    """

    max_workers: int = 4
    commit_log_limit: int = 500
    git_timeout_seconds: int = 30
    method_exclude_keywords: tuple[str, ...] = DEFAULT_METHOD_EXCLUDE_KEYWORDS
    verbosity: Verbosity = "normal"
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.commit_log_limit < 1:
            raise ValueError("commit_log_limit must be at least 1")
        if self.git_timeout_seconds < 1:
            raise ValueError("git_timeout_seconds must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet, normal or verbose, got {self.verbosity!r}")
        # TOML hands arrays over as lists; keep the frozen config hashable.
        if not isinstance(self.method_exclude_keywords, tuple):
            object.__setattr__(self, "method_exclude_keywords", tuple(self.method_exclude_keywords))


def _split_names(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


ENV_PREFIX = "DIFF_INSIGHT_"

# Settings that may come from the environment, with their parsers.
# Thresholds are only configurable from TOML.
ENV_PARSERS: dict[str, Callable[[str], Any]] = {
    "max_workers": int,
    "commit_log_limit": int,
    "git_timeout_seconds": int,
    "method_exclude_keywords": _split_names,
    "verbosity": str,
}


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    ``verbose=True`` and ``quiet=True`` are accepted as overrides and folded
    into ``verbosity``; ``verbose`` wins when both are set. Overrides whose
    value is None are ignored so CLI options can be passed through as-is.

    Raises:
        ConfigFileError: If a config file is missing or malformed
        ConfigurationError: If a value fails validation
        InvalidConfigError: If an environment variable cannot be parsed
    """
    if config_file is not None and not config_file.exists():
        raise ConfigFileError(config_file, "not found")

    merged: dict[str, Any] = {}
    for path in _config_files(config_file):
        merged.update(_load_toml_file(path))
    merged.update(_load_env_vars())
    merged.update(_cli_overrides(overrides))

    if "thresholds" in merged:
        merged["thresholds"] = _build_thresholds(merged["thresholds"])

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _config_files(explicit: Optional[Path]) -> list[Path]:
    """TOML files to merge, lowest priority first."""
    discovered = [Path.home() / ".diff-insight.toml", Path.cwd() / "diff-insight.toml"]
    files = [path for path in discovered if path.exists()]
    if explicit is not None:
        files.append(explicit)
    return files


def _cli_overrides(overrides: dict[str, Any]) -> dict[str, Any]:
    result = {key: value for key, value in overrides.items() if value is not None}
    verbose = result.pop("verbose", False)
    quiet = result.pop("quiet", False)
    if verbose:
        result["verbosity"] = "verbose"
    elif quiet:
        result["verbosity"] = "quiet"
    return result


def _build_thresholds(value: Any) -> ThresholdConfig:
    if isinstance(value, ThresholdConfig):
        return value
    if not isinstance(value, dict):
        raise InvalidConfigError("thresholds", value, "expected a table")
    try:
        return ThresholdConfig(**value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [thresholds] config: {e}") from e


def _load_env_vars() -> dict[str, Any]:
    """Read ``DIFF_INSIGHT_<SETTING>`` variables, e.g. ``DIFF_INSIGHT_MAX_WORKERS=8``.

    ``DIFF_INSIGHT_METHOD_EXCLUDE_KEYWORDS`` takes comma-separated names.
    """
    result: dict[str, Any] = {}
    for name, parse in ENV_PARSERS.items():
        env_key = ENV_PREFIX + name.upper()
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            result[name] = parse(raw)
        except ValueError as e:
            raise InvalidConfigError(env_key, raw, str(e)) from e
    return result


def _load_toml_file(path: Path) -> dict:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e)) from e
