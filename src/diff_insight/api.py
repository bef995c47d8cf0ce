"""Public API for diff-insight.

Example:
    >>> from diff_insight import analyze_branch_diff
    >>>
    >>> result = analyze_branch_diff("feature/login", "main")
    >>> result.summary.files_changed
    12
    >>>
    >>> # Narrowed to one author's commits, skipping lockfiles
    >>> result = analyze_branch_diff(
    ...     "feature/login", "main", author="alice", exclude="*.lock"
    ... )
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .changes import AnalysisResult, ChangeAnalyzer, build_filters
from .config import AnalysisConfig, load_config
from .logging_config import get_logger
from .revision import GitRevisionSource

logger = get_logger(__name__)


def analyze_branch_diff(
    source_ref: str,
    target_ref: str,
    repo_path: str = ".",
    config: Optional[AnalysisConfig] = None,
    config_file: Optional[Path] = None,
    **filters,
) -> AnalysisResult:
    """Analyze what ``source_ref`` changes relative to ``target_ref``.

    Args:
        source_ref: Branch or commit being reviewed
        target_ref: Branch or commit it would merge into
        repo_path: Path inside the git repository
        config: Ready-made configuration; loaded from files/env when omitted
        config_file: Explicit TOML file, used only when ``config`` is omitted
        **filters: commit, from_commit, to_commit, since, until, author,
            file, files, exclude

    Returns:
        AnalysisResult for the whole diff

    Raises:
        RepositoryAccessError: If a ref cannot be resolved or git fails
        ConfigurationError: If configuration is invalid
    """
    if config is None:
        config = load_config(config_file)

    source = GitRevisionSource(repo_path, timeout=config.git_timeout_seconds)
    logger.debug("Using repository at %s", source.repo_path)

    analyzer = ChangeAnalyzer(source, config)
    return analyzer.analyze_branch_diff(source_ref, target_ref, build_filters(**filters))
