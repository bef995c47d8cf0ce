"""
diff-insight - Branch Change Analysis

Explains what a branch changes relative to another: per-file classification
and static metrics on both sides, structural deltas, impact scores, commit
conventions and review hotspots. Everything is heuristic and text-pattern
based; nothing is parsed into a syntax tree.
"""

__version__ = "0.1.0"

from .api import analyze_branch_diff
from .changes import AnalysisResult, ChangeAnalyzer
from .config import AnalysisConfig, load_config
from .revision import DiffFilters, GitRevisionSource, RevisionSource

__all__ = [
    "analyze_branch_diff",  # Main entry point
    "ChangeAnalyzer",  # Custom revision sources
    "AnalysisResult",
    "AnalysisConfig",
    "load_config",
    "DiffFilters",
    "RevisionSource",
    "GitRevisionSource",
]
