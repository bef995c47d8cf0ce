"""Change analysis: per-file records, commit aggregation, insights, rollup."""

from .analyzer import ChangeAnalyzer, build_filters
from .commits import aggregate_commits, classify_commit, unique_commits
from .functional import compute_functional_changes, compute_line_delta
from .impact import calculate_impact
from .insights import detect_hotspots, generate_insights
from .models import (
    AddedFile,
    AnalysisResult,
    AnalysisSummary,
    AuthorStats,
    ChangeStatus,
    CommitAggregation,
    CommitPattern,
    CommitRecord,
    ComplexityRollup,
    CoverageRollup,
    DeletedFile,
    FileChangeRecord,
    FunctionalChangeSet,
    Impact,
    Insight,
    LineDelta,
    MetricsRollup,
    ModifiedFile,
    PurposeChange,
    RenamedFile,
)
from .rollup import calculate_rollup

__all__ = [
    "ChangeAnalyzer",
    "build_filters",
    "aggregate_commits",
    "classify_commit",
    "unique_commits",
    "compute_functional_changes",
    "compute_line_delta",
    "calculate_impact",
    "detect_hotspots",
    "generate_insights",
    "calculate_rollup",
    "AddedFile",
    "ModifiedFile",
    "DeletedFile",
    "RenamedFile",
    "FileChangeRecord",
    "ChangeStatus",
    "Impact",
    "FunctionalChangeSet",
    "PurposeChange",
    "LineDelta",
    "CommitRecord",
    "AuthorStats",
    "CommitPattern",
    "CommitAggregation",
    "Insight",
    "ComplexityRollup",
    "CoverageRollup",
    "MetricsRollup",
    "AnalysisSummary",
    "AnalysisResult",
]
