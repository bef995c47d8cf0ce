"""Result models for a branch diff analysis.

FileChangeRecord is a tagged variant: one frozen dataclass per change
status. Status-specific fields live only on the variant that can carry them,
so a renamed record cannot hold a functional change set. Impact is a
property recomputed from the record, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Literal, Optional, Union

from ..analysis.models import StaticAnalysisOutcome
from ..scanning.models import FileSnapshotAnalysis

ImpactLevel = Literal["low", "medium", "high"]
InsightKind = Literal["warning", "info", "attention"]


class ChangeStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class Impact:
    score: int
    level: ImpactLevel


@dataclass(frozen=True)
class PurposeChange:
    from_purposes: tuple[str, ...]
    to_purposes: tuple[str, ...]


@dataclass(frozen=True)
class FunctionalChangeSet:
    """Name-level structural delta between two snapshots of one file.

    Functions are matched by name only; a changed signature is not a change.
    """

    added_functions: tuple[str, ...] = ()
    removed_functions: tuple[str, ...] = ()
    added_classes: tuple[str, ...] = ()
    removed_classes: tuple[str, ...] = ()
    added_dependencies: tuple[str, ...] = ()
    removed_dependencies: tuple[str, ...] = ()
    complexity_delta: int = 0
    purpose_change: Optional[PurposeChange] = None

    @property
    def is_empty(self) -> bool:
        return not (
            self.added_functions
            or self.removed_functions
            or self.added_classes
            or self.removed_classes
            or self.added_dependencies
            or self.removed_dependencies
            or self.complexity_delta
            or self.purpose_change
        )


@dataclass(frozen=True)
class LineDelta:
    lines_added: int = 0
    lines_removed: int = 0
    size_change: int = 0


# ── File change records ──────────────────────────────────────────


@dataclass(frozen=True)
class _FileChange:
    path: str
    language: str = "unknown"
    additions: int = 0
    deletions: int = 0
    diff: str = ""

    status: ClassVar[ChangeStatus]

    @property
    def impact(self) -> Impact:
        from .impact import calculate_impact

        return calculate_impact(self)


@dataclass(frozen=True)
class AddedFile(_FileChange):
    status: ClassVar[ChangeStatus] = ChangeStatus.ADDED

    snapshot: Optional[FileSnapshotAnalysis] = None
    static_analysis: Optional[StaticAnalysisOutcome] = None


@dataclass(frozen=True)
class ModifiedFile(_FileChange):
    status: ClassVar[ChangeStatus] = ChangeStatus.MODIFIED

    snapshot: Optional[FileSnapshotAnalysis] = None
    static_analysis: Optional[StaticAnalysisOutcome] = None
    functional_changes: Optional[FunctionalChangeSet] = None
    line_delta: Optional[LineDelta] = None


@dataclass(frozen=True)
class DeletedFile(_FileChange):
    status: ClassVar[ChangeStatus] = ChangeStatus.DELETED

    snapshot: Optional[FileSnapshotAnalysis] = None


@dataclass(frozen=True)
class RenamedFile(_FileChange):
    status: ClassVar[ChangeStatus] = ChangeStatus.RENAMED

    old_path: Optional[str] = None


FileChangeRecord = Union[AddedFile, ModifiedFile, DeletedFile, RenamedFile]

RECORD_TYPES: dict[ChangeStatus, type] = {
    ChangeStatus.ADDED: AddedFile,
    ChangeStatus.MODIFIED: ModifiedFile,
    ChangeStatus.DELETED: DeletedFile,
    ChangeStatus.RENAMED: RenamedFile,
}


# ── Commits ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class CommitRecord:
    hash: str
    abbrev_hash: str
    author: str
    date: str
    message: str
    commit_type: str


@dataclass(frozen=True)
class AuthorStats:
    count: int = 0
    commits: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommitPattern:
    """A repository-level habit detected across the commit list.

    ``ratio`` is the share of commits that exhibit it.
    """

    kind: str
    confidence: str
    description: str
    ratio: float = 0.0


@dataclass(frozen=True)
class CommitAggregation:
    total: int = 0
    by_author: dict[str, AuthorStats] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)
    timeline: tuple[CommitRecord, ...] = ()
    patterns: tuple[CommitPattern, ...] = ()


# ── Insights and metrics ─────────────────────────────────────────


@dataclass(frozen=True)
class Insight:
    kind: InsightKind
    category: str
    message: str
    detail: str = ""
    paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class ComplexityRollup:
    total: int = 0
    average: float = 0.0
    high: int = 0


@dataclass(frozen=True)
class CoverageRollup:
    test_files: int = 0
    source_files: int = 0
    has_tests: bool = False


@dataclass(frozen=True)
class MetricsRollup:
    complexity: ComplexityRollup = field(default_factory=ComplexityRollup)
    issues: dict[str, int] = field(default_factory=dict)
    coverage: CoverageRollup = field(default_factory=CoverageRollup)


@dataclass(frozen=True)
class AnalysisSummary:
    source_ref: str
    target_ref: str
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0
    commits: int = 0
    analyzed_at: str = ""
    filters: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one ``analyze_branch_diff`` call produces.

    ``files`` keeps the revision source's diff order.
    """

    summary: AnalysisSummary
    files: tuple[FileChangeRecord, ...] = ()
    commits: CommitAggregation = field(default_factory=CommitAggregation)
    insights: tuple[Insight, ...] = ()
    metrics: MetricsRollup = field(default_factory=MetricsRollup)
