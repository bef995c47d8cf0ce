"""Repository-level metrics rolled up from the file change records."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..analysis.models import ISSUE_CATEGORIES, StaticAnalysis
from ..config import ThresholdConfig
from .models import ComplexityRollup, CoverageRollup, FileChangeRecord, MetricsRollup

TEST_PATH_MARKERS = ("test", "spec")


def is_test_path(path: str) -> bool:
    return any(marker in path for marker in TEST_PATH_MARKERS)


def _analysis(record: FileChangeRecord) -> Optional[StaticAnalysis]:
    analysis = getattr(record, "static_analysis", None)
    return analysis if isinstance(analysis, StaticAnalysis) else None


def calculate_rollup(
    files: Sequence[FileChangeRecord], thresholds: Optional[ThresholdConfig] = None
) -> MetricsRollup:
    """Sum complexity and issues across records and split test from source files.

    The average divides by every record, including those without an
    analysis (deleted, renamed, degraded), which contribute 0.
    """
    thresholds = thresholds or ThresholdConfig()
    analyses = [_analysis(r) for r in files]

    cyclomatic = np.array(
        [a.complexity.cyclomatic if a is not None else 0 for a in analyses], dtype=float
    )
    complexity = ComplexityRollup(
        total=int(cyclomatic.sum()),
        average=float(cyclomatic.mean()) if cyclomatic.size else 0.0,
        high=int(np.count_nonzero(cyclomatic > thresholds.high_complexity)),
    )

    issues = {category: 0 for category in ISSUE_CATEGORIES}
    for analysis in analyses:
        if analysis is None:
            continue
        for category, count in analysis.issues.counts().items():
            issues[category] += count

    test_files = sum(1 for r in files if is_test_path(r.path))
    coverage = CoverageRollup(
        test_files=test_files,
        source_files=len(files) - test_files,
        has_tests=test_files > 0,
    )

    return MetricsRollup(complexity=complexity, issues=issues, coverage=coverage)
