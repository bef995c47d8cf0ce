"""Branch-level insights derived from the diff summary and the changed paths."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from ..config import ThresholdConfig
from ..revision.models import ChangedFile, DiffSummary
from .models import Insight

# Entry points, dependency manifests, env files and sensitive directories
CRITICAL_PATH_PATTERNS = tuple(
    re.compile(p)
    for p in (
        r"^(src/)?index\.(js|ts|jsx|tsx)$",
        r"^(src/)?main\.(js|ts|jsx|tsx)$",
        r"^(src/)?app\.(js|ts|jsx|tsx)$",
        r"package\.json$",
        r"yarn\.lock$",
        r"package-lock\.json$",
        r"\.env",
        r"config/",
        r"database/",
        r"auth",
        r"security",
        r"payment",
    )
)


def detect_hotspots(files: Sequence[ChangedFile]) -> list[str]:
    """Changed paths matching any critical-path pattern, in diff order."""
    return [
        f.path for f in files if any(p.search(f.path) for p in CRITICAL_PATH_PATTERNS)
    ]


def generate_insights(
    summary: DiffSummary,
    files: Sequence[ChangedFile],
    thresholds: Optional[ThresholdConfig] = None,
) -> list[Insight]:
    thresholds = thresholds or ThresholdConfig()
    insights: list[Insight] = []

    if summary.files_changed > thresholds.size_warning_files:
        insights.append(
            Insight(
                kind="warning",
                category="size",
                message="Large number of files changed",
                detail=(
                    f"{summary.files_changed} files modified. "
                    "Consider breaking into smaller changes."
                ),
            )
        )

    if summary.deletions > summary.insertions * thresholds.refactor_deletion_ratio:
        insights.append(
            Insight(
                kind="info",
                category="refactoring",
                message="Significant code reduction",
                detail=(
                    f"Removed {summary.deletions} lines while adding {summary.insertions}."
                ),
            )
        )

    hotspots = detect_hotspots(files)
    if hotspots:
        insights.append(
            Insight(
                kind="attention",
                category="hotspots",
                message="Critical files modified",
                detail=f"Changes to critical files: {', '.join(hotspots)}",
                paths=tuple(hotspots),
            )
        )

    return insights
