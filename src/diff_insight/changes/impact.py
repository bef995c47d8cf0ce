"""Impact scoring for file change records.

score = base(status) × path multipliers × analysis multipliers, rounded half
up. The level is bucketed from the unrounded score, so 5.25 is "high" even
though it displays as 5.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..analysis.models import StaticAnalysis
from ..analysis.rounding import round_int
from .models import ChangeStatus, Impact

if TYPE_CHECKING:
    from .models import FileChangeRecord

BASE_SCORES = {
    ChangeStatus.ADDED: 3,
    ChangeStatus.DELETED: 2,
    ChangeStatus.MODIFIED: 1,
    ChangeStatus.RENAMED: 0,
}

# Substring checks on the full path, applied cumulatively
PATH_MULTIPLIERS = (
    ("test", 0.5),
    ("config", 2.0),
    ("security", 3.0),
)

HIGH_COMPLEXITY = 10
HIGH_COMPLEXITY_MULTIPLIER = 1.5
SECURITY_ISSUE_MULTIPLIER = 3.0

HIGH_LEVEL = 5
MEDIUM_LEVEL = 2


def raw_impact_score(record: "FileChangeRecord") -> float:
    score = float(BASE_SCORES[record.status])

    for needle, multiplier in PATH_MULTIPLIERS:
        if needle in record.path:
            score *= multiplier

    analysis = getattr(record, "static_analysis", None)
    if isinstance(analysis, StaticAnalysis):
        if analysis.complexity.cyclomatic > HIGH_COMPLEXITY:
            score *= HIGH_COMPLEXITY_MULTIPLIER
        if analysis.issues.security:
            score *= SECURITY_ISSUE_MULTIPLIER

    return score


def level_for(score: float) -> str:
    if score > HIGH_LEVEL:
        return "high"
    if score > MEDIUM_LEVEL:
        return "medium"
    return "low"


def calculate_impact(record: "FileChangeRecord") -> Impact:
    score = raw_impact_score(record)
    return Impact(score=round_int(score), level=level_for(score))
