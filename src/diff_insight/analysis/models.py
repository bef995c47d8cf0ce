"""Result models for the static analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Union

Severity = Literal["info", "low", "medium", "high", "critical"]
Grade = Literal["A", "B", "C", "D", "F"]

ISSUE_CATEGORIES = ("bugs", "security", "performance", "style", "maintenance")


@dataclass(frozen=True)
class CodeMetrics:
    """Line-level size metrics.

    Comment lines are non-empty lines starting with a comment marker; code
    lines are the remaining non-empty lines.
    """

    total_lines: int = 0
    code_lines: int = 0
    blank_lines: int = 0
    comment_lines: int = 0
    average_line_length: int = 0
    longest_line: int = 0

    @property
    def comment_ratio(self) -> float:
        return self.comment_lines / (self.code_lines or 1)


@dataclass(frozen=True)
class HalsteadMetrics:
    vocabulary: int = 0
    length: int = 0
    volume: int = 0
    difficulty: float = 0.0
    effort: int = 0


@dataclass(frozen=True)
class ComplexityMetrics:
    cyclomatic: int = 1
    cognitive: int = 0
    nesting: int = 0
    halstead: HalsteadMetrics = field(default_factory=HalsteadMetrics)


@dataclass(frozen=True)
class StructureInfo:
    """Named declarations per kind, in source order."""

    functions: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    interfaces: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()


@dataclass(frozen=True)
class Issue:
    """A single heuristic finding.

    Attributes:
        type: Rule identifier (e.g. "eval-usage")
        severity: info | low | medium | high | critical
        message: Human-readable explanation
        pattern: What the rule looked for, for pattern rules
        value: Measured value for threshold rules (e.g. the complexity)
    """

    type: str
    severity: Severity
    message: str
    pattern: Optional[str] = None
    value: Optional[int] = None


@dataclass(frozen=True)
class IssueReport:
    bugs: tuple[Issue, ...] = ()
    security: tuple[Issue, ...] = ()
    performance: tuple[Issue, ...] = ()
    style: tuple[Issue, ...] = ()
    maintenance: tuple[Issue, ...] = ()

    def counts(self) -> dict[str, int]:
        return {category: len(getattr(self, category)) for category in ISSUE_CATEGORIES}

    @property
    def total(self) -> int:
        return sum(self.counts().values())


@dataclass(frozen=True)
class QualityAssessment:
    """Quality score in [0, 100] with its letter grade and factor labels."""

    score: int
    grade: Grade
    factors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class StaticAnalysis:
    language: str
    metrics: CodeMetrics
    complexity: ComplexityMetrics
    structure: StructureInfo
    issues: IssueReport
    quality: QualityAssessment


@dataclass(frozen=True)
class StaticAnalysisError:
    """Marker returned in place of a StaticAnalysis for unanalyzable content."""

    error: str


StaticAnalysisOutcome = Union[StaticAnalysis, StaticAnalysisError]
