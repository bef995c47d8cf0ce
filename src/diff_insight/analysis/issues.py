"""Heuristic issue rules.

Five independent rule sets, one per IssueReport category. Every rule either
fires once for the whole file or not at all; the rules report presence, not
locations.
"""

from __future__ import annotations

import re

from ..config import ThresholdConfig
from .languages import LanguageProfile
from .models import CodeMetrics, ComplexityMetrics, Issue, IssueReport

MAX_NESTING = 5
LARGE_CONTENT_CHARS = 1000

_TODO = re.compile(r"TODO|FIXME|XXX|HACK")
_EVAL = re.compile(r"\beval\s*\(")
_INNER_HTML = re.compile(r"innerHTML\s*=")
_HARDCODED_SECRET = re.compile(
    r"(password|secret|api[_-]?key)\s*=\s*[\"'][^\"']+[\"']", re.IGNORECASE
)
_FOR_EACH = re.compile(r"\.forEach\(")
_NESTED_LOOPS = re.compile(r"for\s*\([^)]*\)\s*\{[^}]*for\s*\(")


def _any(patterns, content: str) -> bool:
    return any(p.search(content) for p in patterns)


def detect_bug_risks(content: str, profile: LanguageProfile) -> list[Issue]:
    issues = []
    if _any(profile.loose_null_patterns, content):
        issues.append(
            Issue(
                type="null-comparison",
                severity="low",
                message="Loose equality against null; use a strict or identity comparison",
                pattern="== null or != null",
            )
        )
    if _any(profile.debug_print_patterns, content):
        issues.append(
            Issue(
                type="debug-statement",
                severity="low",
                message="Debug print statements found in code",
                pattern=profile.debug_print_patterns[0].pattern,
            )
        )
    if _TODO.search(content):
        issues.append(
            Issue(
                type="todo-comment",
                severity="info",
                message="TODO/FIXME comments found",
                pattern=_TODO.pattern,
            )
        )
    return issues


def detect_security_issues(content: str) -> list[Issue]:
    issues = []
    if _EVAL.search(content):
        issues.append(
            Issue(
                type="eval-usage",
                severity="high",
                message="eval() usage detected, potential security risk",
                pattern="eval(",
            )
        )
    if _INNER_HTML.search(content):
        issues.append(
            Issue(
                type="innerHTML",
                severity="medium",
                message="innerHTML assignment detected, potential XSS risk",
                pattern="innerHTML =",
            )
        )
    if _HARDCODED_SECRET.search(content):
        issues.append(
            Issue(
                type="hardcoded-secret",
                severity="critical",
                message="Potential hardcoded secret detected",
                pattern="hardcoded password/secret/api-key",
            )
        )
    return issues


def detect_performance_issues(content: str, profile: LanguageProfile) -> list[Issue]:
    if not profile.performance_rules:
        return []

    issues = []
    if _FOR_EACH.search(content) and len(content) > LARGE_CONTENT_CHARS:
        issues.append(
            Issue(
                type="forEach-usage",
                severity="low",
                message="Consider using for...of for better performance",
                pattern=".forEach(",
            )
        )
    if _NESTED_LOOPS.search(content):
        issues.append(
            Issue(
                type="nested-loops",
                severity="medium",
                message="Nested loops detected, potential performance issue",
                pattern="nested for loops",
            )
        )
    return issues


def detect_style_issues(
    content: str, profile: LanguageProfile, thresholds: ThresholdConfig
) -> list[Issue]:
    issues = []
    limit = thresholds.long_line_length
    long_lines = sum(1 for line in content.split("\n") if len(line) > limit)
    if long_lines:
        issues.append(
            Issue(
                type="long-lines",
                severity="info",
                message=f"{long_lines} lines exceed {limit} characters",
                value=long_lines,
            )
        )
    if _any(profile.legacy_declaration_patterns, content):
        issues.append(
            Issue(
                type="var-usage",
                severity="low",
                message="Use const or let instead of var",
                pattern="var declaration",
            )
        )
    return issues


def detect_maintenance_issues(
    metrics: CodeMetrics, complexity: ComplexityMetrics, thresholds: ThresholdConfig
) -> list[Issue]:
    issues = []
    if complexity.cyclomatic > thresholds.high_complexity:
        issues.append(
            Issue(
                type="high-complexity",
                severity="medium",
                message=f"High cyclomatic complexity: {complexity.cyclomatic}",
                value=complexity.cyclomatic,
            )
        )
    if complexity.nesting > MAX_NESTING:
        issues.append(
            Issue(
                type="deep-nesting",
                severity="medium",
                message=f"Deep nesting level: {complexity.nesting}",
                value=complexity.nesting,
            )
        )
    if metrics.total_lines > thresholds.large_file_lines:
        issues.append(
            Issue(
                type="large-file",
                severity="low",
                message=f"Large file: {metrics.total_lines} lines",
                value=metrics.total_lines,
            )
        )
    return issues


def detect_issues(
    content: str,
    profile: LanguageProfile,
    metrics: CodeMetrics,
    complexity: ComplexityMetrics,
    thresholds: ThresholdConfig,
) -> IssueReport:
    """Run all five rule sets."""
    return IssueReport(
        bugs=tuple(detect_bug_risks(content, profile)),
        security=tuple(detect_security_issues(content)),
        performance=tuple(detect_performance_issues(content, profile)),
        style=tuple(detect_style_issues(content, profile, thresholds)),
        maintenance=tuple(detect_maintenance_issues(metrics, complexity, thresholds)),
    )
