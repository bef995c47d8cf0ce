"""Static text metrics for one file snapshot.

StaticAnalyzer computes line metrics, complexity (cyclomatic, cognitive,
bracket nesting, Halstead), named structure, heuristic issues and a quality
score. It is a pure function of ``(content, language)``: no I/O, no shared
state, safe to call from any number of worker threads.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from ..config import ThresholdConfig
from .issues import MAX_NESTING, detect_issues
from .languages import LanguageProfile, get_language_profile
from .models import (
    CodeMetrics,
    ComplexityMetrics,
    HalsteadMetrics,
    QualityAssessment,
    StaticAnalysis,
    StaticAnalysisError,
    StaticAnalysisOutcome,
    StructureInfo,
)
from .rounding import round_half_up, round_int

COMMENT_MARKERS = ("//", "#", "*")

CONTROL_FLOW_PATTERNS = tuple(
    re.compile(p)
    for p in (
        r"\bif\b",
        r"\belse\s+if\b",
        r"\bfor\b",
        r"\bwhile\b",
        r"\bdo\b",
        r"\bswitch\b",
        r"\bcase\b",
        r"\bcatch\b",
        r"\?\s*.*\s*:",
    )
)
LOGICAL_OPERATORS = re.compile(r"&&|\|\|")

_COGNITIVE_BRANCH = re.compile(r"\b(if|else if|for|while|do|switch)\b")
_COGNITIVE_CATCH = re.compile(r"\bcatch\b")
_COGNITIVE_JUMP = re.compile(r"\bbreak\b|\bcontinue\b")

_OPENERS = frozenset("{([")
_CLOSERS = frozenset("})]")

_OPERATORS = re.compile(r"\+\+|--|==|!=|<=|>=|&&|\|\||<<|>>|[+\-*/%=<>!&|^~]")
_IDENTIFIERS = re.compile(r"\b[a-zA-Z_]\w*\b")
_NUMBERS = re.compile(r"\b\d+(?:\.\d+)?\b")
_STRINGS = re.compile(r"[\"'`].*?[\"'`]")

GRADE_BREAKPOINTS = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))
MIN_COMMENT_RATIO = 0.1


def calculate_metrics(content: str) -> CodeMetrics:
    lines = content.split("\n")
    non_empty = [line for line in lines if line.strip()]
    code = [line for line in non_empty if not line.strip().startswith(COMMENT_MARKERS)]

    average = 0
    if non_empty:
        average = round_int(sum(len(line) for line in non_empty) / len(non_empty))

    return CodeMetrics(
        total_lines=len(lines),
        code_lines=len(code),
        blank_lines=len(lines) - len(non_empty),
        comment_lines=len(non_empty) - len(code),
        average_line_length=average,
        longest_line=max(len(line) for line in lines),
    )


def cyclomatic_complexity(content: str) -> int:
    """1 + control-flow keyword occurrences + logical operators."""
    complexity = 1
    for pattern in CONTROL_FLOW_PATTERNS:
        complexity += len(pattern.findall(content))
    complexity += len(LOGICAL_OPERATORS.findall(content))
    return complexity


def cognitive_complexity(content: str) -> int:
    """Line-oriented cognitive complexity.

    A line containing ``{`` deepens nesting before its branch keywords are
    scored; a line containing ``}`` closes one level afterwards.
    """
    complexity = 0
    nesting = 0

    for line in content.split("\n"):
        trimmed = line.strip()

        if "{" in trimmed:
            nesting += 1
        if _COGNITIVE_BRANCH.search(trimmed):
            complexity += 1 + nesting
        if _COGNITIVE_CATCH.search(trimmed):
            complexity += 1
        if _COGNITIVE_JUMP.search(trimmed):
            complexity += 1
        complexity += len(LOGICAL_OPERATORS.findall(trimmed))
        if "}" in trimmed:
            nesting = max(0, nesting - 1)

    return complexity


def max_nesting(content: str) -> int:
    """Deepest bracket depth over ``{ ( [``; unbalanced closers floor at 0."""
    deepest = 0
    depth = 0
    for char in content:
        if char in _OPENERS:
            depth += 1
            deepest = max(deepest, depth)
        elif char in _CLOSERS:
            depth = max(0, depth - 1)
    return deepest


def halstead_metrics(content: str) -> HalsteadMetrics:
    operators = _OPERATORS.findall(content)
    operands = (
        _IDENTIFIERS.findall(content) + _NUMBERS.findall(content) + _STRINGS.findall(content)
    )

    n1 = len(set(operators))
    n2 = len(set(operands))
    total_operands = len(operands)

    vocabulary = n1 + n2
    length = len(operators) + total_operands
    volume = length * math.log2(vocabulary or 1)
    difficulty = (n1 / 2) * (total_operands / (n2 or 1))

    return HalsteadMetrics(
        vocabulary=vocabulary,
        length=length,
        volume=round_int(volume),
        difficulty=round_half_up(difficulty, 2),
        effort=round_int(volume * difficulty),
    )


def grade_for(score: int) -> str:
    for floor, grade in GRADE_BREAKPOINTS:
        if score >= floor:
            return grade
    return "F"


class StaticAnalyzer:
    """Compute static metrics for file snapshots.

    Args:
        thresholds: Heuristic thresholds for issue rules and quality scoring
    """

    def __init__(self, thresholds: Optional[ThresholdConfig] = None):
        self.thresholds = thresholds or ThresholdConfig()

    def analyze(self, content: Optional[str], language: str) -> StaticAnalysisOutcome:
        """Analyze one snapshot.

        Returns:
            StaticAnalysis, or StaticAnalysisError when content is empty or absent
        """
        if not content:
            return StaticAnalysisError(error="No content to analyze")

        profile = get_language_profile(language)

        metrics = calculate_metrics(content)
        complexity = ComplexityMetrics(
            cyclomatic=cyclomatic_complexity(content),
            cognitive=cognitive_complexity(content),
            nesting=max_nesting(content),
            halstead=halstead_metrics(content),
        )
        structure = self.analyze_structure(content, profile)
        issues = detect_issues(content, profile, metrics, complexity, self.thresholds)
        quality = self.assess_quality(metrics, complexity)

        return StaticAnalysis(
            language=language,
            metrics=metrics,
            complexity=complexity,
            structure=structure,
            issues=issues,
            quality=quality,
        )

    @staticmethod
    def analyze_structure(content: str, profile: LanguageProfile) -> StructureInfo:
        def names(patterns) -> tuple[str, ...]:
            found = []
            for pattern in patterns:
                for match in pattern.finditer(content):
                    name = next((g for g in match.groups() if g), None)
                    if name:
                        found.append(name)
            return tuple(found)

        return StructureInfo(
            functions=names(profile.function_patterns),
            classes=names(profile.class_patterns),
            interfaces=names(profile.interface_patterns),
            types=names(profile.type_patterns),
            imports=names(profile.import_patterns),
            exports=names(profile.export_patterns),
        )

    def assess_quality(
        self, metrics: CodeMetrics, complexity: ComplexityMetrics
    ) -> QualityAssessment:
        high_complexity = self.thresholds.high_complexity
        large_file = self.thresholds.large_file_lines

        score = 100
        if complexity.cyclomatic > high_complexity:
            score -= 10
        if complexity.cyclomatic > 2 * high_complexity:
            score -= 10
        if complexity.nesting > MAX_NESTING:
            score -= 5
        if metrics.total_lines > large_file:
            score -= 5
        if metrics.total_lines > 2 * large_file:
            score -= 10

        documented = metrics.comment_ratio >= MIN_COMMENT_RATIO
        simple = complexity.cyclomatic <= high_complexity
        if not documented:
            score -= 5

        score = max(0, min(100, score))

        return QualityAssessment(
            score=score,
            grade=grade_for(score),
            factors={
                "complexity": "good" if simple else "needs-improvement",
                "size": "good" if metrics.total_lines <= large_file else "large",
                "documentation": "adequate" if documented else "insufficient",
            },
        )
