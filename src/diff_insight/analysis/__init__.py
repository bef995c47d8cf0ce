"""Static metrics: line counts, complexity, structure, issues and quality."""

from .languages import LANGUAGES, LanguageProfile, get_language_profile
from .models import (
    CodeMetrics,
    ComplexityMetrics,
    HalsteadMetrics,
    Issue,
    IssueReport,
    QualityAssessment,
    StaticAnalysis,
    StaticAnalysisError,
    StaticAnalysisOutcome,
    StructureInfo,
)
from .static_analyzer import StaticAnalyzer, grade_for

__all__ = [
    "LANGUAGES",
    "LanguageProfile",
    "get_language_profile",
    "CodeMetrics",
    "ComplexityMetrics",
    "HalsteadMetrics",
    "Issue",
    "IssueReport",
    "QualityAssessment",
    "StaticAnalysis",
    "StaticAnalysisError",
    "StaticAnalysisOutcome",
    "StructureInfo",
    "StaticAnalyzer",
    "grade_for",
]
