"""Heuristic per-snapshot file classification."""

from .classifier import ContentClassifier, describe, detect_language, is_binary
from .models import (
    ClassInfo,
    ExportInfo,
    FileSnapshotAnalysis,
    FunctionInfo,
    StructureCounts,
)

__all__ = [
    "ContentClassifier",
    "describe",
    "detect_language",
    "is_binary",
    "ClassInfo",
    "ExportInfo",
    "FileSnapshotAnalysis",
    "FunctionInfo",
    "StructureCounts",
]
