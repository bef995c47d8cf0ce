"""Snapshot models produced by the content classifier.

A FileSnapshotAnalysis describes one file at one revision. It is computed
fresh for every (file, revision) pair and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StructureCounts:
    """Per-line counts from a single pass over the file."""

    lines: int = 0
    imports: int = 0
    exports: int = 0
    functions: int = 0
    classes: int = 0
    interfaces: int = 0
    comments: int = 0
    blank_lines: int = 0


@dataclass(frozen=True)
class FunctionInfo:
    """A function-like binding found by pattern scan.

    Attributes:
        name: Bound name
        params: Raw parameter strings, trimmed
        is_async: Declared with ``async``
        is_arrow: Arrow-function binding (``const f = () =>``)
        is_method: Matched by the method-like ``name(...) {`` pattern
    """

    name: str
    params: tuple[str, ...] = ()
    is_async: bool = False
    is_arrow: bool = False
    is_method: bool = False


@dataclass(frozen=True)
class ClassInfo:
    name: str
    parent: str | None = None


@dataclass(frozen=True)
class ExportInfo:
    kind: str  # "default" | "named" | "reexport"
    name: str


@dataclass(frozen=True)
class FileSnapshotAnalysis:
    """Classification and structural facts for one file snapshot.

    All structural facts are regex approximations, not parsed syntax.
    """

    path: str
    language: str
    file_type: str
    purposes: tuple[str, ...]
    structure: StructureCounts = field(default_factory=StructureCounts)
    dependencies: tuple[str, ...] = ()
    exports: tuple[ExportInfo, ...] = ()
    functions: tuple[FunctionInfo, ...] = ()
    classes: tuple[ClassInfo, ...] = ()
    complexity: int = 1
    characteristics: tuple[str, ...] = ()
    description: str = ""

    @property
    def function_names(self) -> list[str]:
        return [f.name for f in self.functions]

    @property
    def class_names(self) -> list[str]:
        return [c.name for c in self.classes]

    @property
    def default_export(self) -> str | None:
        for export in self.exports:
            if export.kind == "default":
                return export.name
        return None
