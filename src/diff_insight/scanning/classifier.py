"""Heuristic content classifier.

Turns one file snapshot (path + text) into a FileSnapshotAnalysis: detected
type, purpose tags, per-line structure counts, dependencies, exports,
functions, classes, a decision-point complexity proxy, characteristic tags and
a generated description.

Everything here is regex-based and best-effort. The classifier is total over
arbitrary input: binary or non-text content short-circuits to a minimal
"unknown" snapshot instead of raising.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import PurePosixPath
from typing import Iterable, Optional, Union

from ..config import DEFAULT_METHOD_EXCLUDE_KEYWORDS
from ..logging_config import get_logger
from . import rules
from .models import (
    ClassInfo,
    ExportInfo,
    FileSnapshotAnalysis,
    FunctionInfo,
    StructureCounts,
)

logger = get_logger(__name__)


def detect_language(path: str) -> str:
    """Map a path to a language tag by extension (or well-known filename)."""
    name = PurePosixPath(path).name
    lowered = name.lower()
    if lowered in rules.FILENAME_LANGUAGES:
        return rules.FILENAME_LANGUAGES[lowered]
    if "." not in name:
        return "unknown"
    extension = lowered.rsplit(".", 1)[1]
    return rules.EXTENSION_LANGUAGES.get(extension, "unknown")


def _split_params(raw: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in raw.split(",") if p.strip())


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate preserving first-seen order."""
    return tuple(dict.fromkeys(items))


class ContentClassifier:
    """Classify file snapshots with ordered rule tables.

    Args:
        method_exclude_keywords: Names the method-like pattern must never
            report as functions. The list is inherently incomplete, so it is
            configurable rather than fixed.
    """

    def __init__(self, method_exclude_keywords: Iterable[str] = DEFAULT_METHOD_EXCLUDE_KEYWORDS):
        self.method_exclude_keywords = frozenset(method_exclude_keywords)

    def analyze(
        self,
        path: str,
        content: Union[str, bytes, None],
        language: Optional[str] = None,
    ) -> FileSnapshotAnalysis:
        """Classify one snapshot. Never raises.

        Args:
            path: Repository-relative path (may be empty for anonymous content)
            content: File text; bytes are decoded as UTF-8
            language: Language tag override (detected from ``path`` otherwise)

        Returns:
            FileSnapshotAnalysis for this snapshot
        """
        language = language or detect_language(path)

        text = self._as_text(content)
        if text is None:
            logger.debug("Non-text content for %s, classifying as unknown", path or "<anonymous>")
            return self._unknown(path, language)

        file_type = self.detect_file_type(path, text)
        purposes = self.detect_purposes(path, text)
        structure = self.count_structure(text)
        dependencies = self.extract_dependencies(text, language)
        exports = self.extract_exports(text)
        functions = self.extract_functions(text, language)
        classes = self.extract_classes(text)
        complexity = self.calculate_complexity(text)
        characteristics = self.detect_characteristics(text)

        snapshot = FileSnapshotAnalysis(
            path=path,
            language=language,
            file_type=file_type,
            purposes=purposes,
            structure=structure,
            dependencies=dependencies,
            exports=exports,
            functions=functions,
            classes=classes,
            complexity=complexity,
            characteristics=characteristics,
        )
        return _with_description(snapshot)

    # ── Input guards ─────────────────────────────────────────────

    @staticmethod
    def _as_text(content: Union[str, bytes, None]) -> Optional[str]:
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError:
                return None
        if not isinstance(content, str):
            return None
        if is_binary(content):
            return None
        return content

    @staticmethod
    def _unknown(path: str, language: str) -> FileSnapshotAnalysis:
        snapshot = FileSnapshotAnalysis(
            path=path,
            language=language,
            file_type="unknown",
            purposes=(rules.FALLBACK_PURPOSE,),
        )
        return _with_description(snapshot)

    # ── Type and purpose ─────────────────────────────────────────

    def detect_file_type(self, path: str, content: str) -> str:
        """Filename rules, then the content rule table, then the extension map."""
        posix = PurePosixPath(path)
        file_name = posix.name

        for tag, pattern in rules.FILENAME_TYPE_RULES:
            if pattern.search(file_name):
                return tag

        for category, subtype, patterns in rules.CONTENT_TYPE_RULES:
            if any(pattern.search(content) for pattern in patterns):
                return f"{category}-{subtype}"

        return rules.EXTENSION_TYPES.get(posix.suffix.lower(), "unknown")

    def detect_purposes(self, path: str, content: str) -> tuple[str, ...]:
        """Purpose tags from directory conventions and content signatures."""
        purposes: list[str] = []

        directories = {segment.lower() for segment in PurePosixPath(path).parts[:-1]}
        for segments, tag in rules.PATH_PURPOSE_RULES:
            if directories & segments:
                purposes.append(tag)

        for pattern, tag in rules.CONTENT_PURPOSE_RULES:
            if pattern.search(content):
                purposes.append(tag)

        return _dedupe(purposes) or (rules.FALLBACK_PURPOSE,)

    # ── Structure ────────────────────────────────────────────────

    def count_structure(self, content: str) -> StructureCounts:
        """Single pass; each line lands in at most one bucket."""
        lines = content.split("\n")
        counts = {
            "imports": 0,
            "exports": 0,
            "functions": 0,
            "classes": 0,
            "interfaces": 0,
            "comments": 0,
            "blank_lines": 0,
        }

        for line in lines:
            trimmed = line.strip()
            if not trimmed:
                counts["blank_lines"] += 1
            elif trimmed.startswith(rules.COMMENT_PREFIXES):
                counts["comments"] += 1
            elif any(p.search(trimmed) for p in rules.LINE_IMPORT_PATTERNS):
                counts["imports"] += 1
            elif rules.LINE_EXPORT_PATTERN.search(trimmed):
                counts["exports"] += 1
            elif any(p.search(trimmed) for p in rules.LINE_FUNCTION_PATTERNS):
                counts["functions"] += 1
            elif rules.LINE_CLASS_PATTERN.search(trimmed):
                counts["classes"] += 1
            elif rules.LINE_INTERFACE_PATTERN.search(trimmed):
                counts["interfaces"] += 1

        return StructureCounts(lines=len(lines), **counts)

    def extract_dependencies(self, content: str, language: str) -> tuple[str, ...]:
        """External module specifiers, deduplicated; relative ones are dropped."""
        found: list[str] = []
        for pattern in (rules.IMPORT_FROM_PATTERN, rules.REQUIRE_PATTERN):
            found.extend(m.group(1) for m in pattern.finditer(content))

        if language == "python":
            for pattern in rules.PYTHON_IMPORT_PATTERNS:
                found.extend(m.group(1) for m in pattern.finditer(content))

        return _dedupe(dep for dep in found if not dep.startswith("."))

    def extract_exports(self, content: str) -> tuple[ExportInfo, ...]:
        exports: list[ExportInfo] = []

        default = rules.DEFAULT_EXPORT_PATTERN.search(content)
        if default:
            exports.append(ExportInfo(kind="default", name=default.group(1)))

        for match in rules.NAMED_EXPORT_PATTERN.finditer(content):
            exports.append(ExportInfo(kind="named", name=match.group(1)))

        for match in rules.REEXPORT_PATTERN.finditer(content):
            for name in match.group(1).split(","):
                if name.strip():
                    exports.append(ExportInfo(kind="reexport", name=name.strip()))

        return tuple(exports)

    def extract_functions(self, content: str, language: str) -> tuple[FunctionInfo, ...]:
        """Declared functions, arrow bindings and method-like bindings.

        A method-pattern hit on a name already captured by a declaration at the
        same offset is skipped, as are names in the exclude-list.
        """
        functions: list[FunctionInfo] = []
        claimed: set[int] = set()

        for match in rules.FUNCTION_DECLARATION_PATTERN.finditer(content):
            claimed.add(match.start(1))
            functions.append(
                FunctionInfo(
                    name=match.group(1),
                    params=_split_params(match.group(2)),
                    is_async="async" in match.group(0),
                )
            )

        for match in rules.ARROW_FUNCTION_PATTERN.finditer(content):
            claimed.add(match.start(1))
            functions.append(
                FunctionInfo(
                    name=match.group(1),
                    params=_split_params(match.group(2)),
                    is_async="async" in match.group(0),
                    is_arrow=True,
                )
            )

        if language == "python":
            for match in rules.PYTHON_FUNCTION_PATTERN.finditer(content):
                functions.append(
                    FunctionInfo(
                        name=match.group(1),
                        params=_split_params(match.group(2)),
                        is_async="async" in match.group(0),
                    )
                )

        for match in rules.METHOD_PATTERN.finditer(content):
            name = match.group(1)
            if name in self.method_exclude_keywords or match.start(1) in claimed:
                continue
            functions.append(
                FunctionInfo(
                    name=name,
                    params=_split_params(match.group(2)),
                    is_async="async" in match.group(0),
                    is_method=True,
                )
            )

        return tuple(functions)

    def extract_classes(self, content: str) -> tuple[ClassInfo, ...]:
        classes: list[ClassInfo] = []
        for pattern in rules.CLASS_PATTERNS:
            for match in pattern.finditer(content):
                classes.append(ClassInfo(name=match.group(1), parent=match.group(2) or None))
        return tuple(classes)

    # ── Complexity and characteristics ───────────────────────────

    def calculate_complexity(self, content: str) -> int:
        """1 + every occurrence of every decision-point pattern.

        A textual proxy, not cyclomatic complexity over a control-flow graph.
        """
        complexity = 1
        for pattern in rules.DECISION_POINT_PATTERNS:
            complexity += len(pattern.findall(content))
        return complexity

    def detect_characteristics(self, content: str) -> tuple[str, ...]:
        return tuple(tag for tag, pattern in rules.CHARACTERISTIC_RULES if pattern.search(content))


def _with_description(snapshot: FileSnapshotAnalysis) -> FileSnapshotAnalysis:
    return replace(snapshot, description=describe(snapshot))


def is_binary(content: str) -> bool:
    """Text carrying NUL characters is treated as binary and never analysed."""
    return "\x00" in content


def describe(snapshot: FileSnapshotAnalysis) -> str:
    """Assemble a one-paragraph description from the snapshot's facts."""
    parts = [f"This {snapshot.file_type} file serves as {', '.join(snapshot.purposes)}."]

    structure = snapshot.structure
    contents: list[str] = []
    if structure.classes > 0:
        contents.append(f"{structure.classes} class{'es' if structure.classes != 1 else ''}")
    if structure.functions > 0:
        contents.append(
            f"{structure.functions} function{'s' if structure.functions != 1 else ''}"
        )
    if contents:
        sentence = f"It contains {' and '.join(contents)}"
        if structure.imports > 0:
            sentence += f" with {structure.imports} import{'s' if structure.imports != 1 else ''}"
        parts.append(sentence + ".")
    elif structure.imports > 0:
        parts.append(f"It has {structure.imports} import{'s' if structure.imports != 1 else ''}.")

    default_export = snapshot.default_export
    if default_export:
        parts.append(f"Its main export is {default_export}.")

    if snapshot.characteristics:
        parts.append(f"Key characteristics: {', '.join(snapshot.characteristics)}.")

    if snapshot.complexity > rules.REFACTOR_SUGGESTION_COMPLEXITY:
        parts.append(
            f"Complexity is high ({snapshot.complexity}); consider refactoring."
        )

    return " ".join(parts)
