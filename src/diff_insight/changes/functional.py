"""Structural deltas between two snapshots of the same file."""

from __future__ import annotations

from typing import Iterable

from ..scanning.models import FileSnapshotAnalysis
from .models import FunctionalChangeSet, LineDelta, PurposeChange


def _difference(left: Iterable[str], right: Iterable[str]) -> tuple[str, ...]:
    """Names in ``left`` missing from ``right``, first-seen order, no duplicates."""
    exclude = set(right)
    return tuple(dict.fromkeys(name for name in left if name not in exclude))


def compute_functional_changes(
    old: FileSnapshotAnalysis, new: FileSnapshotAnalysis
) -> FunctionalChangeSet:
    """Diff two snapshots by name.

    ``old`` is the source-side snapshot and ``new`` the target-side one.
    """
    old_functions, new_functions = old.function_names, new.function_names
    old_classes, new_classes = old.class_names, new.class_names

    purpose_change = None
    if ",".join(old.purposes) != ",".join(new.purposes):
        purpose_change = PurposeChange(from_purposes=old.purposes, to_purposes=new.purposes)

    return FunctionalChangeSet(
        added_functions=_difference(new_functions, old_functions),
        removed_functions=_difference(old_functions, new_functions),
        added_classes=_difference(new_classes, old_classes),
        removed_classes=_difference(old_classes, new_classes),
        added_dependencies=_difference(new.dependencies, old.dependencies),
        removed_dependencies=_difference(old.dependencies, new.dependencies),
        complexity_delta=new.complexity - old.complexity,
        purpose_change=purpose_change,
    )


def compute_line_delta(old_content: str, new_content: str) -> LineDelta:
    old_lines = len(old_content.split("\n"))
    new_lines = len(new_content.split("\n"))
    return LineDelta(
        lines_added=max(0, new_lines - old_lines),
        lines_removed=max(0, old_lines - new_lines),
        size_change=new_lines - old_lines,
    )
