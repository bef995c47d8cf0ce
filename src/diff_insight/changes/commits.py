"""Commit classification and aggregation."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from ..config import ThresholdConfig
from ..revision.models import CommitInfo
from .models import AuthorStats, CommitAggregation, CommitPattern, CommitRecord

# Checked in order; the first matching prefix wins
COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "perf",
    "ci",
    "build",
    "revert",
)
COMMIT_TYPE_PATTERNS = tuple(
    (commit_type, re.compile(rf"^{commit_type}(\(.+\))?:", re.IGNORECASE))
    for commit_type in COMMIT_TYPES
)

# Fallback when the message has no conventional prefix
KEYWORD_TYPES = (
    (re.compile(r"merge", re.IGNORECASE), "merge"),
    (re.compile(r"hotfix", re.IGNORECASE), "hotfix"),
    (re.compile(r"bugfix|bug", re.IGNORECASE), "fix"),
    (re.compile(r"feature", re.IGNORECASE), "feat"),
)

TICKET_REFERENCE = re.compile(r"\b[A-Z]+-\d+\b")


def is_conventional(message: str) -> bool:
    return any(pattern.search(message) for _, pattern in COMMIT_TYPE_PATTERNS)


def classify_commit(message: str) -> str:
    """Conventional-commit type, keyword guess, or "other"."""
    for commit_type, pattern in COMMIT_TYPE_PATTERNS:
        if pattern.search(message):
            return commit_type
    for pattern, commit_type in KEYWORD_TYPES:
        if pattern.search(message):
            return commit_type
    return "other"


def unique_commits(
    source_commits: Sequence[CommitInfo],
    target_commits: Sequence[CommitInfo],
    commit: Optional[str] = None,
) -> list[CommitInfo]:
    """Commits on the source side whose hash the target side lacks.

    Source order is preserved. ``commit`` narrows to hashes with that prefix.
    """
    target_hashes = {c.hash for c in target_commits}
    unique = [c for c in source_commits if c.hash not in target_hashes]
    if commit:
        unique = [c for c in unique if c.matches_prefix(commit)]
    return unique


def detect_commit_patterns(
    commits: Sequence[CommitInfo], thresholds: ThresholdConfig
) -> list[CommitPattern]:
    if not commits:
        return []

    patterns: list[CommitPattern] = []
    total = len(commits)

    conventional = sum(1 for c in commits if is_conventional(c.message)) / total
    if conventional > thresholds.conventional_commit_ratio:
        patterns.append(
            CommitPattern(
                kind="conventional-commits",
                confidence="high",
                description="Project follows the Conventional Commits convention",
                ratio=conventional,
            )
        )

    tickets = sum(1 for c in commits if TICKET_REFERENCE.search(c.message)) / total
    if tickets > thresholds.ticket_reference_ratio:
        patterns.append(
            CommitPattern(
                kind="ticket-references",
                confidence="medium",
                description="Commits frequently reference issue or ticket numbers",
                ratio=tickets,
            )
        )

    return patterns


def aggregate_commits(
    commits: Sequence[CommitInfo], thresholds: Optional[ThresholdConfig] = None
) -> CommitAggregation:
    """Group by author and type, keep a timeline, detect repository habits."""
    thresholds = thresholds or ThresholdConfig()

    authors: dict[str, list[str]] = {}
    by_type: dict[str, int] = {}
    timeline: list[CommitRecord] = []

    for commit in commits:
        authors.setdefault(commit.author, []).append(commit.abbrev_hash)

        commit_type = classify_commit(commit.message)
        by_type[commit_type] = by_type.get(commit_type, 0) + 1

        timeline.append(
            CommitRecord(
                hash=commit.hash,
                abbrev_hash=commit.abbrev_hash,
                author=commit.author,
                date=commit.date,
                message=commit.message,
                commit_type=commit_type,
            )
        )

    return CommitAggregation(
        total=len(commits),
        by_author={
            author: AuthorStats(count=len(hashes), commits=tuple(hashes))
            for author, hashes in authors.items()
        },
        by_type=by_type,
        timeline=tuple(timeline),
        patterns=tuple(detect_commit_patterns(commits, thresholds)),
    )
