"""Branch diff orchestration.

ChangeAnalyzer pulls the changed-file list, diff summary and commit logs from
a RevisionSource, runs the classifier and static analyzer on the relevant
snapshots of every file, and assembles one AnalysisResult.

Diffs are taken over ``target...source``. That fixes which ref each status
reads from:

    added     content at source ref
    modified  primary analysis on target-ref content; functional changes
              from the source-side snapshot (old) to the target-side (new)
    deleted   content at target ref, classification only
    renamed   no content analysis
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional

from ..analysis import StaticAnalyzer
from ..config import AnalysisConfig
from ..exceptions import ContentUnavailableError
from ..logging_config import get_logger
from ..revision.interfaces import RevisionSource
from ..revision.models import ChangedFile, CommitInfo, DiffFilters
from ..scanning import ContentClassifier, detect_language, is_binary
from .commits import aggregate_commits, unique_commits
from .functional import compute_functional_changes, compute_line_delta
from .insights import generate_insights
from .models import (
    RECORD_TYPES,
    AddedFile,
    AnalysisResult,
    AnalysisSummary,
    ChangeStatus,
    DeletedFile,
    FileChangeRecord,
    ModifiedFile,
    RenamedFile,
)
from .rollup import calculate_rollup

logger = get_logger(__name__)


def build_filters(**options) -> DiffFilters:
    """Build DiffFilters from keyword options, dropping unset ones.

    Raises:
        TypeError: On an unknown filter name
    """
    return DiffFilters(**{key: value for key, value in options.items() if value is not None})


def describe_scope(source_ref: str, target_ref: str, filters: DiffFilters) -> str:
    scope = f"Analyzing differences between {source_ref} and {target_ref}"
    if filters.is_empty:
        return scope

    lines = [scope + " with filters:"]
    if filters.commit:
        lines.append(f"  - Commit: {filters.commit}")
    if filters.from_commit or filters.to_commit:
        lines.append(
            f"  - Commit range: {filters.from_commit or 'start'} to {filters.to_commit or 'end'}"
        )
    if filters.since or filters.until:
        lines.append(f"  - Date range: {filters.since or 'start'} to {filters.until or 'now'}")
    if filters.author:
        lines.append(f"  - Author: {filters.author}")
    if filters.file or filters.files:
        lines.append(f"  - Files: {filters.files or filters.file}")
    if filters.exclude:
        lines.append(f"  - Excluding: {filters.exclude}")
    return "\n".join(lines)


class ChangeAnalyzer:
    """Analyze what a source ref changes relative to a target ref.

    Args:
        source: Revision collaborator to read refs, diffs and logs from
        config: Analysis configuration (defaults when omitted)
    """

    def __init__(self, source: RevisionSource, config: Optional[AnalysisConfig] = None):
        self.source = source
        self.config = config or AnalysisConfig()
        self.classifier = ContentClassifier(self.config.method_exclude_keywords)
        self.static_analyzer = StaticAnalyzer(self.config.thresholds)

    def analyze_branch_diff(
        self,
        source_ref: str,
        target_ref: str,
        filters: Optional[DiffFilters] = None,
    ) -> AnalysisResult:
        """Run the full pipeline.

        Either every step completes or the call raises; there is no partial
        result.

        Raises:
            RepositoryAccessError: If a ref cannot be resolved, or the diff or
                commit log cannot be enumerated
        """
        filters = filters or DiffFilters()
        logger.info(describe_scope(source_ref, target_ref, filters))

        self.source.resolve_ref(source_ref)
        self.source.resolve_ref(target_ref)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            commits_future = executor.submit(
                self._collect_commits, source_ref, target_ref, filters
            )
            summary_future = executor.submit(
                self.source.diff_summary, target_ref, source_ref, filters
            )
            changed = self.source.diff_files(target_ref, source_ref, filters)
            logger.debug("%d changed file(s) to analyze", len(changed))

            records = list(
                executor.map(
                    lambda changed_file: self._process_file(changed_file, source_ref, target_ref),
                    changed,
                )
            )
            diff_summary = summary_future.result()
            commits = commits_future.result()

        summary = AnalysisSummary(
            source_ref=source_ref,
            target_ref=target_ref,
            files_changed=diff_summary.files_changed,
            insertions=diff_summary.insertions,
            deletions=diff_summary.deletions,
            commits=len(commits),
            analyzed_at=datetime.now(timezone.utc).isoformat(),
            filters=filters.as_dict() or None,
        )

        thresholds = self.config.thresholds
        return AnalysisResult(
            summary=summary,
            files=tuple(records),
            commits=aggregate_commits(commits, thresholds),
            insights=tuple(generate_insights(diff_summary, changed, thresholds)),
            metrics=calculate_rollup(records, thresholds),
        )

    # ── Commits ──────────────────────────────────────────────────

    def _collect_commits(
        self, source_ref: str, target_ref: str, filters: DiffFilters
    ) -> list[CommitInfo]:
        limit = self.config.commit_log_limit
        source_commits = self.source.commit_log(source_ref, filters, limit)
        # Unfiltered: only the hashes matter on this side
        target_commits = self.source.commit_log(target_ref, None, limit)
        return unique_commits(source_commits, target_commits, filters.commit)

    # ── Files ────────────────────────────────────────────────────

    def _process_file(
        self, changed: ChangedFile, source_ref: str, target_ref: str
    ) -> FileChangeRecord:
        status = ChangeStatus(changed.status)
        language = detect_language(changed.path)
        try:
            return self._build_record(changed, status, language, source_ref, target_ref)
        except ContentUnavailableError as e:
            logger.warning("Degrading %s (%s): %s", changed.path, status.value, e)
            record_type = RECORD_TYPES[status]
            if status is ChangeStatus.RENAMED:
                return record_type(path=changed.path, language=language, old_path=changed.old_path)
            return record_type(path=changed.path, language=language)

    def _build_record(
        self,
        changed: ChangedFile,
        status: ChangeStatus,
        language: str,
        source_ref: str,
        target_ref: str,
    ) -> FileChangeRecord:
        path = changed.path
        file_diff = self.source.file_diff(target_ref, source_ref, path)
        common = dict(
            path=path,
            language=language,
            additions=file_diff.additions,
            deletions=file_diff.deletions,
            diff=file_diff.text,
        )

        if status is ChangeStatus.RENAMED:
            return RenamedFile(old_path=changed.old_path, **common)

        if status is ChangeStatus.DELETED:
            content = self.source.file_content_at(target_ref, path)
            snapshot = self.classifier.analyze(path, content, language) if content else None
            return DeletedFile(snapshot=snapshot, **common)

        if status is ChangeStatus.ADDED:
            content = self.source.file_content_at(source_ref, path)
            if not content:
                return AddedFile(**common)
            return AddedFile(
                snapshot=self.classifier.analyze(path, content, language),
                static_analysis=self._static_analysis(content, language),
                **common,
            )

        target_content = self.source.file_content_at(target_ref, path)
        source_content = self.source.file_content_at(source_ref, path)

        snapshot = static_analysis = functional_changes = line_delta = None
        if target_content:
            snapshot = self.classifier.analyze(path, target_content, language)
            static_analysis = self._static_analysis(target_content, language)
        if source_content and target_content:
            old_snapshot = self.classifier.analyze(path, source_content, language)
            functional_changes = compute_functional_changes(old_snapshot, snapshot)
            line_delta = compute_line_delta(source_content, target_content)

        return ModifiedFile(
            snapshot=snapshot,
            static_analysis=static_analysis,
            functional_changes=functional_changes,
            line_delta=line_delta,
            **common,
        )

    def _static_analysis(self, content: str, language: str):
        if is_binary(content):
            logger.debug("Skipping static analysis of binary content")
            return None
        return self.static_analyzer.analyze(content, language)
