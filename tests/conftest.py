"""Shared test fixtures for diff-insight."""

import shutil
import subprocess
from pathlib import Path

import pytest

from diff_insight.exceptions import ContentUnavailableError, RepositoryAccessError
from diff_insight.revision import RevisionSource
from diff_insight.revision.filters import apply_commit_filters, exclude_files
from diff_insight.revision.models import CommitInfo, DiffSummary, FileDiff


class FakeRevisionSource(RevisionSource):
    """In-memory revision source.

    contents maps (ref, path) to text; unavailable paths raise
    ContentUnavailableError from every per-file fetch.
    """

    def __init__(
        self,
        changed=(),
        contents=None,
        diffs=None,
        commits=None,
        summary=None,
        refs=("feature", "main"),
        unavailable=(),
    ):
        self.changed = list(changed)
        self.contents = contents or {}
        self.diffs = diffs or {}
        self.commits = commits or {}
        self.summary = summary or DiffSummary(files_changed=len(self.changed))
        self.refs = set(refs)
        self.unavailable = set(unavailable)
        self.fail_diff_files = False
        self.fail_summary = False
        self.fail_commit_log = False
        self.content_requests = []

    def resolve_ref(self, ref):
        if ref not in self.refs:
            raise RepositoryAccessError("unknown revision", ref=ref)
        return f"sha-{ref}"

    def list_branches(self):
        return sorted(self.refs)

    def diff_summary(self, target_ref, source_ref, filters=None):
        if self.fail_summary:
            raise RepositoryAccessError("diff failed", command="diff --shortstat")
        return self.summary

    def diff_files(self, target_ref, source_ref, filters=None):
        if self.fail_diff_files:
            raise RepositoryAccessError("diff failed", command="diff --name-status")
        if filters is not None:
            return exclude_files(self.changed, filters.exclude_patterns)
        return list(self.changed)

    def file_diff(self, target_ref, source_ref, path):
        if path in self.unavailable:
            raise ContentUnavailableError(f"{target_ref}...{source_ref}", path, "fetch failed")
        return self.diffs.get(path, FileDiff(text=f"diff --git a/{path} b/{path}\n", additions=1))

    def file_content_at(self, ref, path):
        self.content_requests.append((ref, path))
        if path in self.unavailable:
            raise ContentUnavailableError(ref, path, "fetch failed")
        return self.contents.get((ref, path))

    def commit_log(self, ref, filters=None, limit=500):
        if self.fail_commit_log:
            raise RepositoryAccessError("log failed", ref=ref, command="log")
        return apply_commit_filters(self.commits.get(ref, [])[:limit], filters)


@pytest.fixture
def make_source():
    """Factory for FakeRevisionSource."""
    return FakeRevisionSource


def make_commit(hash_, message, author="Alice", date="2024-01-01T00:00:00+00:00"):
    return CommitInfo(
        hash=hash_,
        abbrev_hash=hash_[:7],
        author=author,
        date=date,
        message=message,
    )


@pytest.fixture
def commit_factory():
    return make_commit


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo), *args], capture_output=True, text=True, check=True
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """Throwaway repository with ``main`` and a ``feature`` branch.

    feature relative to main:
        a.js  modified (gains a function and a dependency)
        b.js  added
        c.js  deleted
        d.js  renamed to e.js
    """
    if shutil.which("git") is None:
        pytest.skip("git not found")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "commit.gpgsign", "false")

    (repo / "a.js").write_text("function foo() {}\n")
    (repo / "c.js").write_text("const gone = 1;\n")
    (repo / "d.js").write_text("".join(f"const line{i} = {i};\n" for i in range(20)))
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "chore: initial import")

    _git(repo, "checkout", "-q", "-b", "feature")
    (repo / "a.js").write_text(
        "function foo() {}\nfunction bar() {}\nconst axios = require('axios');\n"
    )
    _git(repo, "commit", "-q", "-am", "feat: add bar")
    (repo / "b.js").write_text("export function added(x) {\n  if (x) {\n    return 1;\n  }\n}\n")
    _git(repo, "add", "b.js")
    _git(repo, "rm", "-q", "c.js")
    _git(repo, "mv", "d.js", "e.js")
    _git(repo, "commit", "-q", "-m", "fix(core): PROJ-12 shuffle files")
    _git(repo, "checkout", "-q", "main")

    return repo


@pytest.fixture
def unicode_repo(tmp_path):
    """Repository whose ``feature`` branch adds ``café.js`` and renames
    ``naïve.js`` into a directory with a space in its name."""
    if shutil.which("git") is None:
        pytest.skip("git not found")

    repo = tmp_path / "unicode"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "core.quotePath", "true")

    (repo / "naïve.js").write_text("".join(f"const line{i} = {i};\n" for i in range(20)))
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "chore: initial import")

    _git(repo, "checkout", "-q", "-b", "feature")
    (repo / "café.js").write_text("function brew() {}\n")
    (repo / "new dir").mkdir()
    _git(repo, "add", "café.js")
    _git(repo, "mv", "naïve.js", "new dir/résumé.js")
    _git(repo, "commit", "-q", "-m", "feat: add café")
    _git(repo, "checkout", "-q", "main")

    return repo
