"""Tests for branch-level insights."""

import pytest

from diff_insight.changes import detect_hotspots, generate_insights
from diff_insight.config import ThresholdConfig
from diff_insight.revision.models import ChangedFile, DiffSummary


def _files(*paths):
    return [ChangedFile(path=p, status="modified") for p in paths]


class TestSizeWarning:
    def test_above_threshold(self):
        insights = generate_insights(DiffSummary(files_changed=101, insertions=500), [])
        assert [i.category for i in insights] == ["size"]
        assert insights[0].kind == "warning"
        assert insights[0].detail.startswith("101 files modified.")

    def test_at_threshold(self):
        assert generate_insights(DiffSummary(files_changed=100, insertions=500), []) == []

    def test_threshold_is_configurable(self):
        insights = generate_insights(
            DiffSummary(files_changed=11, insertions=50), [], ThresholdConfig(size_warning_files=10)
        )
        assert [i.category for i in insights] == ["size"]


class TestRefactoring:
    def test_deletions_dominate(self):
        insights = generate_insights(DiffSummary(files_changed=3, insertions=100, deletions=201), [])
        assert [(i.kind, i.category) for i in insights] == [("info", "refactoring")]
        assert insights[0].detail == "Removed 201 lines while adding 100."

    def test_exactly_double_is_not_reported(self):
        assert generate_insights(DiffSummary(files_changed=3, insertions=100, deletions=200), []) == []

    def test_pure_deletion(self):
        insights = generate_insights(DiffSummary(files_changed=1, deletions=1), [])
        assert [i.category for i in insights] == ["refactoring"]


class TestHotspots:
    @pytest.mark.parametrize(
        "path",
        [
            "index.js",
            "src/main.ts",
            "app.tsx",
            "package.json",
            "frontend/yarn.lock",
            ".env.production",
            "config/database.yml",
            "src/database/pool.js",
            "lib/auth/session.js",
            "security.md",
            "services/payment.js",
        ],
    )
    def test_critical(self, path):
        assert detect_hotspots(_files(path)) == [path]

    @pytest.mark.parametrize("path", ["lib/index.js", "src/utils/format.js", "README.md"])
    def test_not_critical(self, path):
        assert detect_hotspots(_files(path)) == []

    def test_insight_lists_paths_in_order(self):
        files = _files("src/a.js", "package.json", "src/auth.js")
        insights = generate_insights(DiffSummary(files_changed=3, insertions=10), files)
        assert len(insights) == 1
        hotspot = insights[0]
        assert (hotspot.kind, hotspot.category) == ("attention", "hotspots")
        assert hotspot.paths == ("package.json", "src/auth.js")
        assert hotspot.detail == "Changes to critical files: package.json, src/auth.js"

    def test_order_of_insights(self):
        summary = DiffSummary(files_changed=150, insertions=1, deletions=10)
        insights = generate_insights(summary, _files("package.json"))
        assert [i.category for i in insights] == ["size", "refactoring", "hotspots"]
