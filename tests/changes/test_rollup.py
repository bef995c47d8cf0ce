"""Tests for the repository-level metrics rollup."""

import pytest

from diff_insight.analysis import StaticAnalyzer
from diff_insight.analysis.models import StaticAnalysisError
from diff_insight.changes import AddedFile, DeletedFile, ModifiedFile, RenamedFile, calculate_rollup
from diff_insight.changes.rollup import is_test_path


def _analyzed(path, content):
    return AddedFile(path=path, static_analysis=StaticAnalyzer().analyze(content, "javascript"))


class TestComplexity:
    def test_average_counts_records_without_analysis(self):
        files = [
            _analyzed("src/a.js", "if (a) {}\nif (b) {}"),  # 3
            DeletedFile(path="src/old.js"),
            RenamedFile(path="src/new.js", old_path="src/prev.js"),
        ]
        rollup = calculate_rollup(files)
        assert rollup.complexity.total == 3
        assert rollup.complexity.average == pytest.approx(1.0)
        assert rollup.complexity.high == 0

    def test_high_complexity_count(self):
        busy = "\n".join(f"if (x{i}) {{}}" for i in range(12))
        rollup = calculate_rollup([_analyzed("src/a.js", busy), _analyzed("src/b.js", "const a = 1;")])
        assert rollup.complexity.high == 1
        assert rollup.complexity.total == 14

    def test_error_marker_counts_as_zero(self):
        record = ModifiedFile(path="src/a.js", static_analysis=StaticAnalysisError(error="No content to analyze"))
        rollup = calculate_rollup([record])
        assert rollup.complexity.total == 0
        assert rollup.complexity.average == 0.0

    def test_no_files(self):
        rollup = calculate_rollup([])
        assert rollup.complexity.total == 0
        assert rollup.complexity.average == 0.0
        assert rollup.coverage.has_tests is False


class TestIssues:
    def test_summed_per_category(self):
        files = [
            _analyzed("src/a.js", "eval(x);"),
            _analyzed("src/b.js", "console.log(1);\neval(y);"),
        ]
        issues = calculate_rollup(files).issues
        assert issues == {"bugs": 1, "security": 2, "performance": 0, "style": 0, "maintenance": 0}


class TestCoverage:
    def test_split(self):
        files = [
            AddedFile(path="src/a.js"),
            AddedFile(path="src/a.spec.js"),
            ModifiedFile(path="tests/test_b.py"),
        ]
        coverage = calculate_rollup(files).coverage
        assert coverage.test_files == 2
        assert coverage.source_files == 1
        assert coverage.has_tests is True

    @pytest.mark.parametrize(
        "path, expected",
        [("src/a.test.js", True), ("spec/helper.rb", True), ("src/latest.js", True), ("src/a.js", False)],
    )
    def test_is_test_path(self, path, expected):
        assert is_test_path(path) is expected
