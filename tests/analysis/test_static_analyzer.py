"""Tests for static metrics, issue rules and quality scoring."""

import pytest

from diff_insight.analysis import (
    StaticAnalysis,
    StaticAnalysisError,
    StaticAnalyzer,
    get_language_profile,
    grade_for,
)
from diff_insight.analysis.models import CodeMetrics, ComplexityMetrics
from diff_insight.analysis.static_analyzer import (
    calculate_metrics,
    cognitive_complexity,
    cyclomatic_complexity,
    halstead_metrics,
    max_nesting,
)
from diff_insight.config import ThresholdConfig
from diff_insight.exceptions import UnrecognizedLanguageError


def _issue_types(issues):
    return [issue.type for issue in issues]


class TestAnalyze:
    def test_empty_content_is_an_error_marker(self):
        analyzer = StaticAnalyzer()
        assert analyzer.analyze("", "javascript") == StaticAnalysisError(error="No content to analyze")
        assert analyzer.analyze(None, "javascript") == StaticAnalysisError(error="No content to analyze")

    def test_full_analysis(self):
        result = StaticAnalyzer().analyze("// entry\nfunction main() {\n  return 1;\n}", "javascript")
        assert isinstance(result, StaticAnalysis)
        assert result.language == "javascript"
        assert result.structure.functions == ("main",)
        assert result.quality.score == 100
        assert result.quality.grade == "A"

    def test_unknown_language_uses_generic_table(self):
        result = StaticAnalyzer().analyze("if (x == null) {}", "ruby")
        assert result.language == "ruby"
        assert _issue_types(result.issues.bugs) == ["null-comparison"]

    def test_strict_lookup_raises(self):
        with pytest.raises(UnrecognizedLanguageError) as exc_info:
            get_language_profile("ruby", strict=True)
        assert exc_info.value.language == "ruby"
        assert "python" in exc_info.value.supported_languages


class TestLineMetrics:
    def test_counts(self):
        metrics = calculate_metrics("// c\nconst a = 1;\n\nconst b = 2;")
        assert metrics.total_lines == 4
        assert metrics.blank_lines == 1
        assert metrics.comment_lines == 1
        assert metrics.code_lines == 2
        assert metrics.average_line_length == 9
        assert metrics.longest_line == 12

    def test_comment_ratio_without_code(self):
        metrics = calculate_metrics("# only a comment")
        assert metrics.code_lines == 0
        assert metrics.comment_ratio == 1.0


class TestComplexity:
    def test_cyclomatic(self):
        # two if, one else-if, one &&
        assert cyclomatic_complexity("if (a && b) { x(); } else if (c) { y(); }") == 5

    def test_cyclomatic_minimum(self):
        assert cyclomatic_complexity("const a = 1;") == 1

    def test_cognitive(self):
        content = "if (a) {\n  return b && c;\n}"
        assert cognitive_complexity(content) == 3

    def test_cognitive_jumps_and_catch(self):
        content = "try {\n} catch (e) {\n  break;\n}"
        # catch +1, break +1
        assert cognitive_complexity(content) == 2

    def test_nesting(self):
        assert max_nesting("f(a[0], {b: (c)})") == 3

    def test_unbalanced_closers_floor_at_zero(self):
        assert max_nesting(")))(") == 1

    def test_halstead(self):
        halstead = halstead_metrics("a = b + 1")
        assert halstead.vocabulary == 5
        assert halstead.length == 5
        assert halstead.volume == 12
        assert halstead.difficulty == 1.0
        assert halstead.effort == 12

    def test_halstead_empty(self):
        halstead = halstead_metrics("")
        assert halstead.vocabulary == 0
        assert halstead.volume == 0
        assert halstead.difficulty == 0.0


class TestGrades:
    @pytest.mark.parametrize(
        "score, grade",
        [(100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"), (69, "D"), (60, "D"), (59, "F"), (0, "F")],
    )
    def test_breakpoints(self, score, grade):
        assert grade_for(score) == grade


class TestQuality:
    def test_documented_simple_file(self):
        quality = StaticAnalyzer().assess_quality(
            CodeMetrics(total_lines=10, code_lines=9, comment_lines=1), ComplexityMetrics()
        )
        assert quality.score == 100
        assert quality.factors == {
            "complexity": "good",
            "size": "good",
            "documentation": "adequate",
        }

    def test_undocumented(self):
        quality = StaticAnalyzer().assess_quality(
            CodeMetrics(total_lines=10, code_lines=10), ComplexityMetrics()
        )
        assert quality.score == 95
        assert quality.factors["documentation"] == "insufficient"

    def test_complexity_above_threshold(self):
        quality = StaticAnalyzer().assess_quality(
            CodeMetrics(total_lines=10, code_lines=10), ComplexityMetrics(cyclomatic=12)
        )
        assert quality.score == 85
        assert quality.grade == "B"
        assert quality.factors["complexity"] == "needs-improvement"

    def test_complexity_above_twice_threshold(self):
        quality = StaticAnalyzer().assess_quality(
            CodeMetrics(total_lines=10, code_lines=10), ComplexityMetrics(cyclomatic=22)
        )
        assert quality.score == 75
        assert quality.grade == "C"

    def test_size_and_nesting(self):
        quality = StaticAnalyzer().assess_quality(
            CodeMetrics(total_lines=1200, code_lines=1000, comment_lines=200),
            ComplexityMetrics(nesting=6),
        )
        assert quality.score == 80
        assert quality.factors["size"] == "large"

    def test_thresholds_are_configurable(self):
        analyzer = StaticAnalyzer(ThresholdConfig(high_complexity=20))
        quality = analyzer.assess_quality(
            CodeMetrics(total_lines=10, code_lines=10), ComplexityMetrics(cyclomatic=12)
        )
        assert quality.score == 95


class TestIssues:
    def test_javascript_bug_risks(self):
        content = "if (x == null) { console.log(x); }\n// TODO fix"
        result = StaticAnalyzer().analyze(content, "javascript")
        assert _issue_types(result.issues.bugs) == ["null-comparison", "debug-statement", "todo-comment"]
        assert result.issues.bugs[2].severity == "info"

    def test_strict_null_comparison_is_fine(self):
        result = StaticAnalyzer().analyze("if (x === null) {}", "javascript")
        assert result.issues.bugs == ()

    def test_python_bug_risks(self):
        result = StaticAnalyzer().analyze("if x == None:\n    pass\nprint(x)\n", "python")
        assert _issue_types(result.issues.bugs) == ["null-comparison", "debug-statement"]

    def test_security(self):
        content = "el.innerHTML = html;\nconst password = \"hunter2\";\neval(code);"
        result = StaticAnalyzer().analyze(content, "javascript")
        assert _issue_types(result.issues.security) == ["eval-usage", "innerHTML", "hardcoded-secret"]
        assert [i.severity for i in result.issues.security] == ["high", "medium", "critical"]

    def test_evaluate_is_not_eval(self):
        result = StaticAnalyzer().analyze("evaluate(x);", "javascript")
        assert result.issues.security == ()

    def test_nested_loops_only_where_performance_rules_apply(self):
        content = "for (i = 0; i < n; i++) { for (j = 0; j < n; j++) {} }"
        js = StaticAnalyzer().analyze(content, "javascript")
        java = StaticAnalyzer().analyze(content, "java")
        assert _issue_types(js.issues.performance) == ["nested-loops"]
        assert java.issues.performance == ()

    def test_for_each_needs_large_content(self):
        small = StaticAnalyzer().analyze("items.forEach(f);", "javascript")
        large = StaticAnalyzer().analyze("items.forEach(f);\n" + "// pad\n" * 200, "javascript")
        assert small.issues.performance == ()
        assert _issue_types(large.issues.performance) == ["forEach-usage"]

    def test_style(self):
        content = "var a = 1;\n" + "x" * 121
        result = StaticAnalyzer().analyze(content, "javascript")
        long_lines, var_usage = result.issues.style
        assert long_lines.type == "long-lines"
        assert long_lines.value == 1
        assert long_lines.message == "1 lines exceed 120 characters"
        assert var_usage.type == "var-usage"

    def test_maintenance(self):
        content = "\n".join(f"if (a{i}) {{}}" for i in range(11))
        result = StaticAnalyzer().analyze(content, "javascript")
        assert _issue_types(result.issues.maintenance) == ["high-complexity"]
        assert result.issues.maintenance[0].value == 12

    def test_counts(self):
        result = StaticAnalyzer().analyze("eval(x); console.log(1);", "javascript")
        assert result.issues.counts() == {
            "bugs": 1,
            "security": 1,
            "performance": 0,
            "style": 0,
            "maintenance": 0,
        }
        assert result.issues.total == 2


class TestStructure:
    def test_python(self):
        content = "import os\nfrom pathlib import Path\n\nclass Loader:\n    def load(self):\n        pass\n"
        result = StaticAnalyzer().analyze(content, "python")
        assert result.structure.functions == ("load",)
        assert result.structure.classes == ("Loader",)
        assert result.structure.imports == ("os", "pathlib")

    def test_typescript(self):
        content = (
            "import { x } from 'lib';\n"
            "export interface Props {}\n"
            "export type Id = string;\n"
            "export const handler = async (e) => e;\n"
        )
        result = StaticAnalyzer().analyze(content, "typescript")
        assert result.structure.imports == ("lib",)
        assert result.structure.interfaces == ("Props",)
        assert result.structure.types == ("Id",)
        assert result.structure.functions == ("handler",)
        assert result.structure.exports == ("Props", "Id", "handler")
