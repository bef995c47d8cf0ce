"""Rich terminal and JSON rendering of an AnalysisResult."""

import json

from rich.console import Console
from rich.table import Table

from ..analysis.models import StaticAnalysis
from ..changes.models import AnalysisResult, ModifiedFile
from ..serializers import serialize_result

_STATUS_STYLES = {
    "added": "green",
    "modified": "yellow",
    "deleted": "red",
    "renamed": "cyan",
}

_LEVEL_STYLES = {
    "high": "bold red",
    "medium": "yellow",
    "low": "dim",
}

_INSIGHT_STYLES = {
    "warning": "yellow",
    "info": "cyan",
    "attention": "magenta",
}


def output_json(result: AnalysisResult) -> None:
    print(json.dumps(serialize_result(result), indent=2))


def output_rich(console: Console, result: AnalysisResult, verbose: bool = False) -> None:
    summary = result.summary
    console.print()
    console.print(
        f"[bold]{summary.source_ref}[/bold] vs [bold]{summary.target_ref}[/bold]: "
        f"{summary.files_changed} files changed, "
        f"[green]+{summary.insertions}[/green] [red]-{summary.deletions}[/red], "
        f"{summary.commits} commits"
    )
    if summary.filters:
        applied = ", ".join(f"{k}={v}" for k, v in summary.filters.items())
        console.print(f"[dim]Filters: {applied}[/dim]")
    console.print()

    if result.files:
        _print_files(console, result, verbose)
    else:
        console.print("[dim]No changed files.[/dim]")

    _print_commits(console, result)
    _print_insights(console, result)
    _print_metrics(console, result)


def _print_files(console: Console, result: AnalysisResult, verbose: bool) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("Status", width=9)
    table.add_column("File", style="bold", no_wrap=False, ratio=3)
    table.add_column("+/-", justify="right")
    table.add_column("Complexity", justify="right")
    table.add_column("Grade", justify="center")
    table.add_column("Impact", justify="right")

    for record in result.files:
        status = record.status.value
        impact = record.impact
        analysis = getattr(record, "static_analysis", None)
        if isinstance(analysis, StaticAnalysis):
            complexity = str(analysis.complexity.cyclomatic)
            grade = analysis.quality.grade
        else:
            complexity = grade = "-"

        style = _STATUS_STYLES.get(status, "")
        level_style = _LEVEL_STYLES[impact.level]
        table.add_row(
            f"[{style}]{status}[/{style}]",
            record.path,
            f"+{record.additions} -{record.deletions}",
            complexity,
            grade,
            f"[{level_style}]{impact.score} {impact.level}[/{level_style}]",
        )

    console.print(table)

    if verbose:
        for record in result.files:
            if isinstance(record, ModifiedFile) and record.functional_changes:
                _print_functional_changes(console, record)


def _print_functional_changes(console: Console, record: ModifiedFile) -> None:
    changes = record.functional_changes
    if changes is None or changes.is_empty:
        return
    console.print(f"\n[bold]{record.path}[/bold]")
    for label, names in (
        ("functions +", changes.added_functions),
        ("functions -", changes.removed_functions),
        ("classes +", changes.added_classes),
        ("classes -", changes.removed_classes),
        ("dependencies +", changes.added_dependencies),
        ("dependencies -", changes.removed_dependencies),
    ):
        if names:
            console.print(f"  {label} {', '.join(names)}")
    if changes.complexity_delta:
        console.print(f"  complexity {changes.complexity_delta:+d}")
    if changes.purpose_change:
        console.print(
            f"  purpose {', '.join(changes.purpose_change.from_purposes)} "
            f"-> {', '.join(changes.purpose_change.to_purposes)}"
        )


def _print_commits(console: Console, result: AnalysisResult) -> None:
    commits = result.commits
    if not commits.total:
        return
    console.print()
    by_type = ", ".join(
        f"{name} {count}"
        for name, count in sorted(commits.by_type.items(), key=lambda item: -item[1])
    )
    console.print(f"[bold]Commits[/bold] ({commits.total}): {by_type}")
    for author, stats in commits.by_author.items():
        console.print(f"  {author}: {stats.count}", highlight=False)
    for pattern in commits.patterns:
        console.print(f"  [dim]{pattern.description} ({pattern.ratio:.0%})[/dim]")


def _print_insights(console: Console, result: AnalysisResult) -> None:
    if not result.insights:
        return
    console.print()
    for insight in result.insights:
        style = _INSIGHT_STYLES.get(insight.kind, "")
        console.print(f"[{style}]{insight.kind.upper()}[/{style}] {insight.message}")
        if insight.detail:
            console.print(f"  [dim]{insight.detail}[/dim]")


def _print_metrics(console: Console, result: AnalysisResult) -> None:
    metrics = result.metrics
    console.print()
    console.print(
        f"Complexity total {metrics.complexity.total}, "
        f"average {metrics.complexity.average:.1f}, "
        f"{metrics.complexity.high} high"
    )
    issues = ", ".join(f"{k} {v}" for k, v in metrics.issues.items() if v)
    console.print(f"Issues: {issues or 'none'}")
    coverage = metrics.coverage
    console.print(f"Test files {coverage.test_files}, source files {coverage.source_files}")
