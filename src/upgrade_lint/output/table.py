"""Human-readable table report rendered with rich."""

from typing import TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..check.aggregate import collect_rows
from ..check.result import Impact
from ..check.verbose import DefaultVerboseFormatter, formatter_for
from .report import Report, VersionInfo

TABLE_HEADERS = ("STATUS", "KIND", "GROUP", "CHECK", "IMPACT", "MESSAGE")

STATUS_SYMBOLS = {
    Impact.NONE: Text("✓", style="green"),
    Impact.ADVISORY: Text("⚠", style="yellow"),
    Impact.BLOCKING: Text("✗", style="red"),
}

IMPACT_STYLES = {
    Impact.NONE: "cyan",
    Impact.ADVISORY: "bold yellow",
    Impact.BLOCKING: "red",
}

VERDICT_LINES = {
    Impact.BLOCKING: (
        "Result: FAIL - blocking issues must be resolved before upgrading",
        "bold red",
    ),
    Impact.ADVISORY: (
        "Result: PASS WITH WARNINGS - review advisory findings before upgrading",
        "bold yellow",
    ),
    Impact.NONE: ("Result: PASS - no upgrade blockers found", "bold green"),
}


def print_version_info(console: Console, versions: VersionInfo) -> None:
    """Print the installed/target/OpenShift version header."""
    lines = [
        ("Current version", versions.current),
        ("Target version", versions.target),
        ("OpenShift version", versions.openshift),
    ]
    for label, value in lines:
        if value:
            console.print(Text(f"{label + ':':<19}{value}"))


def build_table(report: Report) -> Table:
    """One row per condition, in display order."""
    table = Table(show_header=True, header_style="bold", show_lines=False)
    for header in TABLE_HEADERS:
        table.add_column(header, overflow="fold")

    for row in collect_rows(report.executions):
        table.add_row(
            STATUS_SYMBOLS[row.impact],
            Text(row.kind),
            Text(row.group),
            Text(row.check_type),
            Text(row.impact.value, style=IMPACT_STYLES[row.impact]),
            Text(row.condition.message),
        )
    return table


def write_impacted_objects(out: TextIO, report: Report) -> None:
    """Impacted objects per check, using each check's own formatter if it has one."""
    default = DefaultVerboseFormatter(report.namespace_requesters)
    printed = False

    for execution in report.executions:
        result = execution.result
        if not result.impacted_objects:
            continue

        out.write("\n")
        if not printed:
            out.write("Impacted Objects:\n")
            printed = True

        out.write(f"  {result.group} / {result.kind} / {result.name}:\n")
        formatter_for(execution.check, default).format_verbose_output(out, result)


def render_table(out: TextIO, report: Report, width: int | None = None) -> None:
    """Render the full table report.

    Args:
        out: Destination stream
        report: The finished run
        width: Console width; rich detects it when None
    """
    console = Console(file=out, width=width, highlight=False, soft_wrap=False)

    console.print()
    print_version_info(console, report.versions)
    console.print()
    console.print(build_table(report))

    summary = report.summary
    console.print()
    console.print("Summary:")
    console.print(
        Text(
            f"  Total: {summary.total} | Passed: {summary.passed} | "
            f"Warnings: {summary.warnings} | Failed: {summary.failed}"
        )
    )

    if report.verbose:
        write_impacted_objects(out, report)

    line, style = VERDICT_LINES[report.verdict]
    console.print()
    console.print(Text(line, style=style))
