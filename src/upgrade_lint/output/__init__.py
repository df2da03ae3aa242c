"""Report renderers."""

from typing import TextIO

from .formats import OutputFormat, parse_output_format
from .report import Report, VersionInfo
from .structured import build_structured_report, render_json, render_yaml
from .table import print_version_info, render_table


def render(out: TextIO, report: Report, output_format: OutputFormat) -> None:
    """Render a report in the requested format."""
    if output_format is OutputFormat.JSON:
        render_json(out, report)
    elif output_format is OutputFormat.YAML:
        render_yaml(out, report)
    else:
        render_table(out, report)


__all__ = [
    "OutputFormat",
    "Report",
    "VersionInfo",
    "build_structured_report",
    "parse_output_format",
    "print_version_info",
    "render",
    "render_json",
    "render_table",
    "render_yaml",
]
