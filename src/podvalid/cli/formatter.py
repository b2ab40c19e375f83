# src/podvalid/cli/formatter.py
import sys
from typing import Dict, List, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from podvalid.core.engine import STATUS_PARSE_ERROR, STATUS_READ_ERROR, FileReport
from podvalid.core.models import Diagnostic


def format_diagnostic(name: str, diagnostic: Diagnostic) -> str:
    """'pod.yaml:12 image has invalid format ...' or 'pod.yaml: kind is required'."""
    if diagnostic.has_line:
        return f"{name}:{diagnostic.line} {diagnostic.message}"
    return f"{name}: {diagnostic.message}"


def format_file_error(report: FileReport) -> str:
    if report.status == STATUS_READ_ERROR:
        return f"cannot read file '{report.file_path}': {report.error}"
    return f"{report.display_name}: cannot unmarshal yaml: {report.error}"


def report_lines(report: FileReport) -> List[str]:
    if report.status in (STATUS_READ_ERROR, STATUS_PARSE_ERROR):
        return [format_file_error(report)]
    return [format_diagnostic(report.display_name, d) for d in report.diagnostics]


class DiagnosticFormatter:
    """
    DiagnosticFormatter: the output side of the CLI.
    Report lines go to stdout verbatim; the summary table is decoration
    for multi-file runs only.
    """

    def __init__(self, show_summary: bool = True, color: bool = True,
                 stream: TextIO = None, summary_console: Console = None):
        self.show_summary = show_summary
        # Report lines are written byte for byte, tabs and control characters included
        self.stream = stream
        # The table goes to stderr so stdout carries report lines only
        self.summary_console = summary_console or Console(stderr=True, no_color=not color)

    def print_report(self, report: FileReport):
        for line in report_lines(report):
            print(line, file=self.stream or sys.stdout)

    def print_summary(self, reports: List[FileReport], summary: Dict):
        """
        Builds the summary table shown at the end of a directory scan.
        """
        if not self.show_summary or len(reports) < 2:
            return

        table = Table(title="PodValid Report", show_header=True, header_style="bold magenta")
        table.add_column("File Path", style="dim")
        table.add_column("Status")
        table.add_column("Diagnostics", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            table.add_row(escape(r.display_name), r.status, str(len(r.diagnostics)), "✅" if r.success else "❌")

        self.summary_console.print(table)
        self.summary_console.print(
            f"Total Files: {summary['total_files']}  "
            f"Valid: [green]{summary['valid']}[/green]  "
            f"Invalid: [red]{summary['invalid']}[/red]  "
            f"Errors: [red]{summary['errors']}[/red]"
        )
