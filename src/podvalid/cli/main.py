#!/usr/bin/env python3
"""
PODVALID CLI
------------
Command-line wrapper around the validation engine: parses arguments,
validates a manifest file (or every manifest in a directory), prints one
line per diagnostic and maps the outcome to an exit status.

    0  every manifest is valid
    1  diagnostics were reported, or a file could not be read or parsed
    2  bad command-line usage (argparse)

Author: PodValid Team
Date: 2026-10-16
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from podvalid.cli.formatter import DiagnosticFormatter
from podvalid.core.engine import DEFAULT_EXTENSIONS, ValidationEngine

__version__ = "1.0.0"

logger = logging.getLogger("podvalid.cli")

# Diagnostics own stdout; logs, progress and the summary use stderr
err_console = Console(stderr=True)


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


class PodValidCLI:
    """
    Translates command-line arguments into engine calls and renders results.
    """

    def __init__(self):
        """Initializes the CLI and sets up the argument parser."""
        self.parser = argparse.ArgumentParser(
            prog="podvalid",
            description="PodValid - Pod manifest schema validator",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-V", "--version", action="version", version=f"podvalid v{__version__}")
        self.parser.add_argument("path", help="Path to a manifest file or a directory of manifests")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
        self.parser.add_argument("--ext", action="append", default=None,
                                 help="File extension to scan in directories, repeatable (default: .yaml, .yml)")
        self.parser.add_argument("--max-depth", type=int, default=10,
                                 help="Maximum directory depth when scanning (default: 10)")
        self.parser.add_argument("--no-summary", action="store_true",
                                 help="Do not print the summary table after a directory scan")
        self.parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit status."""
        args = self.parser.parse_args(argv)
        configure_logging(args.verbose)

        engine = ValidationEngine(extensions=args.ext or DEFAULT_EXTENSIONS, max_depth=args.max_depth)
        formatter = DiagnosticFormatter(show_summary=not args.no_summary, color=not args.no_color)

        target = Path(args.path)
        logger.debug(f"Validating {target.resolve()}")

        if target.is_dir():
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(bar_width=40),
                TaskProgressColumn(),
                console=err_console,
                transient=True,
                disable=not err_console.is_terminal,
            ) as progress:
                task_id = progress.add_task("Validating manifests...", total=None)
                reports = engine.validate_path(
                    target,
                    progress_callback=lambda done, total: progress.update(task_id, completed=done, total=total),
                )
            if not reports:
                err_console.print(f"[bold yellow]No manifest files found in '{escape(str(target))}'.[/bold yellow]")
        else:
            reports = engine.validate_path(target)

        for report in reports:
            formatter.print_report(report)
        formatter.print_summary(reports, engine.generate_summary(reports))

        return 0 if all(r.success for r in reports) else 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(PodValidCLI().run())
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
