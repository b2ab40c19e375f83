#!/usr/bin/env python3
"""
PODVALID ENGINE - The Orchestrator
----------------------------------
Drives manifests from disk through the loader and the validator. Each
file produces a FileReport; read and parse failures are captured in the
report rather than aborting a batch.

Author: PodValid Team
Date: 2026-10-16
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from podvalid.core.models import Diagnostic
from podvalid.exceptions import ManifestParseError, ManifestReadError
from podvalid.parsing.loader import ManifestLoader
from podvalid.validator.validator import PodValidator

logger = logging.getLogger("podvalid.engine")

DEFAULT_EXTENSIONS = (".yaml", ".yml")

STATUS_VALID = "VALID"
STATUS_INVALID = "INVALID"
STATUS_READ_ERROR = "READ_ERROR"
STATUS_PARSE_ERROR = "PARSE_ERROR"


@dataclass
class FileReport:
    """Outcome of validating one manifest file."""
    file_path: str                 # Path as given / discovered
    display_name: str              # Name used when printing diagnostics
    status: str = STATUS_VALID
    diagnostics: List[Diagnostic] = field(default_factory=list)
    error: Optional[str] = None    # Read/parse failure text, if any

    @property
    def success(self) -> bool:
        return self.status == STATUS_VALID


class ValidationEngine:
    """
    Coordinates loading and validation for single files and directory trees.
    """

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS, max_depth: int = 10):
        self.extensions = tuple(ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions)
        try:
            self.max_depth = int(max_depth)
        except (ValueError, TypeError):
            logger.warning(f"Invalid max_depth '{max_depth}'. Falling back to default: 10")
            self.max_depth = 10

        self.loader = ManifestLoader()
        self.validator = PodValidator()

    def validate_file(self, path: Union[str, Path], display_name: Optional[str] = None) -> FileReport:
        """
        Reads, parses and validates one manifest. Never raises for a bad file.
        """
        path = Path(path)
        report = FileReport(file_path=str(path), display_name=display_name or path.name)

        try:
            root = self.loader.load_file(path)
        except ManifestReadError as e:
            logger.info(f"Cannot read {path}: {e.reason}")
            report.status = STATUS_READ_ERROR
            report.error = e.reason
            return report
        except ManifestParseError as e:
            logger.info(f"Cannot parse {path}: {e.reason}")
            report.status = STATUS_PARSE_ERROR
            report.error = e.reason
            return report

        report.diagnostics = self.validator.validate(root)
        if report.diagnostics:
            report.status = STATUS_INVALID
        logger.debug(f"{path}: {report.status} ({len(report.diagnostics)} diagnostic(s))")
        return report

    def scan_directory(self, root: Union[str, Path]) -> List[Path]:
        """
        Recursively discovers manifest files below ``root``.
        Symlinks are skipped to avoid loops; files nested deeper than
        max_depth are ignored. Results are sorted for stable output.
        """
        root = Path(root)
        found = []
        for candidate in root.rglob("*"):
            if candidate.is_symlink() or not candidate.is_file():
                continue
            if candidate.suffix.lower() not in self.extensions:
                continue
            if len(candidate.relative_to(root).parts) > self.max_depth:
                logger.debug(f"Skipping {candidate}: deeper than max_depth={self.max_depth}")
                continue
            found.append(candidate)
        return sorted(found)

    def collect_targets(self, path: Union[str, Path]) -> List[Path]:
        """A file is its own target; a directory expands to its manifests."""
        path = Path(path)
        if path.is_dir():
            return self.scan_directory(path)
        return [path]

    def validate_path(self, path: Union[str, Path],
                      progress_callback: Optional[Callable[[int, int], None]] = None) -> List[FileReport]:
        """
        Validates a single file or every manifest in a directory tree.
        Directory members are reported under their path relative to ``path``.
        """
        path = Path(path)
        is_dir = path.is_dir()
        targets = self.collect_targets(path)
        reports = []
        for index, target in enumerate(targets, 1):
            display_name = str(target.relative_to(path)) if is_dir else None
            reports.append(self.validate_file(target, display_name=display_name))
            if progress_callback:
                progress_callback(index, len(targets))
        return reports

    def generate_summary(self, reports: List[FileReport]) -> Dict[str, Any]:
        """Aggregate counts for the end-of-run table."""
        return {
            "total_files": len(reports),
            "valid": sum(1 for r in reports if r.status == STATUS_VALID),
            "invalid": sum(1 for r in reports if r.status == STATUS_INVALID),
            "errors": sum(1 for r in reports if r.status in (STATUS_READ_ERROR, STATUS_PARSE_ERROR)),
            "diagnostics": sum(len(r.diagnostics) for r in reports),
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }
