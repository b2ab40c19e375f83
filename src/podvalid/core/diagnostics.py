#!/usr/bin/env python3
"""
PODVALID DIAGNOSTICS - The Ledger
---------------------------------
Factories for every diagnostic the engine can emit, plus the ordered,
append-only collector the field validators accumulate into.

Validation never raises for a rule violation: problems are recorded here
and the walk carries on with the next sibling field.

Author: PodValid Team
Date: 2026-10-16
"""

from typing import Iterable, Iterator, List, Optional

from podvalid.core.models import Diagnostic, DiagnosticKind


def required(field: str) -> Diagnostic:
    """A required field is absent; the position is unknown so line is 0."""
    return Diagnostic(0, f"{field} is required", DiagnosticKind.MISSING, field)


def empty_value(field: str, line: int) -> Diagnostic:
    """A required field is present but blank."""
    return Diagnostic(line, f"{field} is required", DiagnosticKind.MISSING, field)


def type_mismatch(field: str, expected: str, line: int) -> Diagnostic:
    return Diagnostic(line, f"{field} must be {expected}", DiagnosticKind.TYPE_MISMATCH, field)


def invalid_format(field: str, value: str, line: int) -> Diagnostic:
    return Diagnostic(line, f"{field} has invalid format '{value}'", DiagnosticKind.INVALID_FORMAT, field)


def unsupported(field: str, value: str, line: int) -> Diagnostic:
    return Diagnostic(line, f"{field} has unsupported value '{value}'", DiagnosticKind.UNSUPPORTED, field)


def out_of_range(field: str, line: int) -> Diagnostic:
    # The offending value is never echoed for range errors
    return Diagnostic(line, f"{field} value out of range", DiagnosticKind.OUT_OF_RANGE, field)


def empty_document() -> Diagnostic:
    return Diagnostic(0, "empty yaml document", DiagnosticKind.EMPTY)


class DiagnosticCollector:
    """
    Ordered, append-only sequence of diagnostics.

    ``add`` accepts None so leaf validator results can be passed straight
    through without an if-check at every call site.
    """

    def __init__(self):
        self._items: List[Diagnostic] = []

    def add(self, diagnostic: Optional[Diagnostic]) -> None:
        if diagnostic is not None:
            self._items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def as_list(self) -> List[Diagnostic]:
        return list(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
