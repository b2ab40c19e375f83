#!/usr/bin/env python3
"""
PODVALID CORE MODELS
--------------------
Defines the fundamental data structures used across the PodValid engine.
A manifest is held as a tree of immutable Nodes (the parser's view of the
document) and validation results are plain Diagnostic values.

Author: PodValid Team
Date: 2026-10-16
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class NodeKind(Enum):
    """The three shapes a parsed YAML fragment can take."""
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class Node:
    """
    A generic, read-only view of one parsed YAML fragment.

    Only the fields matching ``kind`` are populated: scalars carry ``value``
    and ``tag``, sequences carry ``items`` and mappings carry ``pairs``.
    """
    kind: NodeKind
    line: int = 0                 # 1-based source line, 0 when unknown
    value: str = ""               # Raw scalar text (empty for null)
    tag: str = ""                 # Short resolved tag: 'int', 'str', 'null'...
    items: Tuple["Node", ...] = ()
    pairs: Tuple[Tuple["Node", "Node"], ...] = ()

    @classmethod
    def scalar(cls, value: str, line: int = 0, tag: str = "str") -> "Node":
        return cls(kind=NodeKind.SCALAR, line=line, value=value, tag=tag)

    @classmethod
    def mapping(cls, pairs, line: int = 0) -> "Node":
        return cls(kind=NodeKind.MAPPING, line=line, pairs=tuple(pairs))

    @classmethod
    def sequence(cls, items, line: int = 0) -> "Node":
        return cls(kind=NodeKind.SEQUENCE, line=line, items=tuple(items))

    @property
    def is_scalar(self) -> bool:
        return self.kind is NodeKind.SCALAR

    @property
    def is_mapping(self) -> bool:
        return self.kind is NodeKind.MAPPING

    @property
    def is_sequence(self) -> bool:
        return self.kind is NodeKind.SEQUENCE

    @property
    def is_int_literal(self) -> bool:
        """True for scalars the YAML resolver typed as integers (unquoted 2, not '2')."""
        return self.is_scalar and self.tag == "int"


class DiagnosticKind(Enum):
    """Classification of a validation failure."""
    MISSING = "missing"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_FORMAT = "invalid_format"
    UNSUPPORTED = "unsupported"
    OUT_OF_RANGE = "out_of_range"
    EMPTY = "empty"


@dataclass(frozen=True)
class Diagnostic:
    """
    One validation failure.

    ``message`` is fully rendered; ``line`` is 0 for document-level problems
    such as a missing field, where no source position exists.
    """
    line: int
    message: str
    kind: DiagnosticKind
    field: Optional[str] = None

    @property
    def has_line(self) -> bool:
        return self.line > 0
