#!/usr/bin/env python3
"""
PODVALID LEAF CHECKS
--------------------
Stateless primitive checks shared by every field validator. Each takes a
node plus its constraint and returns a Diagnostic, or None when the node
satisfies the constraint.

Author: PodValid Team
Date: 2026-10-16
"""

from typing import Collection, Optional, Pattern

from podvalid.core import diagnostics as diag
from podvalid.core.models import Diagnostic, Node
from podvalid.validator.schema import INT_MAX, INT_MIN, INT_RE


def parse_int(text: str) -> Optional[int]:
    """
    Parses an integer-valued string: optional sign and ASCII digits only.

    Whitespace, underscores and values that do not fit in 64 bits are
    rejected, unlike Python's own int().
    """
    if not INT_RE.fullmatch(text):
        return None
    value = int(text)
    if value < INT_MIN or value > INT_MAX:
        return None
    return value


def require_string(node: Node, field: str) -> Optional[Diagnostic]:
    if not node.is_scalar:
        return diag.type_mismatch(field, "string", node.line)
    return None


def require_int(node: Node, field: str) -> Optional[Diagnostic]:
    if not node.is_scalar or parse_int(node.value) is None:
        return diag.type_mismatch(field, "int", node.line)
    return None


def require_int_literal(node: Node, field: str) -> Optional[Diagnostic]:
    """Stricter than require_int: the scalar must be an unquoted YAML integer."""
    if not node.is_int_literal:
        return diag.type_mismatch(field, "int", node.line)
    return None


def require_object(node: Node, field: str) -> Optional[Diagnostic]:
    if not node.is_mapping:
        return diag.type_mismatch(field, "object", node.line)
    return None


def require_array(node: Node, field: str) -> Optional[Diagnostic]:
    if not node.is_sequence:
        return diag.type_mismatch(field, "array", node.line)
    return None


def match_pattern(node: Node, field: str, pattern: Pattern) -> Optional[Diagnostic]:
    if not pattern.fullmatch(node.value):
        return diag.invalid_format(field, node.value, node.line)
    return None


def match_set(node: Node, field: str, allowed: Collection[str]) -> Optional[Diagnostic]:
    if node.value not in allowed:
        return diag.unsupported(field, node.value, node.line)
    return None


def in_range(node: Node, field: str, value: int, lo: int, hi: int) -> Optional[Diagnostic]:
    """Inclusive bound check on an already-parsed integer."""
    if value < lo or value > hi:
        return diag.out_of_range(field, node.line)
    return None
