#!/usr/bin/env python3
"""
PODVALID VALIDATOR - The Judge
------------------------------
The single entry point of the validation core. Walks a parsed Pod manifest
top-down in schema field order and returns every rule violation found.

The validator performs no I/O and keeps no state between calls: the same
tree always yields the same diagnostics, and separate calls may run in
parallel without coordination.

Author: PodValid Team
Date: 2026-10-16
"""

import logging
from typing import List, Optional

from podvalid.core import diagnostics as diag
from podvalid.core.models import Diagnostic, Node
from podvalid.validator.fields import validate_document

# Standardized logging for audit trails
logger = logging.getLogger("podvalid.validator")


class PodValidator:
    """
    Enforces the fixed Pod schema on a parsed manifest tree.
    Diagnostics are accumulated, never raised: a malformed document always
    produces a complete list rather than stopping at the first problem.
    """

    def validate(self, root: Optional[Node]) -> List[Diagnostic]:
        """
        Validates one document.

        Args:
            root: The document's root node, or None for an empty document.

        Returns:
            Diagnostics in document field order; empty when the manifest is valid.
        """
        if root is None:
            logger.debug("Empty document, nothing to validate")
            return [diag.empty_document()]

        diagnostics = validate_document(root)
        logger.debug("Validation finished with %d diagnostic(s)", len(diagnostics))
        return diagnostics

    def is_valid(self, root: Optional[Node]) -> bool:
        return not self.validate(root)


def validate(root: Optional[Node]) -> List[Diagnostic]:
    """Module-level shortcut for PodValidator().validate(root)."""
    return PodValidator().validate(root)
