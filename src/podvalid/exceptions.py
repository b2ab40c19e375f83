"""Custom exceptions for the PodValid I/O stages.

Validation problems are never exceptions; these cover only reading and
parsing a manifest before it reaches the validator.
"""


class PodValidError(Exception):
    """Base exception for podvalid errors."""
    pass


class ManifestLoadError(PodValidError):
    """A manifest could not be turned into a node tree."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if path else str(reason))


class ManifestReadError(ManifestLoadError):
    """The manifest file could not be read from disk."""
    pass


class ManifestParseError(ManifestLoadError):
    """The manifest text is not well-formed YAML."""
    pass
