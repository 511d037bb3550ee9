"""Scaffolding-specific exceptions.

Input errors raise immediately. Remote acquisition errors are captured
per attempt and only ever surface as a fallback reason.
"""


class ScaffoldError(Exception):
    """Base exception for scaffolding operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (file paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InvalidSourceError(ScaffoldError):
    """Example source string is malformed."""


class InvalidRetryPolicyError(ScaffoldError):
    """Retry attempts or delay are out of range."""


class ExampleSourceError(ScaffoldError):
    """A single download/extract/copy attempt failed."""


class ArchiveExtractionError(ExampleSourceError):
    """Remote archive could not be extracted."""


class TemplateConflictError(ScaffoldError):
    """Base template destination already exists in the target."""


class TemplateInstallError(ScaffoldError):
    """Template or overlay source is missing."""


class InvalidSelectionError(ScaffoldError):
    """Unknown example selection or package manager."""


class InvalidProjectTargetError(ScaffoldError):
    """Project name or target directory is not usable."""


class UnresolvedPlaceholderError(ScaffoldError):
    """Generated output still contains placeholder tokens."""
