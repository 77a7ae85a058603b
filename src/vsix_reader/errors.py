"""Application-wide error definitions."""

from typing import Any, Dict


class VSIXReaderError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(VSIXReaderError):
    """Configuration is invalid or missing."""
    pass


class ManifestError(VSIXReaderError):
    """Manifest processing failed."""
    pass


class ManifestNotFoundError(ManifestError):
    """A required manifest entry is missing from the package."""
    pass


class ManifestValidationError(ManifestError):
    """Manifest does not satisfy packaging rules."""
    pass


class InvalidManifestError(ManifestError):
    """Package contains a manifest that failed validation."""
    pass


class XMLManifestError(ManifestError):
    """XML document is not a package manifest."""
    pass
