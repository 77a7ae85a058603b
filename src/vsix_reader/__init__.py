"""Read and validate the manifests of VS Code extension packages (.vsix)."""

from .errors import (
    VSIXReaderError, ConfigurationError, ManifestError, ManifestNotFoundError,
    ManifestValidationError, InvalidManifestError, XMLManifestError
)
from .processing import VSIXPackage, check_consistency, read_vsix_package, read_zip, scan_archive

__version__ = "0.1.0"

__all__ = [
    'VSIXReaderError',
    'ConfigurationError',
    'ManifestError',
    'ManifestNotFoundError',
    'ManifestValidationError',
    'InvalidManifestError',
    'XMLManifestError',
    'VSIXPackage',
    'check_consistency',
    'read_vsix_package',
    'read_zip',
    'scan_archive',
]
