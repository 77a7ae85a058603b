"""Archive scanning and package reading."""

from .zip_reader import (
    EntryFilter,
    read_zip,
    scan_archive,
)
from .package_reader import (
    VSIXPackage,
    check_consistency,
    read_vsix_package,
)

__all__ = [
    "EntryFilter",
    "read_zip",
    "scan_archive",
    "VSIXPackage",
    "check_consistency",
    "read_vsix_package",
]
