"""Path utilities for in-package entry names."""

import unicodedata
from pathlib import Path, PurePosixPath

# Root directory of the extension payload inside a VSIX package
EXTENSION_ROOT = "extension"


def normalize_path(path: Path | str) -> str:
    """
    Normalize a path for consistent comparison against archive entry names.

    Applies:
    - Unicode NFC normalization (canonical composition)
    - Forward slash conversion, since zip entry names always use forward slashes

    Args:
        path: Path object or string to normalize

    Returns:
        Normalized path string with forward slashes and NFC Unicode normalization

    Examples:
        >>> normalize_path("café/résumé.txt")
        'café/résumé.txt'
        >>> normalize_path(r"images\\icon.png")
        'images/icon.png'
    """
    path_str = str(path)
    normalized = unicodedata.normalize('NFC', path_str)
    normalized = normalized.replace('\\', '/')
    return normalized


def file_path_to_vsix_path(file_path: Path | str) -> str:
    """Map a file name in the extension folder to its entry name in the package.

    Examples:
        >>> file_path_to_vsix_path("package.json")
        'extension/package.json'
    """
    relative = normalize_path(file_path).lstrip('/')
    return str(PurePosixPath(EXTENSION_ROOT) / relative)
