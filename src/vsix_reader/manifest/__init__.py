"""Extension manifest parsing and validation."""

from .validation import ManifestPackage, validate_manifest_for_packaging
from .xml_manifest import Asset, Identity, XMLManifest, parse_xml_manifest

__all__ = [
    "ManifestPackage",
    "validate_manifest_for_packaging",
    "Asset",
    "Identity",
    "XMLManifest",
    "parse_xml_manifest",
]
