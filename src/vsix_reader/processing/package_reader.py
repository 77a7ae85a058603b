"""Reading and validating the manifests of a VSIX package."""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..errors import InvalidManifestError, ManifestNotFoundError, ManifestValidationError
from ..manifest.validation import ManifestPackage, validate_manifest_for_packaging
from ..manifest.xml_manifest import XMLManifest, parse_xml_manifest
from ..util import file_path_to_vsix_path
from .zip_reader import READ_CHUNK_SIZE, read_zip

logger = logging.getLogger(__name__)

XML_MANIFEST_NAME = "extension.vsixmanifest"

# Entries read from the package; matched against lowercased names
MANIFEST_ENTRY_PATTERN = re.compile(
    r'^extension/package\.json$|^extension\.vsixmanifest$', re.IGNORECASE
)

ENGINE_PROPERTY = "Microsoft.VisualStudio.Code.Engine"


@dataclass
class VSIXPackage:
    """Manifests read from a VSIX package."""
    manifest: ManifestPackage
    xml_manifest: XMLManifest


def is_manifest_entry(name: str) -> bool:
    return MANIFEST_ENTRY_PATTERN.match(name) is not None


async def read_vsix_package(
    package_path: Path | str,
    chunk_size: int = READ_CHUNK_SIZE,
) -> VSIXPackage:
    """Read, parse and validate both manifests of a VSIX package.

    Args:
        package_path: Path to the .vsix file
        chunk_size: Read size when buffering archive entries

    Returns:
        The validated package.json and the parsed extension.vsixmanifest

    Raises:
        ManifestNotFoundError: If either manifest entry is missing
        InvalidManifestError: If package.json fails packaging validation
        json.JSONDecodeError: If package.json is not valid JSON
        xml.etree.ElementTree.ParseError: If extension.vsixmanifest is not valid XML
        OSError, zipfile.BadZipFile: If the package cannot be opened or read
    """
    package_path = Path(package_path)
    logger.info(f"Reading VSIX package {package_path}")

    entries = await read_zip(package_path, is_manifest_entry, chunk_size)

    raw_manifest = entries.get(file_path_to_vsix_path("package.json"))
    if raw_manifest is None:
        raise ManifestNotFoundError("Manifest not found", package=str(package_path))

    raw_xml_manifest = entries.get(XML_MANIFEST_NAME)
    if raw_xml_manifest is None:
        raise ManifestNotFoundError("VSIX manifest not found", package=str(package_path))

    unverified = json.loads(raw_manifest.decode("utf-8", errors="replace"))

    try:
        manifest = validate_manifest_for_packaging(unverified)
    except ManifestValidationError as e:
        raise InvalidManifestError(
            f"Invalid extension VSIX manifest: {e}", package=str(package_path)
        ) from e

    xml_manifest = await parse_xml_manifest(raw_xml_manifest.decode("utf-8", errors="replace"))

    logger.info(f"Read {manifest.name} {manifest.version} from {package_path.name}")
    return VSIXPackage(manifest=manifest, xml_manifest=xml_manifest)


def check_consistency(package: VSIXPackage) -> List[str]:
    """Compare package.json against the identity in extension.vsixmanifest.

    Returns:
        One description per mismatching field, empty if both agree
    """
    manifest = package.manifest
    identity = package.xml_manifest.identity
    mismatches: List[str] = []

    pairs = [
        ("name", manifest.name, "Identity Id", identity.id),
        ("version", manifest.version, "Identity Version", identity.version),
    ]
    if manifest.publisher is not None:
        pairs.append(("publisher", manifest.publisher, "Identity Publisher", identity.publisher))

    xml_engine = package.xml_manifest.properties.get(ENGINE_PROPERTY)
    if xml_engine is not None:
        pairs.append(("engines.vscode", manifest.engines.get("vscode"), ENGINE_PROPERTY, xml_engine))

    for json_field, json_value, xml_field, xml_value in pairs:
        if json_value != xml_value:
            mismatches.append(
                f"package.json {json_field} '{json_value}' does not match "
                f"{xml_field} '{xml_value}'"
            )

    for mismatch in mismatches:
        logger.warning(mismatch)

    return mismatches
