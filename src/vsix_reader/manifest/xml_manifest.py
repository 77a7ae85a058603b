"""Parsing of extension.vsixmanifest documents."""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import XMLManifestError

logger = logging.getLogger(__name__)

ROOT_TAG = "PackageManifest"


@dataclass
class Identity:
    """Identity element of the package metadata."""
    id: str
    version: str
    publisher: str
    language: Optional[str] = None
    target_platform: Optional[str] = None


@dataclass
class Asset:
    """A file the package exposes to the marketplace."""
    type: str
    path: str
    addressable: bool = False


@dataclass
class XMLManifest:
    """Parsed extension.vsixmanifest."""
    version: Optional[str]
    identity: Identity
    display_name: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    gallery_flags: List[str] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)  # Property Id -> Value
    installation_targets: List[str] = field(default_factory=list)
    assets: List[Asset] = field(default_factory=list)


def _local_name(tag: str) -> str:
    """Strip the '{namespace}' prefix ElementTree puts on qualified tags."""
    return tag.rsplit('}', 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _children(element: Optional[ET.Element], name: str) -> List[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local_name(child.tag) == name]


def _text(element: Optional[ET.Element]) -> Optional[str]:
    if element is None or element.text is None:
        return None
    return element.text.strip()


def _split(value: Optional[str], sep: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(sep) if part.strip()]


def _parse_identity(metadata: ET.Element) -> Identity:
    identity = _child(metadata, "Identity")
    if identity is None:
        raise XMLManifestError("VSIX manifest has no Metadata/Identity element")

    return Identity(
        id=identity.get("Id", ""),
        version=identity.get("Version", ""),
        publisher=identity.get("Publisher", ""),
        language=identity.get("Language"),
        target_platform=identity.get("TargetPlatform"),
    )


async def parse_xml_manifest(text: str) -> XMLManifest:
    """Parse the text of an extension.vsixmanifest.

    Raises:
        xml.etree.ElementTree.ParseError: If the text is not well-formed XML
        XMLManifestError: If the document is not a package manifest
    """
    root = ET.fromstring(text)

    if _local_name(root.tag) != ROOT_TAG:
        raise XMLManifestError(
            f"Unexpected root element '{_local_name(root.tag)}', expected '{ROOT_TAG}'"
        )

    metadata = _child(root, "Metadata")
    if metadata is None:
        raise XMLManifestError("VSIX manifest has no Metadata element")

    properties: Dict[str, str] = {}
    for prop in _children(_child(metadata, "Properties"), "Property"):
        prop_id = prop.get("Id")
        if prop_id:
            properties[prop_id] = prop.get("Value", "")

    assets = [
        Asset(
            type=asset.get("Type", ""),
            path=asset.get("Path", ""),
            addressable=asset.get("Addressable", "").lower() == "true",
        )
        for asset in _children(_child(root, "Assets"), "Asset")
    ]

    manifest = XMLManifest(
        version=root.get("Version"),
        identity=_parse_identity(metadata),
        display_name=_text(_child(metadata, "DisplayName")),
        description=_text(_child(metadata, "Description")),
        tags=_split(_text(_child(metadata, "Tags")), ","),
        categories=_split(_text(_child(metadata, "Categories")), ","),
        gallery_flags=_split(_text(_child(metadata, "GalleryFlags")), None),
        properties=properties,
        installation_targets=[
            target.get("Id", "")
            for target in _children(_child(root, "Installation"), "InstallationTarget")
        ],
        assets=assets,
    )

    logger.debug(
        f"Parsed VSIX manifest for {manifest.identity.publisher}.{manifest.identity.id} "
        f"{manifest.identity.version}"
    )
    return manifest
