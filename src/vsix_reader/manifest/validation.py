"""Packaging rules for the extension manifest (package.json)."""

import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import ManifestValidationError

logger = logging.getLogger(__name__)

# Extension and publisher identifiers
NAME_PATTERN = re.compile(r'^[a-z0-9][a-z0-9\-]*$', re.IGNORECASE)

# "*", or an optional ^ / >= followed by major.minor.patch where each part may be "x"
ENGINE_PATTERN = re.compile(r'^\*$|^(\^|>=)?((\d+)|x)\.((\d+)|x)\.((\d+)|x)(\-.*)?$')

SEMVER_PATTERN = re.compile(
    r'^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)'
    r'(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?'
    r'(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$'
)


class ManifestPackage(BaseModel):
    """Extension manifest that passed packaging validation.

    Unknown fields are kept as extras, so ``to_dict()`` returns the original
    document (minus explicit nulls).
    """

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    name: str
    version: str
    engines: Dict[str, str]
    publisher: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")
    description: Optional[str] = None
    main: Optional[str] = None
    browser: Optional[str] = None
    activation_events: Optional[List[str]] = Field(default=None, alias="activationEvents")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def validate_engine_compatibility(version: Any) -> None:
    if not isinstance(version, str) or not ENGINE_PATTERN.match(version):
        raise ManifestValidationError(
            f"Invalid VS Code engine compatibility version '{version}'", field="engines.vscode"
        )


def validate_extension_name(name: Any) -> None:
    if not isinstance(name, str) or not NAME_PATTERN.match(name):
        raise ManifestValidationError(f"Invalid extension name '{name}'", field="name")


def validate_publisher(publisher: Any) -> None:
    if not isinstance(publisher, str) or not NAME_PATTERN.match(publisher):
        raise ManifestValidationError(f"Invalid publisher name '{publisher}'", field="publisher")


def validate_version(version: Any) -> None:
    if not isinstance(version, str) or not SEMVER_PATTERN.match(version.strip()):
        raise ManifestValidationError(f"Invalid extension version '{version}'", field="version")


def validate_manifest_for_packaging(raw: Any) -> ManifestPackage:
    """Check an unverified manifest against packaging rules.

    Args:
        raw: Parsed package.json content

    Returns:
        The validated manifest

    Raises:
        ManifestValidationError: On the first rule the manifest breaks
    """
    if not isinstance(raw, dict):
        raise ManifestValidationError("Manifest must be a JSON object")

    engines = raw.get("engines")
    if not engines:
        raise ManifestValidationError("Manifest missing field: engines", field="engines")
    if not isinstance(engines, dict) or not engines.get("vscode"):
        raise ManifestValidationError(
            "Manifest missing field: engines.vscode", field="engines.vscode"
        )
    validate_engine_compatibility(engines["vscode"])

    if not raw.get("name"):
        raise ManifestValidationError("Manifest missing field: name", field="name")
    validate_extension_name(raw["name"])

    if not raw.get("version"):
        raise ManifestValidationError("Manifest missing field: version", field="version")
    validate_version(raw["version"])

    if raw.get("publisher"):
        validate_publisher(raw["publisher"])
    else:
        logger.warning(f"Manifest for '{raw['name']}' has no publisher")

    if raw.get("activationEvents") and not raw.get("main") and not raw.get("browser"):
        raise ManifestValidationError(
            "Manifest needs either a 'main' or 'browser' property, "
            "given it has a 'activationEvents' property.",
            field="activationEvents",
        )

    try:
        return ManifestPackage.model_validate(raw)
    except PydanticValidationError as e:
        raise ManifestValidationError(f"Manifest has invalid field types: {e}") from e
