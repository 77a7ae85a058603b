"""Shared fixtures for building VSIX packages on disk."""

import json
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest


VSIXMANIFEST_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<PackageManifest Version="2.0.0" xmlns="http://schemas.microsoft.com/developer/vsx-schema/2011" xmlns:d="http://schemas.microsoft.com/developer/vsx-schema-design/2011">
  <Metadata>
    <Identity Language="en-US" Id="{name}" Version="{version}" Publisher="{publisher}" />
    <DisplayName>Hello World</DisplayName>
    <Description xml:space="preserve">Says hello</Description>
    <Tags>greeting,hello, demo</Tags>
    <Categories>Other</Categories>
    <GalleryFlags>Public Preview</GalleryFlags>
    <Properties>
      <Property Id="Microsoft.VisualStudio.Code.Engine" Value="{engine}" />
      <Property Id="Microsoft.VisualStudio.Code.ExtensionKind" Value="workspace" />
    </Properties>
  </Metadata>
  <Installation>
    <InstallationTarget Id="Microsoft.VisualStudio.Code" />
  </Installation>
  <Dependencies />
  <Assets>
    <Asset Type="Microsoft.VisualStudio.Code.Manifest" Path="extension/package.json" Addressable="true" />
    <Asset Type="Microsoft.VisualStudio.Services.Content.Details" Path="extension/README.md" Addressable="true" />
  </Assets>
</PackageManifest>
"""


@pytest.fixture
def package_json() -> Dict[str, Any]:
    """A package.json that passes packaging validation."""
    return {
        "name": "hello-world",
        "displayName": "Hello World",
        "description": "Says hello",
        "version": "1.2.3",
        "publisher": "acme",
        "engines": {"vscode": "^1.80.0"},
        "main": "./out/extension.js",
        "activationEvents": ["onCommand:hello.world"],
        "contributes": {"commands": [{"command": "hello.world", "title": "Hello"}]},
    }


@pytest.fixture
def vsixmanifest() -> str:
    """An extension.vsixmanifest matching the package_json fixture."""
    return VSIXMANIFEST_TEMPLATE.format(
        name="hello-world", version="1.2.3", publisher="acme", engine="^1.80.0"
    )


@pytest.fixture
def make_vsix(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a zip archive from a mapping of entry name to content."""

    def _make(entries: Dict[str, Any], name: str = "test.vsix") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            for entry_name, content in entries.items():
                if isinstance(content, (dict, list)):
                    content = json.dumps(content)
                zf.writestr(entry_name, content)
        return path

    return _make


@pytest.fixture
def valid_vsix(make_vsix, package_json, vsixmanifest) -> Path:
    """A well-formed package with both manifests and some payload."""
    return make_vsix({
        "[Content_Types].xml": "<Types />",
        "extension.vsixmanifest": vsixmanifest,
        "extension/package.json": package_json,
        "extension/README.md": "# Hello",
        "extension/out/extension.js": "exports.activate = () => {};",
    })
