"""CLI command for showing the manifests of a VSIX package."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import ConfigLoader, VSIXReaderConfig
from ..errors import ConfigurationError
from ..logging_config import log_context, setup_logging
from ..processing.package_reader import VSIXPackage, check_consistency, read_vsix_package

EXIT_CODES_HELP = """exit codes:
  0  manifests read and consistent
  1  package could not be read, or the manifests disagree
  2  configuration could not be loaded
"""


def build_summary(package: VSIXPackage, mismatches: List[str]) -> Dict[str, Any]:
    """Build the JSON-serializable summary printed by ``--json``."""
    return {
        "manifest": package.manifest.to_dict(),
        "xml_manifest": asdict(package.xml_manifest),
        "mismatches": mismatches,
    }


def print_human(package: VSIXPackage, mismatches: List[str]) -> None:
    manifest = package.manifest
    xml_manifest = package.xml_manifest

    print(f"Name:         {manifest.name}")
    print(f"Display name: {manifest.display_name or '-'}")
    print(f"Publisher:    {manifest.publisher or '-'}")
    print(f"Version:      {manifest.version}")
    print(f"VS Code:      {manifest.engines.get('vscode')}")
    if xml_manifest.identity.target_platform:
        print(f"Target:       {xml_manifest.identity.target_platform}")
    if xml_manifest.categories:
        print(f"Categories:   {', '.join(xml_manifest.categories)}")
    if xml_manifest.tags:
        print(f"Tags:         {', '.join(xml_manifest.tags)}")
    print(f"Assets:       {len(xml_manifest.assets)}")

    for mismatch in mismatches:
        print(f"MISMATCH: {mismatch}")


def show_command(
    config: VSIXReaderConfig,
    package_path: Path,
    as_json: bool = False,
    check_override: Optional[bool] = None,
) -> int:
    """Read a package and print its manifests.

    Args:
        config: Configuration object
        package_path: Path to the .vsix file
        as_json: Print a JSON summary instead of text
        check_override: Optional override for the consistency check

    Returns:
        Exit code (0 for success)
    """
    logger = logging.getLogger(__package__ or __name__)

    check = check_override if check_override is not None else config.reader.check_consistency

    with log_context(package=str(package_path)):
        try:
            package = asyncio.run(
                read_vsix_package(package_path, chunk_size=config.reader.chunk_size)
            )
        except Exception as e:
            logger.error(f"Failed to read {package_path}: {e}")
            return 1

        mismatches = check_consistency(package) if check else []

    if as_json:
        print(json.dumps(build_summary(package, mismatches), indent=2, sort_keys=True))
    else:
        print_human(package, mismatches)

    return 1 if mismatches else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vsix-reader",
        description="Show and validate the manifests of a VS Code extension package",
        epilog=EXIT_CODES_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "package",
        type=Path,
        help="Path to the .vsix file"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit a JSON summary instead of human-readable text"
    )
    parser.add_argument(
        "--no-consistency-check",
        action="store_true",
        help="Skip comparing package.json against extension.vsixmanifest"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (replaces the shipped defaults.toml)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the show command."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader().load(defaults_path=args.config)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.logging)

    return show_command(
        config=config,
        package_path=args.package,
        as_json=args.json,
        check_override=False if args.no_consistency_check else None,
    )


if __name__ == "__main__":
    sys.exit(main())
