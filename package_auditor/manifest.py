"""Project manifest discovery and package reference extraction."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from package_auditor.constants import DEFAULT_MANIFEST_PATTERN
from package_auditor.exceptions import ManifestError, ScanError
from package_auditor.models.reference import PackageReference

logger = logging.getLogger(__name__)

PACKAGE_REFERENCE_ELEMENT = "PackageReference"
INCLUDE_ATTRIBUTE = "Include"
VERSION_ATTRIBUTE = "Version"


def list_manifests(
    root: Path, pattern: str = DEFAULT_MANIFEST_PATTERN
) -> list[Path]:
    """Find all manifest files below a solution directory.

    Args:
        root: Solution root directory, searched recursively.
        pattern: Filename glob, e.g. "*.csproj" or "*Domain.csproj".

    Returns:
        Matching files sorted by path for deterministic rule output.

    Raises:
        ScanError: If root is not a directory.
    """
    if not root.is_dir():
        raise ScanError(f"Solution directory '{root}' does not exist")

    manifests = sorted(path for path in root.rglob(pattern) if path.is_file())
    logger.debug("Found %d manifest(s) matching %s in %s", len(manifests), pattern, root)
    return manifests


def project_name(manifest_path: Path) -> str:
    """Project label for a manifest: its filename without the extension."""
    return manifest_path.stem


def list_references(manifest_path: Path) -> list[PackageReference]:
    """Extract package references from a manifest file.

    Every element named PackageReference is returned in document order.
    Missing Include/Version attributes become empty strings.

    Args:
        manifest_path: Path to the project manifest.

    Returns:
        List of PackageReference objects.

    Raises:
        ManifestError: If the file cannot be read or is not well-formed XML.
    """
    try:
        tree = ET.parse(manifest_path)
    except ET.ParseError as e:
        raise ManifestError(f"Malformed manifest '{manifest_path}': {e}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read manifest '{manifest_path}': {e}") from e

    project = project_name(manifest_path)
    references = [
        PackageReference(
            project=project,
            package_id=element.get(INCLUDE_ATTRIBUTE, ""),
            version=element.get(VERSION_ATTRIBUTE, ""),
        )
        for element in tree.getroot().iter(PACKAGE_REFERENCE_ELEMENT)
    ]
    logger.debug("%s declares %d package reference(s)", project, len(references))
    return references


def collect_references(
    root: Path, pattern: str = DEFAULT_MANIFEST_PATTERN
) -> list[PackageReference]:
    """Extract references from every manifest matching a pattern.

    Order is manifest order, then document order within each manifest.
    """
    references: list[PackageReference] = []
    for manifest in list_manifests(root, pattern):
        references.extend(list_references(manifest))
    return references
